"""GitHub REST API access: client, repository listing, pull request fetching."""
