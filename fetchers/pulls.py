"""Fetch the open pull requests of one repository."""

import logging

from pydantic import ValidationError as ModelValidationError

from fetchers.errors import TransportError, ValidationError
from fetchers.github import GitHubClient
from models.data_models import RawPullRequest

logger = logging.getLogger(__name__)


def fetch_open_pull_requests(client: GitHubClient, org: str, repo: str) -> list[RawPullRequest]:
    """Fetch open pull requests for org/repo (single page, upstream order).

    A transport failure is logged and degrades to an empty list so a network
    blip on one repository does not interrupt a batch. An explicit error body
    from GitHub is NOT swallowed: the caller must be able to tell "no open
    pull requests" from "GitHub said no".

    Args:
        client: Authenticated GitHub client
        org: Repository owner (e.g., "octo")
        repo: Repository name (e.g., "app")

    Returns:
        Raw pull requests in the order GitHub returned them

    Raises:
        ValidationError: org or repo is empty (no request is made)
        UpstreamError: GitHub returned an error object (AuthError for bad credentials)
    """
    if not org:
        raise ValidationError("missing org")
    if not repo:
        raise ValidationError("missing repo")

    url = client.open_pulls_url(org, repo)
    try:
        response = client.get(url)
    except TransportError as e:
        logger.warning(f"Could not get pulls for {org}/{repo}: {e}")
        return []

    pulls = []
    for item in response.data:
        try:
            pulls.append(RawPullRequest.model_validate(item))
        except ModelValidationError as e:
            # Skip the malformed entry, keep the rest
            logger.warning(f"Skipping malformed pull request in {org}/{repo}: {e.error_count()} error(s)")

    logger.debug(f"Fetched {len(pulls)} open PRs from {org}/{repo}")
    return pulls
