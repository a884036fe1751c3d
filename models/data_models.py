"""Data models for GitHub pull request and repository data.

Two families of models live here:
- Raw* models mirror GitHub's REST payloads (snake_case, as GitHub sends them)
- Result models are what the aggregator hands to the presentation layer.
  They are frozen and serialize to camelCase JSON via model_dump(by_alias=True).
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GitHubUser(BaseModel):
    """The subset of a GitHub user object we read."""
    login: str


class RawPullRequest(BaseModel):
    """Open pull request as returned by GET /repos/{org}/{repo}/pulls.

    Unknown fields are ignored so GitHub adding fields never breaks parsing.
    """
    number: int
    title: str
    created_at: datetime
    state: str = "open"
    html_url: str
    user: GitHubUser
    requested_reviewers: list[GitHubUser] = Field(default_factory=list)
    draft: bool = False

    @property
    def reviewer_logins(self) -> list[str]:
        return [reviewer.login for reviewer in self.requested_reviewers]


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PullRequest(_ResultModel):
    """Enriched open pull request.

    age, is_reviewer_match, comment_count and approval_count are derived on
    every aggregation pass. Instances are immutable; enrichment builds a new one.
    """
    number: int
    title: str
    created_at: datetime
    age: str
    state: str
    url: str
    author: str
    requested_reviewers: tuple[str, ...] = ()
    is_reviewer_match: bool = False
    is_draft: bool = False
    comment_count: int = Field(default=0, ge=0)
    approval_count: int = Field(default=0, ge=0)


class RepositoryPullRequests(_ResultModel):
    """Aggregation result for one requested "org/repo" key.

    When error is set the fetch for this repository failed and
    pull_requests is empty.
    """
    org_name: str
    repo_name: str
    pull_requests: tuple[PullRequest, ...] = ()
    error: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.org_name}/{self.repo_name}"


class Repository(_ResultModel):
    """Repository entry used to populate the repository selector."""
    full_name: str
    selected: bool = False
