"""Per-pull-request enrichment: age, reviewer match, comment and approval counts.

Comment and approval counts need one extra request each. Both requests for
every pull request of a repository are submitted to the request pool up
front and joined afterwards, so a repository with N pull requests costs
2N concurrent requests, not 2N sequential ones.

The counts are best-effort annotations: if either request fails the count
degrades to 0 and the pull request is still returned with every other field
populated.
"""

import logging
from concurrent.futures import Executor, Future
from datetime import datetime, timezone
from typing import Optional, Sequence

from fetchers.errors import PRViewerError
from fetchers.github import GitHubClient
from models.data_models import PullRequest, RawPullRequest
from utils.age import calculate_age

logger = logging.getLogger(__name__)

APPROVED = "APPROVED"

# 100 per page, so counts are exact up to 500 comments or reviews
MAX_COUNT_PAGES = 5


def count_comments(client: GitHubClient, org: str, repo: str, pr_number: int) -> int:
    """Number of conversation comments on a pull request."""
    return len(client.get_all(client.comments_url(org, repo, pr_number), max_pages=MAX_COUNT_PAGES))


def count_approvals(client: GitHubClient, org: str, repo: str, pr_number: int) -> int:
    """Number of reviews on a pull request whose state is APPROVED."""
    reviews = client.get_all(client.reviews_url(org, repo, pr_number), max_pages=MAX_COUNT_PAGES)
    return sum(
        1 for review in reviews
        if isinstance(review, dict) and review.get("state") == APPROVED
    )


def is_reviewer_match(raw: RawPullRequest, caller_identity: Optional[str]) -> bool:
    """True if the caller is one of the requested reviewers (exact, case-sensitive)."""
    if not caller_identity:
        return False
    return caller_identity in raw.reviewer_logins


class PullRequestEnricher:
    """Turns raw pull requests into enriched PullRequest values.

    Args:
        client: Authenticated GitHub client
        executor: Pool the comment/review requests are submitted to
    """

    def __init__(self, client: GitHubClient, executor: Executor):
        self.client = client
        self.executor = executor

    def _settle(self, future: Future, what: str, org: str, repo: str, pr_number: int) -> int:
        try:
            return future.result()
        except PRViewerError as e:
            logger.warning(f"Could not get {what} for {org}/{repo}#{pr_number}, using 0: {e}")
            return 0

    def enrich_all(
        self,
        raws: Sequence[RawPullRequest],
        org: str,
        repo: str,
        caller_identity: Optional[str],
        now: Optional[datetime] = None,
    ) -> list[PullRequest]:
        """Enrich pull requests of one repository, preserving input order."""
        if now is None:
            now = datetime.now(timezone.utc)

        pending = [
            (
                raw,
                self.executor.submit(count_comments, self.client, org, repo, raw.number),
                self.executor.submit(count_approvals, self.client, org, repo, raw.number),
            )
            for raw in raws
        ]

        enriched = []
        for raw, comments_future, approvals_future in pending:
            enriched.append(
                PullRequest(
                    number=raw.number,
                    title=raw.title,
                    created_at=raw.created_at,
                    age=calculate_age(raw.created_at, now),
                    state=raw.state,
                    url=raw.html_url,
                    author=raw.user.login,
                    requested_reviewers=tuple(raw.reviewer_logins),
                    is_reviewer_match=is_reviewer_match(raw, caller_identity),
                    is_draft=raw.draft,
                    comment_count=self._settle(comments_future, "comments", org, repo, raw.number),
                    approval_count=self._settle(approvals_future, "approvals", org, repo, raw.number),
                )
            )
        return enriched

    def enrich(
        self,
        raw: RawPullRequest,
        org: str,
        repo: str,
        caller_identity: Optional[str],
        now: Optional[datetime] = None,
    ) -> PullRequest:
        """Enrich a single pull request."""
        return self.enrich_all([raw], org, repo, caller_identity, now)[0]
