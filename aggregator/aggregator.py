"""Aggregate open pull requests across the selected repositories.

Every selected repository is an independent branch running in the repository
pool. A branch always ends in one of three states, and each of them yields a
RepositoryPullRequests:
- succeeded: 0..n enriched pull requests
- failed: GitHub returned an error object, carried in ``error``
- degraded: a transport failure, reported as an empty list

Branches never share state; results are joined by index so the output is
aligned with the requested keys no matter which branch finishes first.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Iterable, Optional

from aggregator.enricher import PullRequestEnricher
from fetchers.errors import AggregationTimeout, UpstreamError
from fetchers.github import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, GitHubClient
from fetchers.pulls import fetch_open_pull_requests
from models.data_models import RepositoryPullRequests
from utils.selection import split_repo_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8
DEFAULT_MAX_REQUEST_WORKERS = 16


class RepositoryAggregator:
    """Fan out pull request fetching over repositories and fan the results back in.

    Args:
        client: Authenticated GitHub client
        max_workers: Repositories processed concurrently
        max_request_workers: Comment/review requests in flight concurrently
    """

    def __init__(
        self,
        client: GitHubClient,
        max_workers: int = DEFAULT_MAX_WORKERS,
        max_request_workers: int = DEFAULT_MAX_REQUEST_WORKERS,
    ):
        self.client = client
        self.max_workers = max_workers
        self.max_request_workers = max_request_workers

    def _aggregate_repository(
        self,
        key: str,
        enricher: PullRequestEnricher,
        caller_identity: Optional[str],
        now: datetime,
    ) -> RepositoryPullRequests:
        split = split_repo_key(key)
        if split is None:
            logger.warning(f"Ignoring malformed repository key: {key!r}")
            org, _, repo = key.partition("/")
            return RepositoryPullRequests(org_name=org, repo_name=repo)

        org, repo = split
        try:
            raws = fetch_open_pull_requests(self.client, org, repo)
            pulls = enricher.enrich_all(raws, org, repo, caller_identity, now)
        except UpstreamError as e:
            logger.error(f"GitHub returned an error for {org}/{repo}: {e.message}")
            return RepositoryPullRequests(org_name=org, repo_name=repo, error=e.message)
        except Exception as e:
            # Keep the failure inside this repository's result
            logger.exception(f"Failed to aggregate pull requests for {org}/{repo}")
            return RepositoryPullRequests(org_name=org, repo_name=repo, error=str(e))

        logger.debug(f"{org}/{repo}: {len(pulls)} open PRs")
        return RepositoryPullRequests(org_name=org, repo_name=repo, pull_requests=pulls)

    def aggregate(
        self,
        selected_repos: Iterable[str],
        caller_identity: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> list[RepositoryPullRequests]:
        """Fetch and enrich open pull requests for each selected repository.

        Args:
            selected_repos: "org/repo" keys, in display order
            caller_identity: Login compared against requested reviewers
            timeout: Deadline in seconds for the whole call (default: none)

        Returns:
            One RepositoryPullRequests per key, in the same order as the keys.
            Per-repository failures are reported inside the results, never raised.

        Raises:
            AggregationTimeout: timeout elapsed before every repository settled
        """
        keys = list(selected_repos)
        if not keys:
            return []

        now = datetime.now(timezone.utc)
        repo_pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="repo")
        request_pool = ThreadPoolExecutor(max_workers=self.max_request_workers, thread_name_prefix="pr-request")
        enricher = PullRequestEnricher(self.client, request_pool)
        timed_out = False

        try:
            futures = [
                repo_pool.submit(self._aggregate_repository, key, enricher, caller_identity, now)
                for key in keys
            ]
            _, not_done = wait(futures, timeout=timeout)
            if not_done:
                timed_out = True
                raise AggregationTimeout(
                    f"{len(not_done)} of {len(keys)} repositories still pending after {timeout}s"
                )
            results = [future.result() for future in futures]
        finally:
            repo_pool.shutdown(wait=not timed_out, cancel_futures=timed_out)
            request_pool.shutdown(wait=not timed_out, cancel_futures=timed_out)

        failed = sum(1 for result in results if result.error)
        total = sum(len(result.pull_requests) for result in results)
        logger.info(f"Aggregated {total} open PRs from {len(keys)} repositories ({failed} with errors)")
        return results


def aggregate(
    selected_repos: Iterable[str],
    token: str,
    caller_identity: Optional[str] = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
    request_timeout: float = DEFAULT_TIMEOUT,
    max_workers: int = DEFAULT_MAX_WORKERS,
    max_request_workers: int = DEFAULT_MAX_REQUEST_WORKERS,
    timeout: Optional[float] = None,
) -> list[RepositoryPullRequests]:
    """Convenience wrapper: build a client for token and run one aggregation pass."""
    client = GitHubClient(token, base_url=base_url, timeout=request_timeout)
    aggregator = RepositoryAggregator(
        client,
        max_workers=max_workers,
        max_request_workers=max_request_workers,
    )
    return aggregator.aggregate(selected_repos, caller_identity, timeout=timeout)
