"""GitHub REST API client shared by every fetcher.

GitHub signals errors in the body: a list endpoint returns a JSON array on
success and a JSON object with a "message" field on failure (bad credentials,
not found, ...). The client decodes on that shape, never on status code alone,
so "no open pull requests" (empty array) and "GitHub reported an error"
(error object) can never be confused.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests
from requests.structures import CaseInsensitiveDict

from fetchers.errors import AuthError, TransportError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class UpstreamResponse:
    """Successfully decoded list response."""
    data: list[Any]
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int = 200


def parse_next_link(link_header: Optional[str]) -> Optional[str]:
    """Extract the rel="next" URL from a GitHub Link header.

    Example header:
        <https://api.github.com/user/repos?page=2>; rel="next",
        <https://api.github.com/user/repos?page=5>; rel="last"

    Args:
        link_header: Raw Link header value (can be None or empty)

    Returns:
        The next page URL, or None when there is no next page
    """
    if not link_header:
        return None

    for part in link_header.split(","):
        segment = part.strip()
        url_part, _, params = segment.partition(";")
        rels = [p.strip() for p in params.split(";")]
        if 'rel="next"' in rels or "rel=next" in rels:
            url = url_part.strip()
            if url.startswith("<") and url.endswith(">"):
                return url[1:-1]
    return None


def is_bad_credentials(message: str, status_code: Optional[int] = None) -> bool:
    return status_code == 401 or "bad credentials" in message.lower()


class GitHubClient:
    """Authenticated GET + JSON decode against the GitHub REST API.

    One client wraps one credential. It holds no other state, so a single
    instance can be shared by many threads.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, timeout: float = DEFAULT_TIMEOUT):
        """Initialize GitHub API client.

        Args:
            token: GitHub token (OAuth or personal access token)
            base_url: API root (override for GitHub Enterprise)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _repo_path(self, org: str, repo: str) -> str:
        if not org:
            raise ValidationError("missing org")
        if not repo:
            raise ValidationError("missing repo")
        return f"{self.base_url}/repos/{quote(org, safe='')}/{quote(repo, safe='')}"

    def open_pulls_url(self, org: str, repo: str) -> str:
        return f"{self._repo_path(org, repo)}/pulls?state=open"

    def comments_url(self, org: str, repo: str, pr_number: int) -> str:
        # Pull request conversation comments live on the issues endpoint
        return f"{self._repo_path(org, repo)}/issues/{pr_number}/comments?per_page=100"

    def reviews_url(self, org: str, repo: str, pr_number: int) -> str:
        return f"{self._repo_path(org, repo)}/pulls/{pr_number}/reviews?per_page=100"

    def user_repos_url(self) -> str:
        return f"{self.base_url}/user/repos?per_page=100"

    def get(self, url: str, params: Optional[dict] = None) -> UpstreamResponse:
        """GET a list endpoint and decode its body.

        Args:
            url: Full GitHub API URL
            params: Optional query parameters

        Returns:
            UpstreamResponse with the decoded array and response headers

        Raises:
            TransportError: Network failure, timeout, invalid JSON or an
                unexpected body shape
            AuthError: GitHub rejected the credential
            UpstreamError: GitHub returned any other error object
        """
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {url} (status {response.status_code})", url=url
            ) from e

        if isinstance(body, list):
            return UpstreamResponse(
                data=body,
                headers=CaseInsensitiveDict(response.headers),
                status_code=response.status_code,
            )

        if isinstance(body, dict) and "message" in body:
            message = str(body["message"])
            if is_bad_credentials(message, response.status_code):
                raise AuthError(message, status_code=response.status_code, url=url)
            raise UpstreamError(message, status_code=response.status_code, url=url)

        raise TransportError(
            f"Unexpected response shape from {url}: {type(body).__name__}", url=url
        )

    def get_all(self, url: str, max_pages: Optional[int] = None) -> list[Any]:
        """GET a list endpoint and follow rel="next" links, concatenating pages.

        Stops when there is no next link, after max_pages pages, or when a
        next link points back to a page already fetched.

        Args:
            url: First page URL
            max_pages: Maximum number of pages to fetch (default: no limit)

        Returns:
            Items of all fetched pages, in page order

        Raises:
            Same as get(); a failure on any page fails the whole call
        """
        items: list[Any] = []
        visited: set[str] = set()
        next_url: Optional[str] = url

        while next_url:
            if next_url in visited:
                logger.warning(f"Pagination loop detected at {next_url}, stopping")
                break
            visited.add(next_url)

            response = self.get(next_url)
            items.extend(response.data)
            logger.debug(f"Page {len(visited)} of {url}: {len(response.data)} items (total: {len(items)})")

            if max_pages is not None and len(visited) >= max_pages:
                break
            next_url = parse_next_link(response.headers.get("link"))

        return items
