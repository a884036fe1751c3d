"""Repository listing for the repository selector.

Walks GET /user/repos page by page following the Link header. Unlike the
per-repository aggregation, a failure here is all-or-nothing: a selector
with half of the user's repositories is not useful, so a transport error on
any page yields an empty list and an upstream error aborts the listing.
"""

import logging
from typing import Iterable, Optional

from fetchers.errors import AuthError, TransportError
from fetchers.github import GitHubClient
from models.data_models import Repository

logger = logging.getLogger(__name__)


def list_repositories(
    token: str,
    client: Optional[GitHubClient] = None,
    max_pages: Optional[int] = None,
) -> list[Repository]:
    """List every repository visible to the authenticated user.

    Args:
        token: GitHub token
        client: Client to use (default: a new GitHubClient for token)
        max_pages: Stop after this many pages (default: follow all pages)

    Returns:
        Repositories in upstream order, all unselected. Empty if any page
        failed at the transport level.

    Raises:
        AuthError: GitHub reported bad credentials on any page
        UpstreamError: GitHub returned any other error object
    """
    if client is None:
        client = GitHubClient(token)

    try:
        entries = client.get_all(client.user_repos_url(), max_pages=max_pages)
    except TransportError as e:
        logger.warning(f"Repository listing failed, returning no repositories: {e}")
        return []
    except AuthError:
        logger.error("Bad credentials while listing repositories")
        raise

    repositories = [
        Repository(full_name=entry["full_name"])
        for entry in entries
        if isinstance(entry, dict) and entry.get("full_name")
    ]
    logger.info(f"Listed {len(repositories)} repositories")
    return repositories


def mark_selected(repositories: Iterable[Repository], selected: Iterable[str]) -> list[Repository]:
    """Return copies of repositories with selected set from a list of keys."""
    selected_keys = set(selected)
    return [
        repository.model_copy(update={"selected": repository.full_name in selected_keys})
        for repository in repositories
    ]
