#!/usr/bin/env python3
"""
PR Viewer - Main CLI entrypoint

Shows the open pull requests of a set of GitHub repositories in one place,
with age, comment count, approval count, and whether you are a requested
reviewer.

Usage:
    python main.py repos                                   # Repositories visible to your token
    python main.py repos --selected octo/app               # ... marking the selected ones
    python main.py pulls octo/app octo/api                 # Open PRs of two repositories
    python main.py pulls octo/app,octo/api --user alice    # Highlight PRs awaiting alice's review
    python main.py pulls octo/app --json                   # JSON for another frontend
"""

import argparse
import json
import logging
import sys
from typing import Optional

from aggregator.aggregator import RepositoryAggregator
from fetchers.errors import AggregationTimeout, AuthError, UpstreamError
from fetchers.github import GitHubClient
from fetchers.repositories import list_repositories, mark_selected
from models.config_models import Config
from models.data_models import PullRequest, Repository, RepositoryPullRequests
from utils.config_loader import load_config
from utils.logger import setup_logger
from utils.selection import parse_selection

logger = logging.getLogger("pr_viewer")


def build_client(config: Config) -> GitHubClient:
    """Create a GitHub client from validated configuration."""
    return GitHubClient(
        config.credentials.github_token,
        base_url=config.api_base_url,
        timeout=config.request_timeout,
    )


def format_pull_request(pr: PullRequest) -> str:
    """
    Render one pull request as a single line.

    Example:
        * #42 Add login page | 3 days ago | octocat | 💬 2 | ✅ 1 [draft]

    A leading "*" marks pull requests waiting on the caller's review.
    """
    marker = "*" if pr.is_reviewer_match else " "
    line = (
        f"{marker} #{pr.number} {pr.title} | {pr.age} | {pr.author} | "
        f"💬 {pr.comment_count} | ✅ {pr.approval_count}"
    )
    if pr.is_draft:
        line += " [draft]"
    return line


def format_repository(result: RepositoryPullRequests) -> list[str]:
    """Render one repository block (header + PR lines or a placeholder)."""
    lines = [result.full_name]
    if result.error:
        lines.append(f"  ⚠️  GitHub returned an error: {result.error}")
    elif not result.pull_requests:
        lines.append("  There are no open PRs for this repo")
    else:
        lines.extend(f"  {format_pull_request(pr)}" for pr in result.pull_requests)
    return lines


def show_repositories(client: GitHubClient, selected: list[str], as_json: bool = False) -> bool:
    """
    List repositories visible to the token.

    Args:
        client: Authenticated GitHub client
        selected: Keys to flag as selected
        as_json: Print JSON instead of one name per line

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        repositories: list[Repository] = list_repositories(client.token, client=client)
    except AuthError:
        logger.error("GitHub rejected the token (bad credentials). Create a new token and update GITHUB_TOKEN.")
        return False
    except UpstreamError as e:
        logger.error(f"GitHub returned an error while listing repositories: {e.message}")
        return False

    repositories = mark_selected(repositories, selected)

    if as_json:
        print(json.dumps([r.model_dump(mode="json", by_alias=True) for r in repositories], indent=2))
    else:
        for repository in repositories:
            print(f"{'*' if repository.selected else ' '} {repository.full_name}")
    return True


def show_pull_requests(
    client: GitHubClient,
    selected: list[str],
    username: Optional[str] = None,
    as_json: bool = False,
    timeout: Optional[float] = None,
    max_workers: int = 8,
    max_request_workers: int = 16,
) -> bool:
    """
    Aggregate and print open pull requests for the selected repositories.

    Returns:
        bool: True if the aggregation completed, False on timeout
    """
    aggregator = RepositoryAggregator(
        client,
        max_workers=max_workers,
        max_request_workers=max_request_workers,
    )

    try:
        results = aggregator.aggregate(selected, caller_identity=username, timeout=timeout)
    except AggregationTimeout as e:
        logger.error(f"Timed out: {e}")
        return False

    if as_json:
        print(json.dumps([r.model_dump(mode="json", by_alias=True) for r in results], indent=2))
    else:
        for result in results:
            print("\n".join(format_repository(result)))
            print()
    return True


def main():
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="PR Viewer - Open pull requests across your GitHub repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Which repositories can I pick from?
  python main.py repos

  # Open PRs for two repositories
  python main.py pulls octo/app octo/api

  # Highlight PRs waiting for my review (defaults to GITHUB_USERNAME)
  python main.py pulls octo/app --user alice
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Repos command
    repos_parser = subparsers.add_parser(
        "repos",
        help="List repositories visible to your GitHub token"
    )
    repos_parser.add_argument(
        "--selected",
        nargs="*",
        default=[],
        help="Repositories to mark as selected ('org/repo', comma-separated or repeated)"
    )
    repos_parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of plain text"
    )

    # Pulls command
    pulls_parser = subparsers.add_parser(
        "pulls",
        help="Show open PRs for selected repositories"
    )
    pulls_parser.add_argument(
        "repositories",
        nargs="+",
        help="Repositories in format 'org/repo' (e.g., 'octo/app'), comma-separated or repeated"
    )
    pulls_parser.add_argument(
        "--user",
        default=None,
        help="GitHub login used to flag PRs awaiting your review (default: GITHUB_USERNAME)"
    )
    pulls_parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of plain text"
    )
    pulls_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up if the whole fetch takes longer than this many seconds"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = load_config()
    setup_logger(config.log_level)
    client = build_client(config)

    if args.command == "repos":
        success = show_repositories(client, parse_selection(args.selected), as_json=args.json)

    else:
        success = show_pull_requests(
            client,
            parse_selection(args.repositories),
            username=args.user or config.credentials.github_username,
            as_json=args.json,
            timeout=args.timeout,
            max_workers=config.max_workers,
            max_request_workers=config.max_request_workers,
        )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
