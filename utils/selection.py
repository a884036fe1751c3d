"""Helpers for the user's repository selection ("org/repo" keys)."""

from typing import Iterable, Optional, Tuple, Union


def parse_selection(values: Union[str, Iterable[str], None]) -> list[str]:
    """Normalize a repository selection into an ordered list of keys.

    Accepts either a comma-separated string ("octo/app,octo/api") or an
    iterable of strings (repeated query parameters), or a mix of both.
    Whitespace is stripped and empty entries are dropped. Order and
    duplicates are kept as given.

    Args:
        values: Selection as received from the web layer or CLI

    Returns:
        List of keys, e.g. ["octo/app", "octo/api"]
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]

    keys = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part:
                keys.append(part)
    return keys


def split_repo_key(key: str) -> Optional[Tuple[str, str]]:
    """Split "org/repo" into (org, repo).

    Returns None unless the key is exactly two non-empty segments.

    Examples:
        "octo/app" -> ("octo", "app")
        "onlyorg" -> None
        "/repo" -> None
    """
    parts = key.split("/")
    if len(parts) != 2:
        return None
    org, repo = parts
    if not org or not repo:
        return None
    return org, repo
