"""Error types raised by the GitHub fetchers.

Three failure kinds are kept apart on purpose:
- ValidationError: the caller passed a malformed org/repo, nothing was sent
- TransportError: the request never produced a usable JSON body
- UpstreamError: GitHub answered with an explicit error object ({"message": ...})
"""

from typing import Optional


class PRViewerError(Exception):
    """Base class for all errors raised by this project."""


class ValidationError(PRViewerError, ValueError):
    """Malformed input, rejected before any network call."""


class TransportError(PRViewerError):
    """Network failure, timeout, or an undecodable response body."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class UpstreamError(PRViewerError):
    """GitHub returned an error payload instead of data."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url


class AuthError(UpstreamError):
    """GitHub rejected the credential (e.g. "Bad credentials")."""


class AggregationTimeout(PRViewerError):
    """The whole aggregation call did not finish within its deadline."""
