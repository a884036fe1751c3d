"""Shared pytest fixtures and configuration."""

from unittest.mock import Mock, patch
import pytest

API = "https://api.github.com"


@pytest.fixture
def test_env(monkeypatch):
    """
    Set valid test environment variables.

    Lets config be loaded during tests without requiring real credentials.
    """
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token_1234567890")
    monkeypatch.setenv("GITHUB_USERNAME", "alice")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MAX_WORKERS", "4")

    return {
        "github_token": "ghp_test_token_1234567890",
        "github_username": "alice",
        "log_level": "DEBUG",
        "max_workers": 4,
    }


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid/missing environment variables for testing validation.
    """
    monkeypatch.setenv("GITHUB_TOKEN", "")


def make_response(body, status_code=200, headers=None):
    """Build a fake requests.Response. body may be an Exception raised by .json()."""
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {"X-RateLimit-Remaining": "4999", "X-RateLimit-Limit": "5000"}
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class FakeGitHub:
    """URL-routed stand-in for requests.get.

    Routes map a full URL to one of:
    - a JSON body (list or dict), returned with status 200
    - a Mock response built with make_response()
    - an exception instance, raised by requests.get
    - a callable returning any of the above (evaluated per request)
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def route(self, path, value):
        url = path if path.startswith("http") else f"{API}{path}"
        self.routes[url] = value

    def __call__(self, url, headers=None, params=None, timeout=None):
        self.calls.append(url)
        if url not in self.routes:
            raise AssertionError(f"Unexpected request: {url}")
        value = self.routes[url]
        if callable(value) and not isinstance(value, Mock):
            value = value()
        if isinstance(value, Exception):
            raise value
        if isinstance(value, Mock):
            return value
        status_code = 404 if isinstance(value, dict) else 200
        return make_response(value, status_code=status_code)

    def called(self, path):
        return self.calls.count(f"{API}{path}")


@pytest.fixture
def fake_github():
    """Patch requests.get with a FakeGitHub router."""
    fake = FakeGitHub()
    with patch("requests.get", side_effect=fake):
        yield fake


@pytest.fixture
def pr_payload():
    """Factory for GitHub pull request JSON objects."""

    def _make(number, title=None, created_at="2025-01-10T09:00:00Z", author="bob",
              reviewers=(), draft=False):
        return {
            "number": number,
            "title": title or f"PR {number}",
            "state": "open",
            "created_at": created_at,
            "html_url": f"https://github.com/octo/app/pull/{number}",
            "user": {"login": author, "id": 1},
            "requested_reviewers": [{"login": login} for login in reviewers],
            "draft": draft,
            "body": "Some description",
        }

    return _make


@pytest.fixture
def github_response():
    """Factory for fake requests.Response objects (see make_response)."""
    return make_response
