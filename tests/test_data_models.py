"""Tests for data models."""

from datetime import datetime, timezone
import pytest
from pydantic import ValidationError

from models.data_models import (
    PullRequest,
    RawPullRequest,
    Repository,
    RepositoryPullRequests,
)


def make_pull_request(**overrides):
    fields = dict(
        number=42,
        title="Fix bug",
        created_at=datetime(2025, 1, 10, 9, 0, 0, tzinfo=timezone.utc),
        age="2 days ago",
        state="open",
        url="https://github.com/octo/app/pull/42",
        author="bob",
    )
    fields.update(overrides)
    return PullRequest(**fields)


class TestRawPullRequest:
    """Tests for RawPullRequest parsing."""

    def test_parses_github_payload(self, pr_payload):
        raw = RawPullRequest.model_validate(pr_payload(12, reviewers=["alice", "carol"], draft=True))

        assert raw.number == 12
        assert raw.created_at == datetime(2025, 1, 10, 9, 0, 0, tzinfo=timezone.utc)
        assert raw.user.login == "bob"
        assert raw.reviewer_logins == ["alice", "carol"]
        assert raw.draft is True

    def test_optional_fields_default(self):
        raw = RawPullRequest.model_validate({
            "number": 1,
            "title": "t",
            "created_at": "2025-01-10T09:00:00Z",
            "html_url": "https://github.com/octo/app/pull/1",
            "user": {"login": "bob"},
        })

        assert raw.state == "open"
        assert raw.requested_reviewers == []
        assert raw.draft is False

    def test_missing_required_field_rejected(self):
        with pytest.raises(ValidationError):
            RawPullRequest.model_validate({"number": 1, "title": "t"})


class TestPullRequest:
    """Tests for PullRequest model."""

    def test_defaults(self):
        pr = make_pull_request()
        assert pr.requested_reviewers == ()
        assert pr.is_reviewer_match is False
        assert pr.is_draft is False
        assert pr.comment_count == 0
        assert pr.approval_count == 0

    def test_is_immutable(self):
        pr = make_pull_request()
        with pytest.raises(ValidationError):
            pr.comment_count = 5

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            make_pull_request(comment_count=-1)
        with pytest.raises(ValidationError):
            make_pull_request(approval_count=-1)

    def test_json_uses_camel_case(self):
        payload = make_pull_request(requested_reviewers=["alice"], is_reviewer_match=True).model_dump(
            mode="json", by_alias=True
        )

        assert payload["createdAt"] == "2025-01-10T09:00:00Z"
        assert payload["requestedReviewers"] == ["alice"]
        assert payload["isReviewerMatch"] is True
        assert payload["isDraft"] is False
        assert payload["commentCount"] == 0
        assert payload["approvalCount"] == 0


class TestRepositoryPullRequests:
    """Tests for RepositoryPullRequests model."""

    def test_full_name(self):
        result = RepositoryPullRequests(org_name="octo", repo_name="app")
        assert result.full_name == "octo/app"
        assert result.pull_requests == ()
        assert result.error is None

    def test_accepts_camel_case_input(self):
        result = RepositoryPullRequests.model_validate(
            {"orgName": "octo", "repoName": "app", "error": "Not Found"}
        )
        assert result.org_name == "octo"
        assert result.error == "Not Found"


class TestRepository:
    """Tests for Repository model."""

    def test_defaults_unselected(self):
        repository = Repository(full_name="octo/app")
        assert repository.selected is False
        assert repository.model_dump(by_alias=True) == {"fullName": "octo/app", "selected": False}
