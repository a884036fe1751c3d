"""Data models for the PR viewer."""

from models.config_models import Config, CredentialsConfig
from models.data_models import (
    GitHubUser,
    PullRequest,
    RawPullRequest,
    Repository,
    RepositoryPullRequests,
)

__all__ = [
    "Config",
    "CredentialsConfig",
    "GitHubUser",
    "PullRequest",
    "RawPullRequest",
    "Repository",
    "RepositoryPullRequests",
]
