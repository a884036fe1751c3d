"""Configuration models for validation using Pydantic."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsConfig(BaseModel):
    """API credentials loaded from environment variables."""

    github_token: str = Field(..., min_length=1, description="GitHub personal access token")
    github_username: Optional[str] = Field(
        None, description="GitHub login of the caller (used for reviewer matching)"
    )

    @field_validator("github_token")
    @classmethod
    def validate_github_token(cls, v: str) -> str:
        """Validate GitHub token is set."""
        if not v or v == "ghp_your_token_here":
            raise ValueError("GitHub token must be set in .env file")
        return v


class Config(BaseModel):
    """Application configuration."""

    credentials: CredentialsConfig
    log_level: str = Field(default="INFO", description="Logging level")
    api_base_url: str = Field(default="https://api.github.com", description="GitHub REST API root")
    request_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    max_workers: int = Field(default=8, ge=1, description="Repositories fetched concurrently")
    max_request_workers: int = Field(
        default=16, ge=1, description="Comment/review requests issued concurrently"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith("https://"):
            raise ValueError("GitHub API URL must start with https://")
        return v.rstrip("/")
