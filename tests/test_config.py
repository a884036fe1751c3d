"""Tests for configuration loading and validation."""

import pytest
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig
from utils.config_loader import load_config


class TestCredentialsConfig:
    """Test CredentialsConfig validation."""

    def test_valid_credentials(self):
        """Test that valid credentials pass validation."""
        creds = CredentialsConfig(github_token="ghp_valid_token", github_username="alice")
        assert creds.github_token == "ghp_valid_token"
        assert creds.github_username == "alice"

    def test_username_is_optional(self):
        creds = CredentialsConfig(github_token="ghp_valid_token")
        assert creds.github_username is None

    def test_rejects_placeholder_github_token(self):
        """Test that placeholder GitHub token is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            CredentialsConfig(github_token="ghp_your_token_here")
        assert "GitHub token must be set" in str(exc_info.value)

    def test_empty_token_rejected(self):
        """Test that empty credentials are rejected."""
        with pytest.raises(ValidationError):
            CredentialsConfig(github_token="")


class TestConfig:
    """Test main Config model."""

    def make_credentials(self):
        return CredentialsConfig(github_token="ghp_valid_token")

    def test_defaults(self):
        """Test default tuning values."""
        config = Config(credentials=self.make_credentials())
        assert config.log_level == "INFO"
        assert config.api_base_url == "https://api.github.com"
        assert config.request_timeout == 10.0
        assert config.max_workers == 8
        assert config.max_request_workers == 16

    def test_log_level_case_insensitive(self):
        """Test that log level is normalized to uppercase."""
        config = Config(credentials=self.make_credentials(), log_level="info")
        assert config.log_level == "INFO"

    def test_invalid_log_level_rejected(self):
        """Test that invalid log level is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            Config(credentials=self.make_credentials(), log_level="INVALID")
        assert "Log level must be one of" in str(exc_info.value)

    def test_api_url_must_be_https(self):
        with pytest.raises(ValidationError) as exc_info:
            Config(credentials=self.make_credentials(), api_base_url="http://ghe.example.com/api/v3")
        assert "must start with https://" in str(exc_info.value)

    def test_api_url_trailing_slash_stripped(self):
        config = Config(credentials=self.make_credentials(), api_base_url="https://ghe.example.com/api/v3/")
        assert config.api_base_url == "https://ghe.example.com/api/v3"

    @pytest.mark.parametrize("field,value", [
        ("max_workers", 0),
        ("max_request_workers", 0),
        ("request_timeout", 0),
    ])
    def test_non_positive_tuning_rejected(self, field, value):
        with pytest.raises(ValidationError):
            Config(credentials=self.make_credentials(), **{field: value})


class TestConfigLoader:
    """Test config_loader.load_config() function."""

    def test_load_valid_config(self, test_env):
        """Test loading valid configuration from environment."""
        config = load_config()

        assert config.credentials.github_token == test_env["github_token"]
        assert config.credentials.github_username == test_env["github_username"]
        assert config.log_level == test_env["log_level"]
        assert config.max_workers == test_env["max_workers"]

    def test_load_config_with_missing_credentials(self, invalid_env):
        """Test that loading config with missing credentials fails gracefully."""
        with pytest.raises(SystemExit) as exc_info:
            load_config()
        assert exc_info.value.code == 1

    def test_invalid_number_fails_gracefully(self, test_env, monkeypatch, capsys):
        monkeypatch.setenv("REQUEST_TIMEOUT", "soon")
        with pytest.raises(SystemExit):
            load_config()
        assert "request_timeout" in capsys.readouterr().err
