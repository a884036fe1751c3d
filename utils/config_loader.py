"""Configuration loader that reads from .env and validates with Pydantic."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from pydantic import ValidationError

from models.config_models import Config, CredentialsConfig


def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Reads from .env file in the project root (existing environment variables
    win) and validates credentials and tuning settings using Pydantic models.

    Returns:
        Config: Validated configuration object

    Raises:
        SystemExit: If configuration is invalid or missing required fields
    """
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    try:
        config = Config(
            credentials=CredentialsConfig(
                github_token=os.getenv("GITHUB_TOKEN", ""),
                github_username=os.getenv("GITHUB_USERNAME") or None,
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            request_timeout=os.getenv("REQUEST_TIMEOUT", "10"),
            max_workers=os.getenv("MAX_WORKERS", "8"),
            max_request_workers=os.getenv("MAX_REQUEST_WORKERS", "16"),
        )

        return config

    except ValidationError as e:
        print("❌ Configuration validation failed:", file=sys.stderr)
        print("\nPlease check your .env file. Missing or invalid fields:", file=sys.stderr)

        for error in e.errors():
            field_path = " → ".join(str(x) for x in error["loc"])
            message = error["msg"]
            print(f"  • {field_path}: {message}", file=sys.stderr)

        print("\nHint: Copy .env.example to .env and fill in your credentials.", file=sys.stderr)
        sys.exit(1)
