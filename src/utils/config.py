"""Configuration management for Diabetic Recipe Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # OpenAI-compatible chat completion endpoint (no trailing slash)
        self.OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
        # Model used for recipe generation. Default: gpt-3.5-turbo (fast, cost-effective)
        self.OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
        # Temperature: recipes need some creativity for the pun titles but must stay on format
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Hard deadline for the upstream call in seconds. Default: 20
        self.UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "20"))
        # Server bind address and port
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "7777"))

    @staticmethod
    def get_openai_api_key() -> str:
        """Read the upstream bearer credential.

        Looked up on every call so a key rotated in the environment is picked up
        without a restart. Returns an empty string when unset.
        """
        return os.getenv("OPENAI_API_KEY", "").strip()

    def validate(self) -> None:
        """Validate configuration values.

        OPENAI_API_KEY is deliberately not required here: a missing key is
        reported per request as MISSING_API_KEY.

        Raises:
            ValueError: If invalid values provided.
        """
        if not self.OPENAI_MODEL:
            raise ValueError("OPENAI_MODEL must not be empty")
        if not self.OPENAI_BASE_URL.startswith(("http://", "https://")):
            raise ValueError(
                f"OPENAI_BASE_URL must start with http:// or https://, got: {self.OPENAI_BASE_URL}"
            )
        if not (0.5 <= self.TEMPERATURE <= 0.7):
            raise ValueError(
                f"TEMPERATURE must be between 0.5 and 0.7, got: {self.TEMPERATURE}"
            )
        if not (15 <= self.UPSTREAM_TIMEOUT_SECONDS <= 20):
            raise ValueError(
                f"UPSTREAM_TIMEOUT_SECONDS must be between 15 and 20, got: {self.UPSTREAM_TIMEOUT_SECONDS}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(
                f"PORT must be between 1 and 65535, got: {self.PORT}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
