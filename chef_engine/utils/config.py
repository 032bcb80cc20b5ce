"""Configuration management for Chef Engine.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv

from chef_engine.utils.logger import logger


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini credential. VITE_GEMINI_API_KEY is accepted so a shared frontend .env works as-is
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("VITE_GEMINI_API_KEY", "")
        # Service root and REST version used to build generateContent URLs
        self.GEMINI_BASE_URL: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com").rstrip("/")
        self.GEMINI_API_VERSION: str = os.getenv("GEMINI_API_VERSION", "v1")
        # Text model: writes the recipe
        self.TEXT_MODEL: str = os.getenv("TEXT_MODEL", "gemini-2.5-flash")
        # Image model: separate model that can return inline PNG data
        self.IMAGE_MODEL: str = os.getenv("IMAGE_MODEL", "gemini-2.0-flash-preview-image-generation")
        # Skip the illustration call entirely (text-only recipes)
        self.ENABLE_IMAGE_GENERATION: bool = _env_flag("ENABLE_IMAGE_GENERATION", "true")

        # Rate-limit retry configuration
        # MAX_RETRIES: retries after the first attempt, only on HTTP 429
        self.MAX_RETRIES: int = int(os.getenv("MAX_RETRIES", "3"))
        # RETRY_BASE_DELAY_MS: delay before retry n is 2^n * base (1s, 2s, 4s with defaults)
        self.RETRY_BASE_DELAY_MS: int = int(os.getenv("RETRY_BASE_DELAY_MS", "1000"))
        # RETRY_MAX_JITTER_MS: uniform random delay added on top of each backoff
        self.RETRY_MAX_JITTER_MS: int = int(os.getenv("RETRY_MAX_JITTER_MS", "1000"))
        # Per-attempt total timeout
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))

        # HTTP server port
        self.PORT: int = int(os.getenv("PORT", "5000"))

    def validate(self) -> None:
        """Validate configuration values.

        A missing GEMINI_API_KEY is only logged: requests fail at call time instead.

        Raises:
            ValueError: If a numeric setting is out of range.
        """
        if not self.GEMINI_API_KEY:
            logger.warning("No GEMINI_API_KEY found in environment or .env")
        if self.MAX_RETRIES < 0:
            raise ValueError(f"MAX_RETRIES must be at least 0, got: {self.MAX_RETRIES}")
        if self.RETRY_BASE_DELAY_MS < 0:
            raise ValueError(f"RETRY_BASE_DELAY_MS must be at least 0, got: {self.RETRY_BASE_DELAY_MS}")
        if self.RETRY_MAX_JITTER_MS < 0:
            raise ValueError(f"RETRY_MAX_JITTER_MS must be at least 0, got: {self.RETRY_MAX_JITTER_MS}")
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")

    def endpoint_for(self, model: str) -> str:
        """Build the generateContent URL for a model, including the key query parameter."""
        return (
            f"{self.GEMINI_BASE_URL}/{self.GEMINI_API_VERSION}/models/"
            f"{model}:generateContent?key={self.GEMINI_API_KEY}"
        )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
