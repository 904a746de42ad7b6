import json
import os
import sys
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    For local development, load `.env` automatically so overrides can live in
    `backend/.env`. Do NOT auto-load `.env` when running under pytest or in CI
    so tests run against the documented defaults.
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    # Environment configuration
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Version reported by the health check",
    )
    # NoDecode: the validator below parses both JSON and comma-separated values
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        description="Allowed CORS origins (comma-separated or JSON list in env var)",
    )

    # Performance settings
    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    # Logging
    LOG_DIR: str = Field(
        default="logs",
        description="Directory for the rotating application log file",
    )
    LOG_TO_FILE: bool = Field(
        default=True,
        description="Write logs to LOG_DIR/app.log in addition to stderr",
    )

    # Share tracking rate limit (per client IP)
    SHARE_RATE_LIMIT: int = Field(
        default=20,
        description="Maximum share events accepted per client within one window",
    )
    SHARE_RATE_LIMIT_WINDOW_SECONDS: int = Field(
        default=60,
        description="Length of the share rate limit window in seconds",
    )

    # Share link branding
    SHARE_BRAND_NAME: str = Field(
        default="DUO Soluciones Empresariales",
        description="Brand appended to email share bodies",
    )
    SHARE_TWITTER_HANDLE: str = Field(
        default="DUOSoluciones",
        description="Twitter/X handle (without @) used for via and hashtags",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """Parse CORS origins from a JSON list or a comma-separated string."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the settings instance (for dependency injection)."""
    return settings
