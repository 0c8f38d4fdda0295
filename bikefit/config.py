"""Application configuration with environment variable validation."""

import re
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
# slowapi limit string, e.g. "120/minute" or "10 per second"
_RATE_LIMIT_RE = re.compile(r"^\d+\s*(/|per)\s*(second|minute|hour|day)s?$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="BikeFit Cockpit API", validation_alias="APP_NAME")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")

    # CORS
    # Comma-separated, e.g. "http://localhost:3000,https://bikefit.app"
    allowed_origins: str = Field(
        default="*",
        validation_alias="ALLOWED_ORIGINS",
    )

    # Rate limiting (per client address)
    rate_limit: str = Field(default="120/minute", validation_alias="RATE_LIMIT")
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")

    @property
    def cors_origins(self) -> list[str]:
        """Parse ALLOWED_ORIGINS from a comma-separated string."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def validate_settings(settings: Settings | None = None) -> None:
    """Validate settings, raising ValueError listing every problem."""
    settings = settings or get_settings()
    errors = []

    if settings.log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
    if not settings.api_prefix.startswith("/"):
        errors.append("API_PREFIX must start with '/'")
    if not settings.cors_origins:
        errors.append("ALLOWED_ORIGINS must list at least one origin")
    if not _RATE_LIMIT_RE.match(settings.rate_limit.strip()):
        errors.append("RATE_LIMIT must look like '120/minute'")

    if errors:
        raise ValueError(f"Configuration errors: {'; '.join(errors)}")
