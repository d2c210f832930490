"""
Mind Compare — Application Configuration

Settings come from environment variables and an optional .env file via
Pydantic Settings.  ``get_settings()`` caches one validated instance per
process; the template repository and the API read it on first use.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Central configuration for the Mind Compare service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Runtime environment
    # ------------------------------------------------------------------ #
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # ------------------------------------------------------------------ #
    # CORS
    # ------------------------------------------------------------------ #
    ALLOWED_ORIGINS: str = "*"

    # ------------------------------------------------------------------ #
    # Narrative templates
    # ------------------------------------------------------------------ #
    TEMPLATE_CORPUS_PATH: str = ""      # JSON corpus replacing the built-in one
    STRICT_CORPUS_AUDIT: bool = False   # refuse to start when the audit finds defects
    NARRATIVE_TRACE_LOGGING: bool = False

    # ------------------------------------------------------------------ #
    # Display names
    # ------------------------------------------------------------------ #
    DISPLAY_NAME_MAX_LENGTH: int = 32
    DEFAULT_NAME_A: str = "Person A"
    DEFAULT_NAME_B: str = "Person B"

    # ------------------------------------------------------------------ #
    # Share text
    # ------------------------------------------------------------------ #
    QUIZ_INVITE_URL: str = ""

    # ------------------------------------------------------------------ #
    # Derived helpers
    # ------------------------------------------------------------------ #
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list split on commas."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",")]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {v}")
        return level

    @field_validator("DISPLAY_NAME_MAX_LENGTH")
    @classmethod
    def _name_length_must_fit_ellipsis(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"DISPLAY_NAME_MAX_LENGTH must be at least 2, got {v}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached ``Settings`` instance.

    Tests that change the environment call ``get_settings.cache_clear()``.
    """
    return Settings()
