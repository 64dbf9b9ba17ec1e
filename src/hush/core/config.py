"""
Hush Centralized Configuration

Provides validated, type-safe access to environment variables using Pydantic Settings.

Usage:
    from hush.core.config import get_settings

    settings = get_settings()
    if settings.user_name:
        ...

Environment Variables:
    HUSH_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    HUSH_DEBUG: Legacy debug flag (enables DEBUG level if set)
    HUSH_LOG_JSON: Output logs as JSON
    HUSH_USER_NAME: Identity used for @mention overrides
    HUSH_RULES_FILE: YAML rule configuration file
    HUSH_SNOOZE_MINUTES: Default snooze length in minutes
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_env_file() -> Path | None:
    """
    Find .env file by searching for the project root marker.

    Returns:
        Path to .env if found next to pyproject.toml, None otherwise
    """
    current = Path(__file__).resolve().parent

    for _ in range(10):  # Limit search depth
        if (current / "pyproject.toml").exists():
            env_file = current / ".env"
            if env_file.exists():
                return env_file
            return None
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


_ENV_FILE = _find_project_env_file()


class HushSettings(BaseSettings):
    """
    Hush configuration settings with validation.

    Environment variables are loaded with the HUSH_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="HUSH_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level for hush components",
    )

    debug: bool = Field(
        default=False,
        description="Legacy debug flag (enables DEBUG level if set)",
    )

    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format for machine parsing",
    )

    # =========================================================================
    # Classification
    # =========================================================================

    user_name: Optional[str] = Field(
        default=None,
        description="User identity for @mention overrides (unset disables them)",
    )

    rules_file: Optional[Path] = Field(
        default=None,
        description="YAML rule configuration file (unset uses built-in rules)",
    )

    snooze_minutes: int = Field(
        default=30,
        ge=1,
        description="Default snooze length in minutes",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("user_name", mode="before")
    @classmethod
    def blank_user_name_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank user name as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def effective_log_level(self) -> str:
        """
        Get effective log level, respecting legacy HUSH_DEBUG.

        Priority:
        1. Explicit HUSH_LOG_LEVEL
        2. HUSH_DEBUG=1 -> DEBUG
        3. Default: WARNING
        """
        if self.debug and self.log_level == "WARNING":
            return "DEBUG"
        return self.log_level

    @property
    def log_level_int(self) -> int:
        """Get effective log level as logging constant."""
        return getattr(logging, self.effective_log_level)


# =============================================================================
# Singleton Accessor
# =============================================================================


@lru_cache(maxsize=1)
def get_settings() -> HushSettings:
    """
    Get the singleton settings instance.

    The settings are validated at first access.
    """
    return HushSettings()


def reset_settings() -> None:
    """
    Reset the settings cache (for testing).

    After calling this, the next get_settings() call will
    reload settings from environment variables.
    """
    get_settings.cache_clear()


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled."""
    return get_settings().effective_log_level == "DEBUG"
