"""Deadline engine configuration.

This module defines runtime configuration for the deadline engine with
environment variable overrides.

Environment Variables:
- KARIN_HOLIDAY_CATALOG_PATH: Holiday catalog YAML file (default: config/holidays/cl.yaml)
- KARIN_DEFAULT_REGION: Region code used when a case records none (default: unset)
- KARIN_MIN_JUSTIFICATION_LENGTH: Minimum extension justification length (default: 10)
- KARIN_TIMEZONE: IANA zone that defines "today" (default: unset, UTC)
- KARIN_ENVIRONMENT: "production" (JSON logs) or "development" (console logs)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOLIDAY_CATALOG_PATH = "config/holidays/cl.yaml"
DEFAULT_MIN_JUSTIFICATION_LENGTH = 10
MAX_MIN_JUSTIFICATION_LENGTH = 500
ENVIRONMENTS = ("production", "development")


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_env(key: str) -> str | None:
    value = os.environ.get(key, "").strip()
    return value or None


@dataclass(frozen=True)
class DeadlineEngineConfig:
    """Configuration for the deadline engine.

    Attributes:
        holiday_catalog_path: Path to the holiday catalog YAML file.
            Relative paths resolve against the working directory.
        default_region: Region code applied when a case has none.
        min_justification_length: Minimum extension justification length.
        timezone: IANA zone name defining the current day, or None for UTC.
        environment: Log output mode ("production" or "development").
    """

    holiday_catalog_path: str = DEFAULT_HOLIDAY_CATALOG_PATH
    default_region: str | None = None
    min_justification_length: int = DEFAULT_MIN_JUSTIFICATION_LENGTH
    timezone: str | None = None
    environment: str = "production"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.holiday_catalog_path:
            raise ValueError("holiday_catalog_path must not be empty")
        if not 1 <= self.min_justification_length <= MAX_MIN_JUSTIFICATION_LENGTH:
            raise ValueError(
                "min_justification_length must be between 1 and "
                f"{MAX_MIN_JUSTIFICATION_LENGTH}, got {self.min_justification_length}"
            )
        if self.environment not in ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {ENVIRONMENTS}, got {self.environment!r}"
            )

    @property
    def catalog_path(self) -> Path:
        return Path(self.holiday_catalog_path)

    @classmethod
    def from_env(cls) -> DeadlineEngineConfig:
        """Create config from environment variables with defaults.

        Returns:
            DeadlineEngineConfig with values from environment or defaults.

        Raises:
            ValueError: If an override is out of range.
        """
        return cls(
            holiday_catalog_path=os.environ.get(
                "KARIN_HOLIDAY_CATALOG_PATH", DEFAULT_HOLIDAY_CATALOG_PATH
            ),
            default_region=_get_optional_env("KARIN_DEFAULT_REGION"),
            min_justification_length=_get_int_env(
                "KARIN_MIN_JUSTIFICATION_LENGTH", DEFAULT_MIN_JUSTIFICATION_LENGTH
            ),
            timezone=_get_optional_env("KARIN_TIMEZONE"),
            environment=os.environ.get("KARIN_ENVIRONMENT", "production").strip().lower(),
        )


# Default production config
DEFAULT_DEADLINE_ENGINE_CONFIG = DeadlineEngineConfig()

# Development config with console logs
DEV_DEADLINE_ENGINE_CONFIG = DeadlineEngineConfig(environment="development")
