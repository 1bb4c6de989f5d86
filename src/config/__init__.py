"""Configuration module for the Karin-law deadline engine.

Available Configurations:
- DeadlineEngineConfig: Holiday catalog location, default region,
  justification minimum, time zone and log mode
"""

from src.config.deadline_config import (
    DEFAULT_DEADLINE_ENGINE_CONFIG,
    DEV_DEADLINE_ENGINE_CONFIG,
    DeadlineEngineConfig,
)

__all__ = [
    "DeadlineEngineConfig",
    "DEFAULT_DEADLINE_ENGINE_CONFIG",
    "DEV_DEADLINE_ENGINE_CONFIG",
]
