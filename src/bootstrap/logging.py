"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from src.config.deadline_config import DeadlineEngineConfig
from src.infrastructure.observability import configure_structlog


def configure_logging(config: DeadlineEngineConfig) -> None:
    """Configure structlog for the configured environment."""
    configure_structlog(environment=config.environment)


__all__ = ["configure_logging"]
