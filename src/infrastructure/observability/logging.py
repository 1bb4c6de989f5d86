"""Structured logging configuration with structlog.

This module provides centralized structlog configuration for the deadline
engine, supporting both production (JSON) and development (console)
output modes.

Log Entry Format (production):
    {
        "timestamp": "2026-03-02T12:00:00.000000Z",
        "level": "info",
        "event": "extension_approved",
        "correlation_id": "uuid",
        "case_id": "case-1",
        ...additional context
    }

Usage:
    # At application startup
    from src.infrastructure.observability import configure_structlog

    configure_structlog(environment=config.environment)

    # Then use structlog normally
    from structlog import get_logger
    logger = get_logger(__name__)
    logger.info("alerts_scheduled", case_id="case-1")
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from src.application.observability.correlation import correlation_id_processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def build_processors(environment: str = "production") -> list[Processor]:
    """Build the processor chain for an environment.

    Args:
        environment: 'production' for JSON output, anything else for console.

    Returns:
        Ordered structlog processors, renderer last.
    """
    shared_processors: list[Processor] = [
        # Merge context from contextvars (async support)
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    return shared_processors + [final_processor]


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog for the application.

    Should be called once at application startup. Level comes from the
    LOG_LEVEL environment variable.

    Args:
        environment: 'production' for JSON output, 'development' for console.
                    Defaults to 'production'.
    """
    structlog.configure(
        processors=build_processors(environment),
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "deadline_engine"
) -> structlog.BoundLogger:
    """Get a pre-bound logger for a service.

    Args:
        service_name: The name of the service (typically class name).
        component: The component type (default: "deadline_engine").

    Returns:
        A BoundLogger with service and component bound.
    """
    return structlog.get_logger().bind(
        service=service_name,
        component=component,
    )
