"""Observability infrastructure for structured logging and correlation.

This module provides cross-cutting observability concerns:
- Structured JSON logging with structlog
- Correlation ID management per engine operation

Usage:
    from src.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from src.application.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from src.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "build_processors",
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "set_correlation_id",
]
