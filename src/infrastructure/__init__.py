"""
Infrastructure layer - External adapters for the deadline engine.

This layer contains:
- YAML holiday catalog loading
- System clock time authority
- Structured logging configuration
- In-memory store stubs

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""

from src.infrastructure.adapters.catalog import HolidayCatalogSource
from src.infrastructure.adapters.time import SystemTimeAuthority

__all__: list[str] = ["HolidayCatalogSource", "SystemTimeAuthority"]
