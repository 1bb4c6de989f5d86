"""
Domain layer - Pure business logic for the deadline engine.

This layer contains:
- Stage catalog and business-day regimes
- Holiday catalog value objects
- Deadlines, alerts, extension requests and case timelines
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or bootstrap.
Only stdlib and typing imports are allowed.
"""

from src.domain.exceptions import DeadlineEngineError
from src.domain.models import (
    AlertLevel,
    Deadline,
    HolidayCatalog,
    KarinStage,
    StageCatalog,
)

__all__: list[str] = [
    "AlertLevel",
    "Deadline",
    "DeadlineEngineError",
    "HolidayCatalog",
    "KarinStage",
    "StageCatalog",
]
