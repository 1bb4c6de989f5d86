"""
Application layer - Use cases and orchestration for the deadline engine.

This layer contains:
- Business calendar and deadline calculation
- Extension workflow, alert scheduling, recomputation and reports
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap
"""

from src.application.ports import (
    CaseStoreProtocol,
    DeadlineAlertStoreProtocol,
    ExtensionRequestStoreProtocol,
    TimeAuthorityProtocol,
)

__all__: list[str] = [
    "CaseStoreProtocol",
    "DeadlineAlertStoreProtocol",
    "ExtensionRequestStoreProtocol",
    "TimeAuthorityProtocol",
]
