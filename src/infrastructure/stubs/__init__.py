"""Infrastructure stubs for development and testing.

This module provides stub implementations of infrastructure ports
for use in development and testing environments.

Available stubs:
- CaseStoreStub: In-memory case timelines and stage deadline maps
- ExtensionRequestStoreStub: In-memory requests with lock-guarded compare-and-set
- DeadlineAlertStoreStub: In-memory alert documents (never deleted)
- RecipientResolverStub: Configurable per-case alert recipients

WARNING: These stubs are NOT for production use.
Production implementations live with the host application's case store.
"""

from src.infrastructure.stubs.case_store_stub import CaseStoreStub
from src.infrastructure.stubs.deadline_alert_store_stub import DeadlineAlertStoreStub
from src.infrastructure.stubs.extension_request_store_stub import (
    ExtensionRequestStoreStub,
)
from src.infrastructure.stubs.recipient_resolver_stub import RecipientResolverStub

__all__: list[str] = [
    "CaseStoreStub",
    "DeadlineAlertStoreStub",
    "ExtensionRequestStoreStub",
    "RecipientResolverStub",
]
