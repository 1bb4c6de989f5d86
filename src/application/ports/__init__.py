"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- CaseStoreProtocol: Case timelines and structured stage deadlines
- ExtensionRequestStoreProtocol: Extension requests with compare-and-set resolution
- DeadlineAlertStoreProtocol: Alert documents polled by the dispatcher
- RecipientResolverProtocol: Alert recipients per case
- HolidayCatalogProviderProtocol: Current holiday catalog with reload
- TimeAuthorityProtocol: Current instant and calendar day
"""

from src.application.ports.case_store import CaseStoreProtocol
from src.application.ports.deadline_alert_store import DeadlineAlertStoreProtocol
from src.application.ports.extension_request_store import ExtensionRequestStoreProtocol
from src.application.ports.holiday_catalog_provider import HolidayCatalogProviderProtocol
from src.application.ports.recipient_resolver import RecipientResolverProtocol
from src.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "CaseStoreProtocol",
    "DeadlineAlertStoreProtocol",
    "ExtensionRequestStoreProtocol",
    "HolidayCatalogProviderProtocol",
    "RecipientResolverProtocol",
    "TimeAuthorityProtocol",
]
