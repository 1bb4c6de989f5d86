"""Bootstrap wiring for the deadline engine."""

from __future__ import annotations

from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from src.application.services.deadline_engine import DeadlineEngine
from src.bootstrap.logging import configure_logging
from src.config.deadline_config import DeadlineEngineConfig
from src.infrastructure.adapters.catalog import HolidayCatalogSource
from src.infrastructure.adapters.time import SystemTimeAuthority
from src.infrastructure.observability import get_logger_for_service
from src.infrastructure.stubs import (
    CaseStoreStub,
    DeadlineAlertStoreStub,
    ExtensionRequestStoreStub,
    RecipientResolverStub,
)

if TYPE_CHECKING:
    from src.application.ports.case_store import CaseStoreProtocol
    from src.application.ports.deadline_alert_store import DeadlineAlertStoreProtocol
    from src.application.ports.extension_request_store import (
        ExtensionRequestStoreProtocol,
    )
    from src.application.ports.recipient_resolver import RecipientResolverProtocol
    from src.application.ports.time_authority import TimeAuthorityProtocol


_deadline_engine: DeadlineEngine | None = None


def build_deadline_engine(
    config: DeadlineEngineConfig | None = None,
    *,
    case_store: CaseStoreProtocol,
    request_store: ExtensionRequestStoreProtocol,
    alert_store: DeadlineAlertStoreProtocol,
    recipients: RecipientResolverProtocol,
    time_authority: TimeAuthorityProtocol | None = None,
) -> DeadlineEngine:
    """Build a deadline engine over the host application's stores.

    Args:
        config: Engine configuration (default: read from environment).
        case_store: Case record store.
        request_store: Extension request store.
        alert_store: Deadline alert store.
        recipients: Alert recipient resolver.
        time_authority: Clock override; the system clock in the
            configured zone otherwise.

    Returns:
        Engine running on the configured holiday catalog.

    Raises:
        InvalidCatalogError: If the holiday catalog cannot be loaded.
    """
    config = config or DeadlineEngineConfig.from_env()
    configure_logging(config)

    if time_authority is None:
        time_authority = (
            SystemTimeAuthority(ZoneInfo(config.timezone))
            if config.timezone
            else SystemTimeAuthority()
        )

    source = HolidayCatalogSource(config.catalog_path)
    engine = DeadlineEngine(
        case_store=case_store,
        request_store=request_store,
        alert_store=alert_store,
        recipients=recipients,
        time_authority=time_authority,
        holiday_provider=source,
        default_region=config.default_region,
        min_justification_length=config.min_justification_length,
    )

    versions = engine.catalog_versions
    get_logger_for_service("DeadlineEngine", component="bootstrap").info(
        "deadline_engine_built",
        holiday_catalog=versions.holidays,
        stage_catalog=versions.stages,
        catalog_path=str(source.path),
        default_region=config.default_region,
    )
    return engine


def get_deadline_engine() -> DeadlineEngine:
    """Get the deadline engine instance.

    Falls back to in-memory stores when no engine was set.

    Returns:
        DeadlineEngine instance.
    """
    global _deadline_engine
    if _deadline_engine is None:
        _deadline_engine = build_deadline_engine(
            case_store=CaseStoreStub(),
            request_store=ExtensionRequestStoreStub(),
            alert_store=DeadlineAlertStoreStub(),
            recipients=RecipientResolverStub(),
        )
    return _deadline_engine


def set_deadline_engine(engine: DeadlineEngine | None) -> None:
    """Set the deadline engine instance (for production use).

    Args:
        engine: Engine built over real stores, or None to reset.
    """
    global _deadline_engine
    _deadline_engine = engine
