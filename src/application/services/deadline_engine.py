"""Deadline engine facade.

The library boundary of the deadline engine. It wires the calendar,
calculator, extension workflow, alert scheduler, recomputation and report
services around one pair of catalogs, and converts every outcome into an
OperationResult:

- DeadlineEngineError subclasses become failures carrying their ``code``
- ValueError from domain validation becomes ``invalid_request``
- Anything else (store outages) becomes ``store_failure``

No exception crosses this boundary. Each call runs inside a correlation
scope so all log entries it emits share one correlation id.

Catalogs are swapped with ``reload_catalogs``. The swap replaces one
attribute, so a call already in flight finishes on the catalogs it
started with.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, TypeVar
from uuid import UUID

from structlog import get_logger

from src.application.observability.correlation import correlation_scope
from src.application.services.business_calendar import BusinessCalendar
from src.application.services.deadline_alert_scheduler import DeadlineAlertScheduler
from src.application.services.deadline_calculator import DeadlineCalculator
from src.application.services.deadline_recomputation_service import (
    DeadlineRecomputationService,
    RecomputationResult,
)
from src.application.services.deadline_report_service import DeadlineReportService
from src.application.services.extension_request_service import (
    MIN_JUSTIFICATION_LENGTH,
    ExtensionRequestService,
)
from src.domain.exceptions import DeadlineEngineError
from src.domain.models.deadline import Deadline, DeadlineView
from src.domain.models.deadline_alert import DeadlineAlert
from src.domain.models.deadline_report import DeadlineReport
from src.domain.models.extension_request import Actor, ExtensionRequest
from src.domain.models.holiday_calendar import HolidayCatalog
from src.domain.models.karin_stage import DEFAULT_STAGE_CATALOG, KarinStage, StageCatalog
from src.domain.models.operation_result import STORE_FAILURE, OperationResult

if TYPE_CHECKING:
    from src.application.ports.case_store import CaseStoreProtocol
    from src.application.ports.deadline_alert_store import DeadlineAlertStoreProtocol
    from src.application.ports.extension_request_store import (
        ExtensionRequestStoreProtocol,
    )
    from src.application.ports.holiday_catalog_provider import (
        HolidayCatalogProviderProtocol,
    )
    from src.application.ports.recipient_resolver import RecipientResolverProtocol
    from src.application.ports.time_authority import TimeAuthorityProtocol

logger = get_logger(__name__)

T = TypeVar("T")

INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class CatalogVersions:
    """Versions of the catalogs an engine is running on."""

    holidays: str
    stages: str


@dataclass(frozen=True)
class _Components:
    """Services built around one pair of catalogs."""

    holidays: HolidayCatalog
    stages: StageCatalog
    calculator: DeadlineCalculator
    extensions: ExtensionRequestService
    scheduler: DeadlineAlertScheduler
    recomputation: DeadlineRecomputationService
    reports: DeadlineReportService


class DeadlineEngine:
    """Facade over the deadline engine services.

    Example:
        >>> engine = DeadlineEngine(
        ...     case_store=case_store,
        ...     request_store=request_store,
        ...     alert_store=alert_store,
        ...     recipients=resolver,
        ...     time_authority=clock,
        ...     holidays=catalog,
        ... )
        >>> result = await engine.recompute_all_deadlines("case-1")
        >>> result.success
        True
    """

    def __init__(
        self,
        case_store: CaseStoreProtocol,
        request_store: ExtensionRequestStoreProtocol,
        alert_store: DeadlineAlertStoreProtocol,
        recipients: RecipientResolverProtocol,
        time_authority: TimeAuthorityProtocol,
        holidays: HolidayCatalog | None = None,
        stages: StageCatalog = DEFAULT_STAGE_CATALOG,
        holiday_provider: HolidayCatalogProviderProtocol | None = None,
        default_region: str | None = None,
        min_justification_length: int = MIN_JUSTIFICATION_LENGTH,
    ) -> None:
        """Initialize the engine.

        Args:
            case_store: Case record store.
            request_store: Extension request store.
            alert_store: Deadline alert store.
            recipients: Alert recipient resolver.
            time_authority: Source of today and timestamps.
            holidays: Holiday catalog; taken from holiday_provider when omitted.
            stages: Stage catalog (default: Ley 21.643 catalog).
            holiday_provider: Reloadable holiday catalog source.
            default_region: Region applied when a case records none.
            min_justification_length: Minimum extension justification length.

        Raises:
            ValueError: If neither holidays nor holiday_provider is given.
        """
        if holidays is None:
            if holiday_provider is None:
                raise ValueError("either holidays or holiday_provider is required")
            holidays = holiday_provider.current()

        self._case_store = case_store
        self._request_store = request_store
        self._alert_store = alert_store
        self._recipients = recipients
        self._time = time_authority
        self._holiday_provider = holiday_provider
        self._default_region = default_region
        self._min_justification_length = min_justification_length
        self._components = self._build(holidays, stages)

    @property
    def catalog_versions(self) -> CatalogVersions:
        components = self._components
        return CatalogVersions(
            holidays=components.holidays.version, stages=components.stages.version
        )

    @property
    def calculator(self) -> DeadlineCalculator:
        return self._components.calculator

    # =========================================================================
    # Deadline computation
    # =========================================================================

    def compute_deadline(
        self,
        start_date: date,
        stage: KarinStage | str,
        region: str | None = None,
        extension_days: int = 0,
    ) -> OperationResult[Deadline]:
        calculator = self._components.calculator
        return self._run_sync(
            "compute_deadline",
            lambda: calculator.compute_deadline(
                start_date, stage, self._region(region), extension_days
            ),
            stage=str(stage),
        )

    def get_deadline_info(
        self,
        start_date: date,
        stage: KarinStage | str,
        region: str | None = None,
        extension_days: int = 0,
        today: date | None = None,
    ) -> OperationResult[DeadlineView]:
        calculator = self._components.calculator
        return self._run_sync(
            "get_deadline_info",
            lambda: calculator.get_deadline_info(
                start_date,
                stage,
                self._region(region),
                extension_days,
                today if today is not None else self._time.today(),
            ),
            stage=str(stage),
        )

    async def recompute_all_deadlines(self, case_id: str) -> OperationResult[RecomputationResult]:
        recomputation = self._components.recomputation
        return await self._run(
            "recompute_all_deadlines",
            lambda: recomputation.recompute_case(case_id),
            case_id=case_id,
        )

    async def build_report(self, case_id: str) -> OperationResult[DeadlineReport]:
        reports = self._components.reports
        return await self._run(
            "build_report", lambda: reports.build_report(case_id), case_id=case_id
        )

    # =========================================================================
    # Extension workflow
    # =========================================================================

    async def request_extension(
        self,
        case_id: str,
        stage: KarinStage | str,
        current_deadline: date,
        requested_days: int,
        justification: str,
        requester: Actor,
        region: str | None = None,
    ) -> OperationResult[ExtensionRequest]:
        extensions = self._components.extensions
        return await self._run(
            "request_extension",
            lambda: extensions.request_extension(
                case_id=case_id,
                stage=stage,
                current_deadline=current_deadline,
                requested_days=requested_days,
                justification=justification,
                requester=requester,
                region=region,
            ),
            case_id=case_id,
            stage=str(stage),
        )

    async def resolve_extension(
        self,
        request_id: UUID,
        approved: bool,
        approver: Actor,
        comments: str | None = None,
    ) -> OperationResult[ExtensionRequest]:
        extensions = self._components.extensions
        return await self._run(
            "resolve_extension",
            lambda: extensions.resolve_extension(request_id, approved, approver, comments),
            request_id=str(request_id),
        )

    async def list_extensions(self, case_id: str) -> OperationResult[list[ExtensionRequest]]:
        extensions = self._components.extensions
        return await self._run(
            "list_extensions", lambda: extensions.list_extensions(case_id), case_id=case_id
        )

    async def list_pending_extensions(self) -> OperationResult[list[ExtensionRequest]]:
        extensions = self._components.extensions
        return await self._run("list_pending_extensions", extensions.list_pending)

    # =========================================================================
    # Alerts
    # =========================================================================

    async def schedule_alerts(
        self,
        case_id: str,
        stage: KarinStage | str,
        deadline: date,
        recipients: Sequence[str],
        region: str | None = None,
    ) -> OperationResult[list[DeadlineAlert]]:
        scheduler = self._components.scheduler
        return await self._run(
            "schedule_alerts",
            lambda: scheduler.schedule_alerts(
                case_id, stage, deadline, recipients, self._region(region)
            ),
            case_id=case_id,
            stage=str(stage),
        )

    async def list_alerts(
        self, case_id: str, include_sent: bool = False
    ) -> OperationResult[list[DeadlineAlert]]:
        scheduler = self._components.scheduler
        return await self._run(
            "list_alerts",
            lambda: scheduler.list_alerts(case_id, include_sent),
            case_id=case_id,
        )

    async def get_due_alerts(self) -> OperationResult[list[DeadlineAlert]]:
        scheduler = self._components.scheduler
        return await self._run("get_due_alerts", scheduler.get_due_alerts)

    async def mark_alert_sent(self, alert_id: UUID) -> OperationResult[DeadlineAlert]:
        scheduler = self._components.scheduler
        return await self._run(
            "mark_alert_sent", lambda: scheduler.mark_sent(alert_id), alert_id=str(alert_id)
        )

    # =========================================================================
    # Catalogs
    # =========================================================================

    def reload_catalogs(
        self,
        holidays: HolidayCatalog | None = None,
        stages: StageCatalog | None = None,
        force: bool = False,
    ) -> OperationResult[CatalogVersions]:
        """Swap the catalogs used by subsequent operations.

        Args:
            holidays: New holiday catalog. When omitted, the holiday
                provider (if any) is refreshed and its catalog used.
            stages: New stage catalog; the current one is kept when omitted.
            force: Reload the provider even if its dataset looks unchanged.

        Returns:
            The catalog versions now in effect.
        """

        def reload() -> CatalogVersions:
            current = self._components
            new_holidays = holidays
            if new_holidays is None and self._holiday_provider is not None:
                self._holiday_provider.refresh(force=force)
                new_holidays = self._holiday_provider.current()
            new_holidays = new_holidays or current.holidays
            new_stages = stages or current.stages
            self._components = self._build(new_holidays, new_stages)
            logger.info(
                "catalogs_reloaded",
                previous_holidays=current.holidays.version,
                holidays=new_holidays.version,
                previous_stages=current.stages.version,
                stages=new_stages.version,
            )
            return self.catalog_versions

        return self._run_sync("reload_catalogs", reload)

    # =========================================================================
    # Internals
    # =========================================================================

    def _build(self, holidays: HolidayCatalog, stages: StageCatalog) -> _Components:
        calculator = DeadlineCalculator(
            calendar=BusinessCalendar(holidays),
            stages=stages,
            time_authority=self._time,
        )
        scheduler = DeadlineAlertScheduler(
            calculator=calculator,
            alert_store=self._alert_store,
            time_authority=self._time,
        )
        return _Components(
            holidays=holidays,
            stages=stages,
            calculator=calculator,
            extensions=ExtensionRequestService(
                calculator=calculator,
                request_store=self._request_store,
                case_store=self._case_store,
                time_authority=self._time,
                min_justification_length=self._min_justification_length,
            ),
            scheduler=scheduler,
            recomputation=DeadlineRecomputationService(
                calculator=calculator,
                case_store=self._case_store,
                scheduler=scheduler,
                recipients=self._recipients,
                default_region=self._default_region,
            ),
            reports=DeadlineReportService(
                calculator=calculator,
                case_store=self._case_store,
                time_authority=self._time,
            ),
        )

    def _region(self, region: str | None) -> str | None:
        return region if region is not None else self._default_region

    async def _run(
        self,
        operation: str,
        call: Callable[[], Awaitable[T]],
        **context: str,
    ) -> OperationResult[T]:
        with correlation_scope():
            log = logger.bind(operation=operation, **context)
            try:
                value = await call()
            except DeadlineEngineError as exc:
                log.warning("operation_failed", error_code=exc.code, error=str(exc))
                return OperationResult.fail(exc.code, str(exc))
            except ValueError as exc:
                log.warning("operation_failed", error_code=INVALID_REQUEST, error=str(exc))
                return OperationResult.fail(INVALID_REQUEST, str(exc))
            except Exception as exc:
                log.exception("operation_store_failure")
                return OperationResult.fail(STORE_FAILURE, str(exc) or type(exc).__name__)
            return OperationResult.ok(value)

    def _run_sync(
        self,
        operation: str,
        call: Callable[[], T],
        **context: str,
    ) -> OperationResult[T]:
        with correlation_scope():
            log = logger.bind(operation=operation, **context)
            try:
                value = call()
            except DeadlineEngineError as exc:
                log.warning("operation_failed", error_code=exc.code, error=str(exc))
                return OperationResult.fail(exc.code, str(exc))
            except ValueError as exc:
                log.warning("operation_failed", error_code=INVALID_REQUEST, error=str(exc))
                return OperationResult.fail(INVALID_REQUEST, str(exc))
            return OperationResult.ok(value)
