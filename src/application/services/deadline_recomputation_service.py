"""Case deadline recomputation service.

Walks every stage in the catalog, derives its deadline from the case
timeline, writes the full ``stage -> Deadline`` map back to the case, and
refreshes the alerts of the case's current stage. Unsent alerts of every
other stage are cancelled, so historical and future stages stay silent.

Start rule per stage: the first recorded start date among the stage's
``start_anchors`` wins; otherwise the case creation date if the stage
allows it; otherwise the stage stays unset (not an error). Approved
extensions are only applied to extendable stages.

Recomputation is idempotent: the same timeline, catalogs and day yield
the same map and an equivalent set of active alerts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from structlog import get_logger

from src.domain.errors.deadline import CaseNotFoundError
from src.domain.models.case_timeline import CaseTimeline
from src.domain.models.deadline import Deadline
from src.domain.models.deadline_alert import DeadlineAlert
from src.domain.models.karin_stage import KarinStage, StageDefinition

if TYPE_CHECKING:
    from src.application.ports.case_store import CaseStoreProtocol
    from src.application.ports.recipient_resolver import RecipientResolverProtocol
    from src.application.services.deadline_alert_scheduler import DeadlineAlertScheduler
    from src.application.services.deadline_calculator import DeadlineCalculator

logger = get_logger(__name__)


@dataclass(frozen=True)
class RecomputationResult:
    """Outcome of recomputing a case's deadlines.

    Attributes:
        case_id: The recomputed case.
        deadlines: Deadline per catalog stage (None when unset).
        alerts: Alerts scheduled for the current stage.
    """

    case_id: str
    deadlines: dict[KarinStage, Deadline | None] = field(default_factory=dict)
    alerts: tuple[DeadlineAlert, ...] = field(default=())

    @property
    def unset_stages(self) -> tuple[KarinStage, ...]:
        return tuple(stage for stage, deadline in self.deadlines.items() if deadline is None)

    @property
    def computed_stages(self) -> tuple[KarinStage, ...]:
        return tuple(
            stage for stage, deadline in self.deadlines.items() if deadline is not None
        )


def resolve_start_date(definition: StageDefinition, timeline: CaseTimeline) -> date | None:
    """Pick the date a stage's clock starts from.

    Args:
        definition: The stage's definition.
        timeline: The case timeline.

    Returns:
        The first recorded anchor start, the case creation date when the
        stage falls back to it, or None.
    """
    for anchor in definition.start_anchors:
        started = timeline.start_of(anchor)
        if started is not None:
            return started
    if definition.falls_back_to_case_creation:
        return timeline.created_on
    return None


class DeadlineRecomputationService:
    """Regenerates every stage deadline for a case.

    Example:
        >>> service = DeadlineRecomputationService(
        ...     calculator=calculator,
        ...     case_store=case_store,
        ...     scheduler=scheduler,
        ...     recipients=resolver,
        ... )
        >>> result = await service.recompute_case("case-1")
    """

    def __init__(
        self,
        calculator: DeadlineCalculator,
        case_store: CaseStoreProtocol,
        scheduler: DeadlineAlertScheduler,
        recipients: RecipientResolverProtocol,
        default_region: str | None = None,
    ) -> None:
        """Initialize the recomputation service.

        Args:
            calculator: Deadline calculator (stage catalog and calendar).
            case_store: Case record store.
            scheduler: Alert scheduler for the current stage.
            recipients: Resolves who receives the case's alerts.
            default_region: Region applied when a case has none recorded.
        """
        self._calculator = calculator
        self._case_store = case_store
        self._scheduler = scheduler
        self._recipients = recipients
        self._default_region = default_region

    def derive_stage_deadlines(self, timeline: CaseTimeline) -> dict[KarinStage, Deadline | None]:
        """Derive every catalog stage's deadline without side effects."""
        region = self._region_for(timeline)
        deadlines: dict[KarinStage, Deadline | None] = {}
        for stage, definition in self._calculator.stages.items():
            start = resolve_start_date(definition, timeline)
            if start is None:
                deadlines[stage] = None
                continue
            extension = timeline.extension_for(stage) if definition.extendable else 0
            deadlines[stage] = self._calculator.compute_deadline(
                start, stage, region=region, extension_days=extension
            )
        return deadlines

    async def recompute_case(self, case_id: str) -> RecomputationResult:
        """Load a case's timeline and recompute it.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        timeline = await self._case_store.get_timeline(case_id)
        if timeline is None:
            logger.warning("Case not found", case_id=case_id)
            raise CaseNotFoundError(case_id=case_id)
        return await self.recompute_all_deadlines(timeline)

    async def recompute_all_deadlines(self, timeline: CaseTimeline) -> RecomputationResult:
        """Recompute, persist and re-alert a case's deadlines.

        Args:
            timeline: The case timeline.

        Returns:
            RecomputationResult with the stored map and scheduled alerts.

        Raises:
            CaseNotFoundError: Case doesn't exist in the store.
        """
        case_id = timeline.case_id
        log = logger.bind(case_id=case_id, current_stage=timeline.current_stage.value)
        deadlines = self.derive_stage_deadlines(timeline)
        await self._case_store.save_stage_deadlines(case_id, deadlines)

        alerts: list[DeadlineAlert] = []
        current = deadlines.get(timeline.current_stage)
        alerted_stage = timeline.current_stage if current is not None else None

        # Only the current stage stays alerted
        for stage in deadlines:
            if stage is not alerted_stage:
                await self._scheduler.cancel_alerts(case_id, stage)

        if current is not None:
            recipients = await self._recipients.resolve(timeline)
            if not recipients:
                log.warning("No recipients for current stage alerts")
            # Cancels the stage's previous ladder even when nobody is left to notify
            alerts = await self._scheduler.schedule_alerts(
                case_id=case_id,
                stage=timeline.current_stage,
                deadline=current.due_date,
                recipients=recipients,
                region=current.region,
            )
        else:
            log.debug("Current stage has no deadline; nothing scheduled")

        result = RecomputationResult(case_id=case_id, deadlines=deadlines, alerts=tuple(alerts))
        log.info(
            "deadlines_recomputed",
            computed=len(result.computed_stages),
            unset=[s.value for s in result.unset_stages],
            alerts=len(result.alerts),
        )
        return result

    def _region_for(self, timeline: CaseTimeline) -> str | None:
        return timeline.region if timeline.region is not None else self._default_region
