"""Deadline alert scheduler.

Materializes escalating alert records for a stage deadline. Alerts are
documents; an external dispatcher polls them and delivers every alert
whose trigger date has arrived and which is neither sent nor cancelled.

Escalation ladder (business days before the deadline, stage regime):

    lead  level     title prefix
    10    INFO      "Reminder:"
    5     WARNING   "Warning:"
    2     URGENT    "Urgent!"
    0     CRITICAL  "LAST DAY!"

An alert is only created while at least ``lead`` business days remain,
and never with a trigger date before today. Re-scheduling first cancels
(never deletes) the stage's unsent alerts, so the operation is idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from structlog import get_logger

from src.domain.errors.deadline import AlertAlreadySentError, AlertNotFoundError
from src.domain.models.deadline import AlertLevel
from src.domain.models.deadline_alert import DeadlineAlert
from src.domain.models.karin_stage import KarinStage, StageDefinition

if TYPE_CHECKING:
    from collections.abc import Sequence

    from src.application.ports.deadline_alert_store import DeadlineAlertStoreProtocol
    from src.application.ports.time_authority import TimeAuthorityProtocol
    from src.application.services.deadline_calculator import DeadlineCalculator

logger = get_logger(__name__)


@dataclass(frozen=True)
class AlertThreshold:
    """One rung of the escalation ladder."""

    lead_days: int
    level: AlertLevel
    title_prefix: str


ALERT_THRESHOLDS: tuple[AlertThreshold, ...] = (
    AlertThreshold(lead_days=10, level=AlertLevel.INFO, title_prefix="Reminder:"),
    AlertThreshold(lead_days=5, level=AlertLevel.WARNING, title_prefix="Warning:"),
    AlertThreshold(lead_days=2, level=AlertLevel.URGENT, title_prefix="Urgent!"),
    AlertThreshold(lead_days=0, level=AlertLevel.CRITICAL, title_prefix="LAST DAY!"),
)


class DeadlineAlertScheduler:
    """Schedules and queries deadline alerts.

    Example:
        >>> scheduler = DeadlineAlertScheduler(
        ...     calculator=calculator,
        ...     alert_store=alert_store,
        ...     time_authority=time_authority,
        ... )
        >>> alerts = await scheduler.schedule_alerts(
        ...     case_id="case-1",
        ...     stage=KarinStage.INVESTIGATION,
        ...     deadline=date(2025, 4, 17),
        ...     recipients=["investigator-1"],
        ... )
    """

    def __init__(
        self,
        calculator: DeadlineCalculator,
        alert_store: DeadlineAlertStoreProtocol,
        time_authority: TimeAuthorityProtocol,
        thresholds: Sequence[AlertThreshold] = ALERT_THRESHOLDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            calculator: Deadline calculator (stage catalog and calendar).
            alert_store: Persistence for alert documents.
            time_authority: Source of today and timestamps.
            thresholds: Escalation ladder, largest lead first.
        """
        self._calculator = calculator
        self._alert_store = alert_store
        self._time = time_authority
        self._thresholds = tuple(thresholds)

    async def schedule_alerts(
        self,
        case_id: str,
        stage: KarinStage | str,
        deadline: date,
        recipients: Sequence[str],
        region: str | None = None,
    ) -> list[DeadlineAlert]:
        """Replace a stage's pending alerts with a fresh escalation ladder.

        Args:
            case_id: The case identifier.
            stage: Stage or raw stage identifier.
            deadline: The stage's due date.
            recipients: User ids to notify.
            region: Region code for regional holidays, or None.

        Returns:
            The newly created alerts, earliest trigger first. Empty when
            there are no recipients or the deadline has passed.

        Raises:
            UnknownStageError: Stage has no definition.
        """
        definition = self._calculator.definition_for(stage)
        log = logger.bind(
            case_id=case_id,
            stage=definition.stage.value,
            deadline=deadline.isoformat(),
        )

        cancelled = await self._alert_store.cancel_unsent(
            case_id, definition.stage, self._time.now()
        )
        if cancelled:
            log.debug("Superseded alerts cancelled", cancelled=cancelled)

        unique_recipients = tuple(dict.fromkeys(recipients))
        if not unique_recipients:
            log.warning("No alert recipients; nothing scheduled")
            return []

        today = self._time.today()
        calendar = self._calculator.calendar
        remaining = calendar.count_business_days(today, deadline, definition.regime, region)

        alerts: list[DeadlineAlert] = []
        for threshold in self._thresholds:
            if remaining < threshold.lead_days:
                continue
            trigger = calendar.add_business_days(
                deadline, -threshold.lead_days, definition.regime, region
            )
            if trigger < today:
                continue
            alerts.append(
                self._build_alert(
                    case_id=case_id,
                    definition=definition,
                    deadline=deadline,
                    threshold=threshold,
                    trigger=trigger,
                    recipients=unique_recipients,
                )
            )

        alerts.sort(key=lambda a: a.trigger_date)
        if alerts:
            await self._alert_store.save_many(alerts)

        log.info(
            "alerts_scheduled",
            scheduled=len(alerts),
            levels=[a.level.value for a in alerts],
            remaining_business_days=remaining,
        )
        return alerts

    async def cancel_alerts(self, case_id: str, stage: KarinStage) -> int:
        """Cancel every unsent alert of a stage that is no longer alerted.

        Returns:
            Number of alerts cancelled.
        """
        cancelled = await self._alert_store.cancel_unsent(case_id, stage, self._time.now())
        if cancelled:
            logger.info(
                "alerts_cancelled", case_id=case_id, stage=stage.value, cancelled=cancelled
            )
        return cancelled

    async def list_alerts(self, case_id: str, include_sent: bool = False) -> list[DeadlineAlert]:
        """List a case's alerts.

        Cancelled alerts are always excluded; sent alerts only on request.
        """
        alerts = await self._alert_store.list_by_case(case_id)
        return [
            a for a in alerts if not a.cancelled and (include_sent or not a.sent)
        ]

    async def get_due_alerts(self) -> list[DeadlineAlert]:
        """Alerts the dispatcher should deliver today."""
        return await self._alert_store.list_due(self._time.today())

    async def mark_sent(self, alert_id: UUID) -> DeadlineAlert:
        """Record that the dispatcher delivered an alert.

        Raises:
            AlertNotFoundError: Alert doesn't exist.
            AlertAlreadySentError: Alert was already sent or cancelled.
        """
        alert = await self._alert_store.get_by_id(alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id=alert_id)
        if not alert.is_active:
            sent_on = alert.sent_at.date() if alert.sent_at is not None else None
            raise AlertAlreadySentError(alert_id=alert_id, sent_on=sent_on)
        sent = await self._alert_store.mark_sent(alert_id, self._time.now())
        logger.info("alert_marked_sent", alert_id=str(alert_id), case_id=alert.case_id)
        return sent

    def _build_alert(
        self,
        case_id: str,
        definition: StageDefinition,
        deadline: date,
        threshold: AlertThreshold,
        trigger: date,
        recipients: tuple[str, ...],
    ) -> DeadlineAlert:
        return DeadlineAlert(
            alert_id=uuid4(),
            case_id=case_id,
            stage=definition.stage,
            deadline=deadline,
            level=threshold.level,
            trigger_date=trigger,
            recipients=recipients,
            title=f"{threshold.title_prefix} {definition.description}",
            message=_alert_message(threshold, definition),
            created_at=self._time.now(),
        )


def _alert_message(threshold: AlertThreshold, definition: StageDefinition) -> str:
    description = definition.description
    action = definition.next_action
    if threshold.lead_days == 0:
        return (
            f'Today is the last day to complete the stage "{description}". '
            f"The deadline expires today. {action} immediately."
        )
    if threshold.level is AlertLevel.URGENT:
        return (
            f"Only {threshold.lead_days} business days left to complete the stage "
            f'"{description}". Immediate action required! {action}.'
        )
    return (
        f"{threshold.lead_days} business days left to complete the stage "
        f'"{description}". Next action: {action}.'
    )
