"""Deadline alert domain model.

Alerts are documents polled by an external dispatcher, which delivers any
alert with ``trigger_date <= today`` that is neither sent nor cancelled.
Re-scheduling a deadline cancels (never deletes) the unsent alerts for
the same case and stage. An alert is terminal once sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from src.domain.models.deadline import AlertLevel
from src.domain.models.karin_stage import KarinStage


@dataclass(frozen=True, eq=True)
class DeadlineAlert:
    """A scheduled deadline notification.

    Attributes:
        alert_id: Unique identifier.
        case_id: Case the alert belongs to.
        stage: Stage whose deadline is tracked.
        deadline: Target deadline.
        level: Alert level.
        trigger_date: Day the alert should fire.
        recipients: User ids to notify.
        title: Notification title.
        message: Notification body.
        created_at: When the alert was scheduled (UTC).
        sent: Whether the dispatcher delivered it.
        sent_at: Delivery timestamp.
        cancelled: Whether a re-schedule superseded it.
        cancelled_at: Cancellation timestamp.
    """

    alert_id: UUID
    case_id: str
    stage: KarinStage
    deadline: date
    level: AlertLevel
    trigger_date: date
    recipients: tuple[str, ...]
    title: str
    message: str
    created_at: datetime

    sent: bool = field(default=False)
    sent_at: datetime | None = field(default=None)
    cancelled: bool = field(default=False)
    cancelled_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate alert fields after initialization.

        Raises:
            ValueError: If any field validation fails.
        """
        if self.level in (AlertLevel.NONE, AlertLevel.OVERDUE):
            raise ValueError(f"alerts cannot be scheduled at level {self.level.value}")
        if self.trigger_date > self.deadline:
            raise ValueError("trigger_date cannot be after the deadline")
        if self.sent and self.sent_at is None:
            raise ValueError("sent alerts require sent_at")
        if self.cancelled and self.cancelled_at is None:
            raise ValueError("cancelled alerts require cancelled_at")
        if self.sent and self.cancelled:
            raise ValueError("an alert cannot be both sent and cancelled")

    @property
    def is_active(self) -> bool:
        """Still waiting to be delivered."""
        return not self.sent and not self.cancelled

    def is_due(self, today: date) -> bool:
        return self.is_active and self.trigger_date <= today

    def with_cancellation(self, cancelled_at: datetime) -> DeadlineAlert:
        """Return a cancelled copy.

        Raises:
            ValueError: If the alert was already sent.
        """
        if self.sent:
            raise ValueError("sent alerts cannot be cancelled")
        return DeadlineAlert(
            alert_id=self.alert_id,
            case_id=self.case_id,
            stage=self.stage,
            deadline=self.deadline,
            level=self.level,
            trigger_date=self.trigger_date,
            recipients=self.recipients,
            title=self.title,
            message=self.message,
            created_at=self.created_at,
            cancelled=True,
            cancelled_at=cancelled_at,
        )

    def with_sent(self, sent_at: datetime) -> DeadlineAlert:
        """Return a delivered copy.

        Raises:
            ValueError: If the alert is not active.
        """
        if not self.is_active:
            raise ValueError("only active alerts can be marked sent")
        return DeadlineAlert(
            alert_id=self.alert_id,
            case_id=self.case_id,
            stage=self.stage,
            deadline=self.deadline,
            level=self.level,
            trigger_date=self.trigger_date,
            recipients=self.recipients,
            title=self.title,
            message=self.message,
            created_at=self.created_at,
            sent=True,
            sent_at=sent_at,
        )
