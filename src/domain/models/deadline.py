"""Deadline domain models.

- AlertLevel: Urgency classification derived from remaining days
- Deadline: A computed due date plus the inputs that produced it
- DeadlineView: Read-only presentation of a deadline relative to today

Deadlines are derived data. The alert level is never stored: it is a pure
function of (today, deadline) recomputed on every read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from src.domain.models.karin_stage import BusinessDayRegime, DurationUnit, KarinStage


class AlertLevel(str, Enum):
    """Escalating urgency of a deadline.

    Thresholds on remaining days (in the stage's unit):
    - >= 10: INFO
    - 5-9: WARNING
    - 2-4: URGENT
    - 0-1: CRITICAL
    - past the due date: OVERDUE

    NONE marks a stage that has no deadline yet.
    """

    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    URGENT = "urgent"
    CRITICAL = "critical"
    OVERDUE = "overdue"

    @classmethod
    def from_days_remaining(cls, days_remaining: int, overdue: bool = False) -> AlertLevel:
        """Classify a remaining-day count.

        Args:
            days_remaining: Days left until the deadline (negative if past).
            overdue: Force OVERDUE, e.g. when today is after the due date
                but no business day has elapsed since.

        Returns:
            The alert level.
        """
        if overdue or days_remaining < 0:
            return cls.OVERDUE
        if days_remaining < 2:
            return cls.CRITICAL
        if days_remaining < 5:
            return cls.URGENT
        if days_remaining < 10:
            return cls.WARNING
        return cls.INFO

    @property
    def severity(self) -> int:
        """Ordinal for sorting, NONE lowest and OVERDUE highest."""
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER: tuple[AlertLevel, ...] = (
    AlertLevel.NONE,
    AlertLevel.INFO,
    AlertLevel.WARNING,
    AlertLevel.URGENT,
    AlertLevel.CRITICAL,
    AlertLevel.OVERDUE,
)


@dataclass(frozen=True, eq=True)
class Deadline:
    """A computed stage deadline.

    Attributes:
        stage: The stage this deadline belongs to.
        due_date: The computed due date.
        start_date: Date the stage began.
        base_days: Statutory duration used.
        extension_days: Approved extension applied.
        unit: Unit of base_days and extension_days.
        regime: Business-day regime used.
        region: Region whose holidays were applied, if any.
    """

    stage: KarinStage
    due_date: date
    start_date: date
    base_days: int
    extension_days: int = field(default=0)
    unit: DurationUnit = field(default=DurationUnit.BUSINESS_DAY)
    regime: BusinessDayRegime = field(default=BusinessDayRegime.ADMINISTRATIVE)
    region: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.extension_days < 0:
            raise ValueError(f"extension_days must be >= 0, got {self.extension_days}")
        if self.due_date < self.start_date:
            raise ValueError("due_date cannot precede start_date")

    @property
    def total_days(self) -> int:
        return self.base_days + self.extension_days

    def with_due_date(self, due_date: date, extension_days: int) -> Deadline:
        """Return a copy moved to a new due date after an extension."""
        return Deadline(
            stage=self.stage,
            due_date=due_date,
            start_date=self.start_date,
            base_days=self.base_days,
            extension_days=extension_days,
            unit=self.unit,
            regime=self.regime,
            region=self.region,
        )


@dataclass(frozen=True)
class DeadlineView:
    """Read-only view of a deadline relative to a reference day.

    Attributes:
        deadline: The underlying deadline.
        today: Reference day the view was computed for.
        days_remaining: Days left in the stage's unit; negative when overdue.
        alert_level: Urgency classification.
        message: Human-readable remaining/overdue text.
        description: Stage description.
        next_action: Action required before the deadline.
        article: Statutory article reference.
    """

    deadline: Deadline
    today: date
    days_remaining: int
    alert_level: AlertLevel
    message: str
    description: str
    next_action: str
    article: str

    @property
    def stage(self) -> KarinStage:
        return self.deadline.stage

    @property
    def is_overdue(self) -> bool:
        return self.alert_level is AlertLevel.OVERDUE

    @property
    def is_calendar_days(self) -> bool:
        return self.deadline.unit is DurationUnit.CALENDAR_DAY
