"""Stage deadline calculator.

Turns a stage start date into a due date using the stage catalog, and
builds read-only views of a deadline relative to a reference day.

Rules:
- Calendar-day stages add ``base + extension`` raw days.
- Business-day stages delegate to the BusinessCalendar using the stage's
  regime and the caller's region.
- Remaining days are counted in the stage's own unit.
- Once today is past the due date the view is OVERDUE and reports a
  negative remaining count, even when no business day has elapsed since.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from src.application.services.business_calendar import BusinessCalendar
from src.domain.models.deadline import AlertLevel, Deadline, DeadlineView
from src.domain.models.karin_stage import (
    DEFAULT_STAGE_CATALOG,
    DurationUnit,
    KarinStage,
    StageCatalog,
    StageDefinition,
)

if TYPE_CHECKING:
    from src.application.ports.time_authority import TimeAuthorityProtocol


class DeadlineCalculator:
    """Computes stage deadlines and deadline views.

    Example:
        >>> calculator = DeadlineCalculator(calendar=BusinessCalendar(holidays))
        >>> deadline = calculator.compute_deadline(date(2025, 3, 6), "dt_notification")
        >>> deadline.due_date
        datetime.date(2025, 3, 11)
    """

    def __init__(
        self,
        calendar: BusinessCalendar,
        stages: StageCatalog = DEFAULT_STAGE_CATALOG,
        time_authority: TimeAuthorityProtocol | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            calendar: Business-day calendar (carries the holiday catalog).
            stages: Stage catalog to resolve durations from.
            time_authority: Source of "today" when a caller omits it.
        """
        self._calendar = calendar
        self._stages = stages
        self._time = time_authority

    @property
    def calendar(self) -> BusinessCalendar:
        return self._calendar

    @property
    def stages(self) -> StageCatalog:
        return self._stages

    def definition_for(self, stage: KarinStage | str) -> StageDefinition:
        """Resolve a stage definition, raising UnknownStageError if absent."""
        return self._stages.get_definition(stage)

    def compute_deadline(
        self,
        start_date: date,
        stage: KarinStage | str,
        region: str | None = None,
        extension_days: int = 0,
    ) -> Deadline:
        """Compute a stage's due date.

        Args:
            start_date: Date the stage began.
            stage: Stage or raw stage identifier.
            region: Region code for regional holidays, or None.
            extension_days: Approved extension, in the stage's unit.

        Returns:
            The computed Deadline.

        Raises:
            UnknownStageError: If the stage has no definition.
            ValueError: If extension_days is negative.
        """
        if extension_days < 0:
            raise ValueError(f"extension_days must be >= 0, got {extension_days}")
        definition = self.definition_for(stage)
        due_date = self._add(definition, start_date, definition.base_days + extension_days, region)
        return Deadline(
            stage=definition.stage,
            due_date=due_date,
            start_date=start_date,
            base_days=definition.base_days,
            extension_days=extension_days,
            unit=definition.unit,
            regime=definition.regime,
            region=region,
        )

    def extend_deadline(
        self,
        deadline_date: date,
        stage: KarinStage | str,
        days: int,
        region: str | None = None,
    ) -> date:
        """Push an existing due date forward in the stage's unit.

        Raises:
            UnknownStageError: If the stage has no definition.
        """
        definition = self.definition_for(stage)
        return self._add(definition, deadline_date, days, region)

    def get_deadline_info(
        self,
        start_date: date,
        stage: KarinStage | str,
        region: str | None = None,
        extension_days: int = 0,
        today: date | None = None,
    ) -> DeadlineView:
        """Compute a deadline and describe it relative to today.

        Read-only: nothing is persisted.

        Args:
            start_date: Date the stage began.
            stage: Stage or raw stage identifier.
            region: Region code for regional holidays, or None.
            extension_days: Approved extension, in the stage's unit.
            today: Reference day; defaults to the time authority's today.

        Returns:
            DeadlineView with remaining days, alert level and message.

        Raises:
            UnknownStageError: If the stage has no definition.
        """
        deadline = self.compute_deadline(start_date, stage, region, extension_days)
        return self.describe_deadline(deadline, today)

    def describe_deadline(self, deadline: Deadline, today: date | None = None) -> DeadlineView:
        """Describe an already computed deadline relative to today."""
        reference = self._resolve_today(today)
        definition = self.definition_for(deadline.stage)
        overdue = reference > deadline.due_date
        remaining = self.days_remaining(deadline, reference)
        return DeadlineView(
            deadline=deadline,
            today=reference,
            days_remaining=remaining,
            alert_level=self.alert_level_for(remaining, overdue),
            message=_remaining_message(remaining, deadline.unit),
            description=definition.description,
            next_action=definition.next_action,
            article=definition.article,
        )

    def days_remaining(self, deadline: Deadline, today: date) -> int:
        """Remaining days in the deadline's unit; negative once past due.

        Business-day stages count the half-open range (today, due]. Past
        the due date the count is at least one day overdue.
        """
        if deadline.unit is DurationUnit.CALENDAR_DAY:
            return (deadline.due_date - today).days
        if today <= deadline.due_date:
            return self._calendar.count_business_days(
                today, deadline.due_date, deadline.regime, deadline.region
            )
        elapsed = self._calendar.count_business_days(
            deadline.due_date, today, deadline.regime, deadline.region
        )
        return -max(1, elapsed)

    @staticmethod
    def alert_level_for(days_remaining: int, overdue: bool = False) -> AlertLevel:
        return AlertLevel.from_days_remaining(days_remaining, overdue=overdue)

    def _add(self, definition: StageDefinition, day: date, days: int, region: str | None) -> date:
        if definition.unit is DurationUnit.CALENDAR_DAY:
            return day + timedelta(days=days)
        return self._calendar.add_business_days(day, days, definition.regime, region)

    def _resolve_today(self, today: date | None) -> date:
        if today is not None:
            return today
        if self._time is None:
            raise ValueError("today is required when no time authority is configured")
        return self._time.today()


def _remaining_message(days_remaining: int, unit: DurationUnit) -> str:
    if days_remaining < 0:
        return f"Overdue by {_quantity(-days_remaining, unit)}"
    if days_remaining == 0:
        return "Due today"
    return f"{_quantity(days_remaining, unit)} remaining"


def _quantity(days: int, unit: DurationUnit) -> str:
    label = unit.label
    if days == 1:
        label = label[:-1]
    return f"{days} {label}"
