"""Unit tests for DeadlineCalculator.

The fake clock is frozen on Thursday 2025-03-06.
"""

from datetime import date

import pytest

from src.application.services.business_calendar import BusinessCalendar
from src.application.services.deadline_calculator import DeadlineCalculator
from src.domain.errors.deadline import UnknownStageError
from src.domain.models.deadline import AlertLevel, Deadline
from src.domain.models.karin_stage import DurationUnit, KarinStage

START = date(2025, 3, 6)


class TestComputeDeadline:
    """Tests for compute_deadline."""

    def test_dt_notification(self, calculator: DeadlineCalculator) -> None:
        deadline = calculator.compute_deadline(START, KarinStage.DT_NOTIFICATION)

        assert deadline.due_date == date(2025, 3, 11)
        assert deadline.start_date == START
        assert deadline.base_days == 3
        assert deadline.unit is DurationUnit.BUSINESS_DAY

    def test_accepts_stage_identifier(self, calculator: DeadlineCalculator) -> None:
        assert calculator.compute_deadline(START, "dt_notification").due_date == date(2025, 3, 11)

    def test_investigation_skips_holidays(self, calculator: DeadlineCalculator) -> None:
        assert calculator.compute_deadline(START, KarinStage.INVESTIGATION).due_date == date(
            2025, 4, 17
        )

    def test_extension_equals_longer_base(self, calculator: DeadlineCalculator) -> None:
        """base 30 + extension 15 lands where 45 business days would."""
        deadline = calculator.compute_deadline(START, KarinStage.INVESTIGATION, extension_days=15)

        assert deadline.due_date == calculator.calendar.add_business_days(START, 45)
        assert deadline.due_date == date(2025, 5, 12)
        assert deadline.total_days == 45

    def test_calendar_day_stage(self, calculator: DeadlineCalculator) -> None:
        deadline = calculator.compute_deadline(START, KarinStage.MEASURES_ADOPTION)

        assert deadline.due_date == date(2025, 3, 21)
        assert deadline.unit is DurationUnit.CALENDAR_DAY

    def test_reception_is_immediate(self, calculator: DeadlineCalculator) -> None:
        assert calculator.compute_deadline(START, KarinStage.RECEPTION).due_date == START

    def test_region_applies_regional_holidays(self, calculator: DeadlineCalculator) -> None:
        monday = date(2025, 8, 18)

        national = calculator.compute_deadline(monday, KarinStage.DT_NOTIFICATION)
        regional = calculator.compute_deadline(monday, KarinStage.DT_NOTIFICATION, region="XVI")

        assert national.due_date == date(2025, 8, 21)
        assert regional.due_date == date(2025, 8, 22)
        assert regional.region == "XVI"

    @pytest.mark.parametrize("stage", ["closed", "appeal"])
    def test_unknown_stage(self, calculator: DeadlineCalculator, stage: str) -> None:
        with pytest.raises(UnknownStageError):
            calculator.compute_deadline(START, stage)

    def test_negative_extension_rejected(self, calculator: DeadlineCalculator) -> None:
        with pytest.raises(ValueError, match="extension_days"):
            calculator.compute_deadline(START, KarinStage.INVESTIGATION, extension_days=-1)


class TestExtendDeadline:
    def test_business_days(self, calculator: DeadlineCalculator) -> None:
        assert calculator.extend_deadline(
            date(2025, 4, 17), KarinStage.INVESTIGATION, 15
        ) == date(2025, 5, 12)

    def test_calendar_days(self, calculator: DeadlineCalculator) -> None:
        assert calculator.extend_deadline(
            date(2025, 3, 21), KarinStage.MEASURES_ADOPTION, 5
        ) == date(2025, 3, 26)


class TestGetDeadlineInfo:
    """Remaining days, alert level and message relative to today."""

    @pytest.mark.parametrize(
        ("today", "remaining", "level", "message"),
        [
            (date(2025, 3, 6), 3, AlertLevel.URGENT, "3 business days remaining"),
            (date(2025, 3, 10), 1, AlertLevel.CRITICAL, "1 business day remaining"),
            (date(2025, 3, 11), 0, AlertLevel.CRITICAL, "Due today"),
            (date(2025, 3, 12), -1, AlertLevel.OVERDUE, "Overdue by 1 business day"),
            (date(2025, 3, 15), -3, AlertLevel.OVERDUE, "Overdue by 3 business days"),
        ],
    )
    def test_dt_notification_over_time(
        self,
        calculator: DeadlineCalculator,
        today: date,
        remaining: int,
        level: AlertLevel,
        message: str,
    ) -> None:
        view = calculator.get_deadline_info(START, KarinStage.DT_NOTIFICATION, today=today)

        assert view.days_remaining == remaining
        assert view.alert_level is level
        assert view.message == message

    def test_view_carries_stage_metadata(self, calculator: DeadlineCalculator) -> None:
        view = calculator.get_deadline_info(START, KarinStage.DT_NOTIFICATION, today=START)

        assert view.description == "Notification to the Labour Directorate (DT)"
        assert view.next_action == "Send the official notification"
        assert view.article == "Art. 5, Ley Karin"
        assert view.today == START

    def test_defaults_to_time_authority_today(self, calculator: DeadlineCalculator) -> None:
        view = calculator.get_deadline_info(START, KarinStage.INVESTIGATION)

        assert view.today == date(2025, 3, 6)
        assert view.days_remaining == 30
        assert view.alert_level is AlertLevel.INFO

    def test_calendar_day_stage_counts_calendar_days(
        self, calculator: DeadlineCalculator
    ) -> None:
        soon = calculator.get_deadline_info(
            START, KarinStage.MEASURES_ADOPTION, today=date(2025, 3, 20)
        )
        late = calculator.get_deadline_info(
            START, KarinStage.MEASURES_ADOPTION, today=date(2025, 3, 23)
        )

        assert soon.days_remaining == 1
        assert soon.message == "1 calendar day remaining"
        assert soon.alert_level is AlertLevel.CRITICAL
        assert late.days_remaining == -2
        assert late.message == "Overdue by 2 calendar days"
        assert late.is_overdue

    def test_requires_today_without_time_authority(self, calendar: BusinessCalendar) -> None:
        calculator = DeadlineCalculator(calendar=calendar)

        with pytest.raises(ValueError, match="today"):
            calculator.get_deadline_info(START, KarinStage.INVESTIGATION)


class TestDaysRemaining:
    def test_overdue_over_weekend_is_at_least_one(self, calculator: DeadlineCalculator) -> None:
        """Past the due date with no business day elapsed still reads overdue."""
        deadline = Deadline(
            stage=KarinStage.DT_NOTIFICATION,
            due_date=date(2025, 3, 14),
            start_date=date(2025, 3, 11),
            base_days=3,
        )

        view = calculator.describe_deadline(deadline, today=date(2025, 3, 15))

        assert view.days_remaining == -1
        assert view.alert_level is AlertLevel.OVERDUE

    def test_alert_level_for(self) -> None:
        assert DeadlineCalculator.alert_level_for(7) is AlertLevel.WARNING
        assert DeadlineCalculator.alert_level_for(7, overdue=True) is AlertLevel.OVERDUE
