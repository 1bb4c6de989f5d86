"""Unit tests for deadline domain models."""

from datetime import date

import pytest

from src.domain.models.deadline import AlertLevel, Deadline, DeadlineView
from src.domain.models.karin_stage import DurationUnit, KarinStage


class TestAlertLevelFromDaysRemaining:
    """Threshold classification of remaining days."""

    @pytest.mark.parametrize(
        ("days", "level"),
        [
            (30, AlertLevel.INFO),
            (10, AlertLevel.INFO),
            (9, AlertLevel.WARNING),
            (5, AlertLevel.WARNING),
            (4, AlertLevel.URGENT),
            (2, AlertLevel.URGENT),
            (1, AlertLevel.CRITICAL),
            (0, AlertLevel.CRITICAL),
            (-1, AlertLevel.OVERDUE),
            (-20, AlertLevel.OVERDUE),
        ],
    )
    def test_thresholds(self, days: int, level: AlertLevel) -> None:
        assert AlertLevel.from_days_remaining(days) is level

    def test_overdue_flag_wins(self) -> None:
        assert AlertLevel.from_days_remaining(0, overdue=True) is AlertLevel.OVERDUE

    def test_severity_order(self) -> None:
        ordered = sorted(AlertLevel, key=lambda level: level.severity)

        assert ordered == [
            AlertLevel.NONE,
            AlertLevel.INFO,
            AlertLevel.WARNING,
            AlertLevel.URGENT,
            AlertLevel.CRITICAL,
            AlertLevel.OVERDUE,
        ]


class TestDeadline:
    """Tests for the Deadline value object."""

    def test_total_days(self) -> None:
        deadline = Deadline(
            stage=KarinStage.INVESTIGATION,
            due_date=date(2025, 5, 12),
            start_date=date(2025, 3, 6),
            base_days=30,
            extension_days=15,
        )

        assert deadline.total_days == 45

    def test_due_before_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="precede"):
            Deadline(
                stage=KarinStage.DT_NOTIFICATION,
                due_date=date(2025, 3, 5),
                start_date=date(2025, 3, 6),
                base_days=3,
            )

    def test_negative_extension_rejected(self) -> None:
        with pytest.raises(ValueError, match="extension_days"):
            Deadline(
                stage=KarinStage.INVESTIGATION,
                due_date=date(2025, 4, 17),
                start_date=date(2025, 3, 6),
                base_days=30,
                extension_days=-1,
            )

    def test_with_due_date_keeps_inputs(self) -> None:
        original = Deadline(
            stage=KarinStage.INVESTIGATION,
            due_date=date(2025, 4, 17),
            start_date=date(2025, 3, 6),
            base_days=30,
            region="XVI",
        )

        moved = original.with_due_date(date(2025, 5, 12), extension_days=15)

        assert moved.due_date == date(2025, 5, 12)
        assert moved.extension_days == 15
        assert moved.start_date == original.start_date
        assert moved.region == "XVI"
        assert original.due_date == date(2025, 4, 17)


class TestDeadlineView:
    def test_properties(self) -> None:
        deadline = Deadline(
            stage=KarinStage.MEASURES_ADOPTION,
            due_date=date(2025, 3, 21),
            start_date=date(2025, 3, 6),
            base_days=15,
            unit=DurationUnit.CALENDAR_DAY,
        )
        view = DeadlineView(
            deadline=deadline,
            today=date(2025, 3, 23),
            days_remaining=-2,
            alert_level=AlertLevel.OVERDUE,
            message="Overdue by 2 calendar days",
            description="Adoption of ordered measures",
            next_action="Implement the required measures",
            article="Art. 12, Ley Karin",
        )

        assert view.stage is KarinStage.MEASURES_ADOPTION
        assert view.is_overdue
        assert view.is_calendar_days
