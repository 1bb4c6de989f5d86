"""Deadline report domain models.

A DeadlineReport summarises every stage deadline stored for a case as seen
from a reference day. It is derived data and is never persisted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

from src.domain.models.deadline import AlertLevel, DeadlineView
from src.domain.models.karin_stage import KarinStage


@dataclass(frozen=True)
class DeadlineReport:
    """Per-case deadline summary.

    Attributes:
        case_id: Case the report describes.
        today: Reference day.
        current_stage: Stage the case is in.
        views: One view per stage that has a deadline, most pressing first.
        unset_stages: Catalog stages with no deadline yet.
        level_counts: Number of stages at each alert level.
    """

    case_id: str
    today: date
    current_stage: KarinStage
    views: tuple[DeadlineView, ...] = field(default=())
    unset_stages: tuple[KarinStage, ...] = field(default=())
    level_counts: Mapping[AlertLevel, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "level_counts", MappingProxyType(dict(self.level_counts)))

    @property
    def overdue(self) -> tuple[DeadlineView, ...]:
        return tuple(v for v in self.views if v.alert_level is AlertLevel.OVERDUE)

    @property
    def upcoming(self) -> tuple[DeadlineView, ...]:
        """Stages at WARNING, URGENT or CRITICAL."""
        pressing = (AlertLevel.WARNING, AlertLevel.URGENT, AlertLevel.CRITICAL)
        return tuple(v for v in self.views if v.alert_level in pressing)

    @property
    def next_deadline(self) -> DeadlineView | None:
        """Earliest deadline that has not lapsed yet."""
        pending = [v for v in self.views if not v.is_overdue]
        if not pending:
            return None
        return min(pending, key=lambda v: (v.deadline.due_date, v.stage.value))

    @property
    def has_overdue(self) -> bool:
        return bool(self.overdue)

    def count(self, level: AlertLevel) -> int:
        return self.level_counts.get(level, 0)
