"""In-memory stub implementation of DeadlineAlertStoreProtocol.

This module provides an in-memory alert store for development and
testing. Not intended for production use. Alerts are never deleted.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from uuid import UUID

from src.domain.errors.deadline import AlertAlreadySentError, AlertNotFoundError
from src.domain.models.deadline_alert import DeadlineAlert
from src.domain.models.karin_stage import KarinStage


class DeadlineAlertStoreStub:
    """In-memory implementation of DeadlineAlertStoreProtocol.

    Attributes:
        _alerts: Alerts by id, in insertion order.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._alerts: dict[UUID, DeadlineAlert] = {}

    @property
    def all_alerts(self) -> list[DeadlineAlert]:
        """Every stored alert including cancelled ones (test inspection)."""
        return list(self._alerts.values())

    async def save_many(self, alerts: Sequence[DeadlineAlert]) -> None:
        for alert in alerts:
            self._alerts[alert.alert_id] = alert

    async def cancel_unsent(
        self,
        case_id: str,
        stage: KarinStage,
        cancelled_at: datetime,
    ) -> int:
        cancelled = 0
        for alert_id, alert in list(self._alerts.items()):
            if alert.case_id == case_id and alert.stage is stage and alert.is_active:
                self._alerts[alert_id] = alert.with_cancellation(cancelled_at)
                cancelled += 1
        return cancelled

    async def list_by_case(self, case_id: str) -> list[DeadlineAlert]:
        return sorted(
            (a for a in self._alerts.values() if a.case_id == case_id),
            key=lambda a: (a.trigger_date, a.created_at),
        )

    async def list_due(self, today: date) -> list[DeadlineAlert]:
        return sorted(
            (a for a in self._alerts.values() if a.is_due(today)),
            key=lambda a: (a.trigger_date, a.case_id),
        )

    async def get_by_id(self, alert_id: UUID) -> DeadlineAlert | None:
        return self._alerts.get(alert_id)

    async def mark_sent(self, alert_id: UUID, sent_at: datetime) -> DeadlineAlert:
        alert = self._alerts.get(alert_id)
        if alert is None:
            raise AlertNotFoundError(alert_id=alert_id)
        if not alert.is_active:
            raise AlertAlreadySentError(alert_id=alert_id)
        sent = alert.with_sent(sent_at)
        self._alerts[alert_id] = sent
        return sent
