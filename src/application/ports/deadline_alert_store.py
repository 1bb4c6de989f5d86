"""Deadline alert store protocol.

Alerts are polled by an external dispatcher. The store never deletes an
alert: re-scheduling marks the previous unsent alerts as cancelled.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import date, datetime
    from uuid import UUID

    from src.domain.models.deadline_alert import DeadlineAlert
    from src.domain.models.karin_stage import KarinStage


class DeadlineAlertStoreProtocol(Protocol):
    """Repository protocol for deadline alerts."""

    @abstractmethod
    async def save_many(self, alerts: Sequence[DeadlineAlert]) -> None:
        """Persist newly scheduled alerts."""
        ...

    @abstractmethod
    async def cancel_unsent(
        self,
        case_id: str,
        stage: KarinStage,
        cancelled_at: datetime,
    ) -> int:
        """Mark every unsent, uncancelled alert for (case, stage) as cancelled.

        Args:
            case_id: The case identifier.
            stage: The stage whose alerts are superseded.
            cancelled_at: Cancellation timestamp.

        Returns:
            Number of alerts cancelled.
        """
        ...

    @abstractmethod
    async def list_by_case(self, case_id: str) -> list[DeadlineAlert]:
        """List every alert for a case, by trigger date."""
        ...

    @abstractmethod
    async def list_due(self, today: date) -> list[DeadlineAlert]:
        """List alerts with ``trigger_date <= today`` not sent nor cancelled."""
        ...

    @abstractmethod
    async def get_by_id(self, alert_id: UUID) -> DeadlineAlert | None:
        """Retrieve an alert by ID.

        Returns:
            The DeadlineAlert if found, None otherwise.
        """
        ...

    @abstractmethod
    async def mark_sent(self, alert_id: UUID, sent_at: datetime) -> DeadlineAlert:
        """Mark an alert as delivered.

        Args:
            alert_id: The alert UUID.
            sent_at: Delivery timestamp.

        Returns:
            The updated alert.

        Raises:
            AlertNotFoundError: Alert doesn't exist.
            AlertAlreadySentError: Alert was already sent or cancelled.
        """
        ...
