"""Alert recipient resolver protocol.

Who receives a case's deadline alerts (assigned investigator, case team)
is decided outside the engine.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.models.case_timeline import CaseTimeline


class RecipientResolverProtocol(Protocol):
    """Resolves alert recipients for a case."""

    @abstractmethod
    async def resolve(self, timeline: CaseTimeline) -> list[str]:
        """Return the user ids to notify for a case.

        Args:
            timeline: The case's timeline.

        Returns:
            Recipient user ids without duplicates; may be empty.
        """
        ...
