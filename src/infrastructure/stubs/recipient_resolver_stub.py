"""In-memory stub implementation of RecipientResolverProtocol.

Returns the assigned investigator followed by the case team, without
duplicates. Not intended for production use.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.domain.models.case_timeline import CaseTimeline


class RecipientResolverStub:
    """Configurable recipient resolver.

    Example:
        >>> resolver = RecipientResolverStub()
        >>> resolver.assign("case-1", investigator="inv-1", team=["lead-1", "inv-1"])
        >>> await resolver.resolve(timeline)
        ['inv-1', 'lead-1']
    """

    def __init__(self, default_recipients: Iterable[str] = ()) -> None:
        """Initialize the stub.

        Args:
            default_recipients: Returned for cases with no assignment.
        """
        self._default = list(default_recipients)
        self._assignments: dict[str, list[str]] = {}
        self.calls: list[str] = []

    def assign(
        self,
        case_id: str,
        investigator: str | None = None,
        team: Iterable[str] = (),
    ) -> None:
        recipients = [investigator] if investigator else []
        recipients.extend(team)
        self._assignments[case_id] = recipients

    def clear(self, case_id: str) -> None:
        """Leave a case with no recipients at all."""
        self._assignments[case_id] = []

    async def resolve(self, timeline: CaseTimeline) -> list[str]:
        self.calls.append(timeline.case_id)
        recipients = self._assignments.get(timeline.case_id, self._default)
        return list(dict.fromkeys(r for r in recipients if r))
