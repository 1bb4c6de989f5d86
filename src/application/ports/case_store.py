"""Case store protocol.

The case record store is an external collaborator. The engine reads a
case's timeline from it and writes computed deadlines back as a
structured ``stage -> Deadline`` map.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.models.case_timeline import CaseTimeline, ExtensionAudit
    from src.domain.models.deadline import Deadline
    from src.domain.models.karin_stage import KarinStage


class CaseStoreProtocol(Protocol):
    """Repository protocol for case timelines and stage deadlines."""

    @abstractmethod
    async def get_timeline(self, case_id: str) -> CaseTimeline | None:
        """Retrieve a case's timeline.

        Args:
            case_id: The case identifier.

        Returns:
            The CaseTimeline if found, None otherwise.
        """
        ...

    @abstractmethod
    async def save_stage_deadlines(
        self,
        case_id: str,
        deadlines: Mapping[KarinStage, Deadline | None],
    ) -> None:
        """Replace the stored stage deadline map for a case.

        Stages mapped to None have no deadline and must be stored as unset.

        Args:
            case_id: The case identifier.
            deadlines: Deadline per catalog stage.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        ...

    @abstractmethod
    async def get_stage_deadlines(self, case_id: str) -> dict[KarinStage, Deadline | None]:
        """Retrieve the stored stage deadline map for a case.

        Args:
            case_id: The case identifier.

        Returns:
            The stored map; empty if nothing was computed yet.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        ...

    @abstractmethod
    async def set_stage_deadline(
        self,
        case_id: str,
        stage: KarinStage,
        deadline: Deadline,
    ) -> None:
        """Overwrite a single stage's deadline.

        Args:
            case_id: The case identifier.
            stage: The stage whose deadline changes.
            deadline: The new deadline.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        ...

    @abstractmethod
    async def record_extension_audit(self, case_id: str, audit: ExtensionAudit) -> None:
        """Record an approved extension on the case.

        The stored total approved extension for the audit's stage becomes
        the larger of its current value and ``audit.extension_days``;
        approved totals only grow, so audits written out of order never
        shrink it.

        Args:
            case_id: The case identifier.
            audit: The approval record.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        ...
