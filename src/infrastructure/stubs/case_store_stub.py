"""In-memory stub implementation of CaseStoreProtocol.

This module provides an in-memory case store for development and
testing. Not intended for production use.
"""

from __future__ import annotations

from collections.abc import Mapping

from src.domain.errors.deadline import CaseNotFoundError
from src.domain.models.case_timeline import CaseTimeline, ExtensionAudit
from src.domain.models.deadline import Deadline
from src.domain.models.karin_stage import KarinStage


class CaseStoreStub:
    """In-memory implementation of CaseStoreProtocol.

    Recording an extension audit also updates the timeline's approved
    extension total, as the real case store does.

    Example:
        >>> stub = CaseStoreStub()
        >>> stub.add_case(timeline)
        >>> await stub.get_timeline(timeline.case_id)
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._timelines: dict[str, CaseTimeline] = {}
        self._deadlines: dict[str, dict[KarinStage, Deadline | None]] = {}
        self._audits: dict[str, list[ExtensionAudit]] = {}

    def add_case(self, timeline: CaseTimeline) -> None:
        """Insert or replace a case timeline (test setup helper)."""
        self._timelines[timeline.case_id] = timeline
        self._deadlines.setdefault(timeline.case_id, {})
        self._audits.setdefault(timeline.case_id, [])

    def audits_for(self, case_id: str) -> list[ExtensionAudit]:
        """Return recorded extension audits for a case (test inspection)."""
        return list(self._audits.get(case_id, []))

    async def get_timeline(self, case_id: str) -> CaseTimeline | None:
        return self._timelines.get(case_id)

    async def save_stage_deadlines(
        self,
        case_id: str,
        deadlines: Mapping[KarinStage, Deadline | None],
    ) -> None:
        self._require(case_id)
        self._deadlines[case_id] = dict(deadlines)

    async def get_stage_deadlines(self, case_id: str) -> dict[KarinStage, Deadline | None]:
        self._require(case_id)
        return dict(self._deadlines.get(case_id, {}))

    async def set_stage_deadline(
        self,
        case_id: str,
        stage: KarinStage,
        deadline: Deadline,
    ) -> None:
        self._require(case_id)
        self._deadlines.setdefault(case_id, {})[stage] = deadline

    async def record_extension_audit(self, case_id: str, audit: ExtensionAudit) -> None:
        timeline = self._require(case_id)
        self._audits.setdefault(case_id, []).append(audit)
        total = max(timeline.extension_for(audit.stage), audit.extension_days)
        self._timelines[case_id] = timeline.with_extension(audit.stage, total)

    def _require(self, case_id: str) -> CaseTimeline:
        timeline = self._timelines.get(case_id)
        if timeline is None:
            raise CaseNotFoundError(case_id=case_id)
        return timeline
