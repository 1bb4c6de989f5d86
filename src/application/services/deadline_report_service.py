"""Deadline report service.

Summarises the stored stage deadlines of a case as seen from today:
per-level counts, overdue and upcoming stages, unset stages and the next
deadline. Read-only; alert levels are recomputed on every call.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from structlog import get_logger

from src.domain.errors.deadline import CaseNotFoundError
from src.domain.models.deadline_report import DeadlineReport

if TYPE_CHECKING:
    from src.application.ports.case_store import CaseStoreProtocol
    from src.application.ports.time_authority import TimeAuthorityProtocol
    from src.application.services.deadline_calculator import DeadlineCalculator

logger = get_logger(__name__)


class DeadlineReportService:
    """Builds per-case deadline reports."""

    def __init__(
        self,
        calculator: DeadlineCalculator,
        case_store: CaseStoreProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._calculator = calculator
        self._case_store = case_store
        self._time = time_authority

    async def build_report(self, case_id: str) -> DeadlineReport:
        """Build a deadline report for a case.

        Stages present in the catalog but missing from the stored map are
        reported as unset.

        Args:
            case_id: The case identifier.

        Returns:
            The DeadlineReport for today.

        Raises:
            CaseNotFoundError: Case doesn't exist.
        """
        timeline = await self._case_store.get_timeline(case_id)
        if timeline is None:
            raise CaseNotFoundError(case_id=case_id)

        today = self._time.today()
        stored = await self._case_store.get_stage_deadlines(case_id)

        views = []
        unset = []
        for stage in self._calculator.stages:
            deadline = stored.get(stage)
            if deadline is None:
                unset.append(stage)
                continue
            views.append(self._calculator.describe_deadline(deadline, today))

        # Most pressing first, then by due date.
        views.sort(key=lambda v: (-v.alert_level.severity, v.deadline.due_date))
        counts = Counter(v.alert_level for v in views)

        report = DeadlineReport(
            case_id=case_id,
            today=today,
            current_stage=timeline.current_stage,
            views=tuple(views),
            unset_stages=tuple(unset),
            level_counts=dict(counts),
        )
        logger.debug(
            "deadline_report_built",
            case_id=case_id,
            overdue=len(report.overdue),
            upcoming=len(report.upcoming),
            unset=len(report.unset_stages),
        )
        return report
