"""Case timeline helpers for engine integration tests."""

from datetime import date

from src.domain.models.karin_stage import KarinStage
from src.infrastructure.stubs import CaseStoreStub

CASE_ID = "case-karin-001"
CREATED_ON = date(2025, 3, 6)


async def advance_case(
    case_store: CaseStoreStub,
    stage: KarinStage,
    started_on: date,
    start_stage: KarinStage | None = None,
    case_id: str = CASE_ID,
) -> None:
    """Move a case into ``stage``, recording when ``start_stage`` began."""
    timeline = await case_store.get_timeline(case_id)
    assert timeline is not None
    timeline = timeline.with_stage_start(start_stage or stage, started_on)
    case_store.add_case(timeline.with_current_stage(stage))
