"""Integration tests for the deadline extension workflow.

A request is filed, approved by a team lead, written onto the case and
picked up by the next recomputation, which moves the alert ladder.
"""

import asyncio
from datetime import date

import pytest

from src.application.services.deadline_engine import DeadlineEngine
from src.domain.models.deadline import AlertLevel
from src.domain.models.extension_request import Actor, ExtensionStatus
from src.domain.models.karin_stage import KarinStage
from src.infrastructure.stubs import CaseStoreStub
from tests.helpers.case_flow import CASE_ID, advance_case

pytestmark = pytest.mark.integration

JUSTIFICATION = "Three additional witnesses were identified"


@pytest.fixture
async def investigation_case(engine: DeadlineEngine, case_store: CaseStoreStub) -> None:
    await advance_case(
        case_store,
        KarinStage.INVESTIGATION,
        date(2025, 3, 6),
        start_stage=KarinStage.DECISION_TO_INVESTIGATE,
    )
    result = await engine.recompute_all_deadlines(CASE_ID)
    assert result.success


@pytest.mark.asyncio
@pytest.mark.usefixtures("investigation_case")
async def test_approved_extension_moves_deadline_and_alerts(
    engine: DeadlineEngine,
    case_store: CaseStoreStub,
    investigator: Actor,
    team_lead: Actor,
) -> None:
    requested = await engine.request_extension(
        CASE_ID, KarinStage.INVESTIGATION, date(2025, 4, 17), 15, JUSTIFICATION, investigator
    )
    approved = await engine.resolve_extension(
        requested.value.request_id, True, team_lead, "Approved for new witnesses"
    )

    assert approved.value.status is ExtensionStatus.APPROVED
    assert approved.value.new_deadline == date(2025, 5, 12)
    stored = await case_store.get_stage_deadlines(CASE_ID)
    assert stored[KarinStage.INVESTIGATION].due_date == date(2025, 5, 12)
    assert stored[KarinStage.INVESTIGATION].extension_days == 15

    recomputed = await engine.recompute_all_deadlines(CASE_ID)

    assert recomputed.value.deadlines[KarinStage.INVESTIGATION].due_date == date(2025, 5, 12)
    assert [(a.trigger_date, a.level) for a in recomputed.value.alerts] == [
        (date(2025, 4, 25), AlertLevel.INFO),
        (date(2025, 5, 5), AlertLevel.WARNING),
        (date(2025, 5, 8), AlertLevel.URGENT),
        (date(2025, 5, 12), AlertLevel.CRITICAL),
    ]
    active = await engine.list_alerts(CASE_ID)
    assert {a.deadline for a in active.value} == {date(2025, 5, 12)}


@pytest.mark.asyncio
@pytest.mark.usefixtures("investigation_case")
async def test_rejected_extension_keeps_deadline(
    engine: DeadlineEngine,
    case_store: CaseStoreStub,
    investigator: Actor,
    team_lead: Actor,
) -> None:
    requested = await engine.request_extension(
        CASE_ID, "investigation", date(2025, 4, 17), 10, JUSTIFICATION, investigator
    )

    rejected = await engine.resolve_extension(
        requested.value.request_id, False, team_lead, "Not justified"
    )

    assert rejected.value.status is ExtensionStatus.REJECTED
    assert rejected.value.new_deadline is None
    stored = await case_store.get_stage_deadlines(CASE_ID)
    assert stored[KarinStage.INVESTIGATION].due_date == date(2025, 4, 17)
    assert case_store.audits_for(CASE_ID) == []


@pytest.mark.asyncio
@pytest.mark.usefixtures("investigation_case")
async def test_cumulative_extensions_capped(
    engine: DeadlineEngine,
    investigator: Actor,
    team_lead: Actor,
) -> None:
    first = await engine.request_extension(
        CASE_ID, "investigation", date(2025, 4, 17), 20, JUSTIFICATION, investigator
    )
    await engine.resolve_extension(first.value.request_id, True, team_lead)

    second = await engine.request_extension(
        CASE_ID, "investigation", date(2025, 5, 16), 15, JUSTIFICATION, investigator
    )

    assert second.error_code == "exceeds_maximum"


@pytest.mark.asyncio
@pytest.mark.usefixtures("investigation_case")
async def test_concurrent_resolutions_have_one_winner(
    engine: DeadlineEngine,
    case_store: CaseStoreStub,
    investigator: Actor,
    team_lead: Actor,
) -> None:
    requested = await engine.request_extension(
        CASE_ID, "investigation", date(2025, 4, 17), 10, JUSTIFICATION, investigator
    )
    request_id = requested.value.request_id

    results = await asyncio.gather(
        engine.resolve_extension(request_id, True, team_lead),
        engine.resolve_extension(request_id, False, team_lead, "Duplicate"),
    )

    assert sorted(r.success for r in results) == [False, True]
    assert [r.error_code for r in results if not r.success] == ["already_resolved"]
    assert len(case_store.audits_for(CASE_ID)) <= 1


@pytest.mark.asyncio
async def test_fixed_stage_cannot_be_extended(
    engine: DeadlineEngine, investigator: Actor
) -> None:
    result = await engine.request_extension(
        CASE_ID, "dt_notification", date(2025, 3, 11), 2, JUSTIFICATION, investigator
    )

    assert result.error_code == "not_extendable"
    assert (await engine.list_pending_extensions()).value == []
