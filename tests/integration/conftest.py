"""
Integration test configuration.

Wires a complete DeadlineEngine through the bootstrap composition root,
over the in-memory stores and the shipped holiday catalog, with the clock
frozen on Thursday 2025-03-06.

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_example(engine: DeadlineEngine, case_store: CaseStoreStub) -> None:
        ...
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from src.application.services.deadline_engine import DeadlineEngine
from src.bootstrap.deadline_engine import build_deadline_engine
from src.config.deadline_config import DeadlineEngineConfig
from src.domain.models.case_timeline import CaseTimeline
from src.domain.models.extension_request import Actor
from src.domain.models.karin_stage import KarinStage
from src.infrastructure.stubs import (
    CaseStoreStub,
    DeadlineAlertStoreStub,
    ExtensionRequestStoreStub,
    RecipientResolverStub,
)
from tests.helpers import FakeTimeAuthority
from tests.helpers.case_flow import CASE_ID, CREATED_ON

CATALOG_PATH = Path(__file__).parents[2] / "config" / "holidays" / "cl.yaml"


@pytest.fixture
def case_store() -> CaseStoreStub:
    store = CaseStoreStub()
    store.add_case(
        CaseTimeline(
            case_id=CASE_ID,
            created_on=CREATED_ON,
            current_stage=KarinStage.RECEPTION,
        )
    )
    return store


@pytest.fixture
def request_store() -> ExtensionRequestStoreStub:
    return ExtensionRequestStoreStub()


@pytest.fixture
def alert_store() -> DeadlineAlertStoreStub:
    return DeadlineAlertStoreStub()


@pytest.fixture
def recipients() -> RecipientResolverStub:
    resolver = RecipientResolverStub()
    resolver.assign(CASE_ID, investigator="investigator-1", team=["lead-1"])
    return resolver


@pytest.fixture
def investigator() -> Actor:
    return Actor(uid="investigator-1", name="Case Investigator", role="investigator")


@pytest.fixture
def team_lead() -> Actor:
    return Actor(uid="lead-1", name="Team Lead", role="lead")


@pytest.fixture
def engine(
    fake_time_authority: FakeTimeAuthority,
    case_store: CaseStoreStub,
    request_store: ExtensionRequestStoreStub,
    alert_store: DeadlineAlertStoreStub,
    recipients: RecipientResolverStub,
) -> Iterator[DeadlineEngine]:
    config = DeadlineEngineConfig(
        holiday_catalog_path=str(CATALOG_PATH), environment="development"
    )
    yield build_deadline_engine(
        config,
        case_store=case_store,
        request_store=request_store,
        alert_store=alert_store,
        recipients=recipients,
        time_authority=fake_time_authority,
    )
    structlog.reset_defaults()

