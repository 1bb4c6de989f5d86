"""
Pytest configuration and shared fixtures for deadline engine tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Time-dependent tests use FakeTimeAuthority, never the system clock
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from src.application.services.business_calendar import BusinessCalendar
from src.application.services.deadline_calculator import DeadlineCalculator
from src.domain.models.holiday_calendar import HolidayCatalog
from src.infrastructure.adapters.catalog import load_holiday_catalog
from tests.helpers import FakeTimeAuthority

PROJECT_ROOT = Path(__file__).parent.parent
HOLIDAY_CATALOG_PATH = PROJECT_ROOT / "config" / "holidays" / "cl.yaml"


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture(scope="session")
def holiday_catalog() -> HolidayCatalog:
    """The shipped Chilean holiday catalog."""
    return load_holiday_catalog(HOLIDAY_CATALOG_PATH)


@pytest.fixture
def calendar(holiday_catalog: HolidayCatalog) -> BusinessCalendar:
    return BusinessCalendar(holiday_catalog)


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen on Thursday 2025-03-06."""
    return FakeTimeAuthority(frozen_at=datetime(2025, 3, 6, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def calculator(
    calendar: BusinessCalendar, fake_time_authority: FakeTimeAuthority
) -> DeadlineCalculator:
    return DeadlineCalculator(calendar=calendar, time_authority=fake_time_authority)


@pytest.fixture
def case_created_on() -> date:
    return date(2025, 3, 6)
