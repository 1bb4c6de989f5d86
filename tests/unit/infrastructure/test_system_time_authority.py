"""Unit tests for SystemTimeAuthority."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.application.ports.time_authority import TimeAuthorityProtocol
from src.infrastructure.adapters.time import SystemTimeAuthority


class TestSystemTimeAuthority:
    def test_implements_protocol(self) -> None:
        assert isinstance(SystemTimeAuthority(), TimeAuthorityProtocol)

    def test_now_is_utc(self) -> None:
        now = SystemTimeAuthority().now()

        assert now.tzinfo is timezone.utc
        assert abs(datetime.now(timezone.utc) - now) < timedelta(seconds=5)

    def test_today_in_configured_zone(self) -> None:
        zone = ZoneInfo("America/Santiago")
        clock = SystemTimeAuthority(local_zone=zone)

        today = clock.today()
        expected = {
            datetime.now(zone).date(),
            (datetime.now(zone) - timedelta(seconds=5)).date(),
        }

        assert today in expected
