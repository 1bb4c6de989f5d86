"""System clock implementation of TimeAuthorityProtocol."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from src.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Reads the system clock.

    ``now()`` is always UTC. ``today()`` is the calendar day in the
    configured zone, so a case handled in Santiago rolls over at local
    midnight rather than at UTC midnight.

    Example:
        >>> from zoneinfo import ZoneInfo
        >>> clock = SystemTimeAuthority(local_zone=ZoneInfo("America/Santiago"))
        >>> clock.today()
    """

    def __init__(self, local_zone: tzinfo = timezone.utc) -> None:
        self._zone = local_zone

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.now().astimezone(self._zone).date()
