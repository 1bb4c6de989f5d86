"""Time Authority Protocol - interface for consistent timestamp provisioning.

This port defines the contract for obtaining the current instant and the
current calendar day. All services that need either MUST inject a
TimeAuthorityProtocol implementation instead of reading the system clock
directly.

Deadlines are plain calendar dates. ``today()`` is the calendar day in
the authority's configured time zone, which for Chilean cases is usually
America/Santiago, not UTC.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                today = self._time.today()
                ...

    For production:
        Use SystemTimeAuthority from src/infrastructure/adapters/time/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant.

        Returns:
            Current datetime with timezone information (UTC recommended).
        """
        ...

    @abstractmethod
    def today(self) -> date:
        """Return the current calendar day.

        Returns:
            Today's date in the authority's time zone.
        """
        ...
