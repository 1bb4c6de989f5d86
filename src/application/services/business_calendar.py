"""Business-day calendar arithmetic.

A date is a business day iff its weekday belongs to the regime's weekday
set, it is not a national holiday, and it is not a regional holiday for
the supplied region. Without a region only national holidays count.

All arithmetic walks one day at a time. Holiday sets are sparse and
irregular, so there is no closed form.

Properties:
- add_business_days(d, 0, ...) == d
- add_business_days(d, n, ...) is a business day for n != 0
- count_business_days(d, add_business_days(d, n, ...), ...) == n
"""

from __future__ import annotations

from datetime import date, timedelta

from src.domain.models.holiday_calendar import HolidayCatalog
from src.domain.models.karin_stage import BusinessDayRegime

_ONE_DAY = timedelta(days=1)


class BusinessCalendar:
    """Business-day arithmetic over a holiday catalog.

    The calendar is immutable; swapping catalogs means building a new
    calendar.

    Example:
        >>> calendar = BusinessCalendar(holidays=catalog)
        >>> calendar.add_business_days(date(2025, 3, 6), 3)
        datetime.date(2025, 3, 11)
    """

    def __init__(self, holidays: HolidayCatalog) -> None:
        self._holidays = holidays

    @property
    def holidays(self) -> HolidayCatalog:
        return self._holidays

    def is_business_day(
        self,
        day: date,
        regime: BusinessDayRegime = BusinessDayRegime.ADMINISTRATIVE,
        region: str | None = None,
    ) -> bool:
        """Check whether a date counts as a business day.

        Args:
            day: Date to check.
            regime: Weekday set to use.
            region: Region code for regional holidays, or None.

        Returns:
            True if the date is a business day.
        """
        if day.weekday() not in regime.weekdays:
            return False
        return not self._holidays.is_holiday(day, region)

    def add_business_days(
        self,
        day: date,
        days: int,
        regime: BusinessDayRegime = BusinessDayRegime.ADMINISTRATIVE,
        region: str | None = None,
    ) -> date:
        """Move a date by a number of business days.

        The starting date itself is never counted. A negative count walks
        backward; zero returns the input unchanged even when it is not a
        business day.

        Args:
            day: Starting date.
            days: Business days to move (may be negative).
            regime: Weekday set to use.
            region: Region code for regional holidays, or None.

        Returns:
            The resulting date.
        """
        step = _ONE_DAY if days >= 0 else -_ONE_DAY
        remaining = abs(days)
        current = day
        while remaining > 0:
            current += step
            if self.is_business_day(current, regime, region):
                remaining -= 1
        return current

    def count_business_days(
        self,
        start: date,
        end: date,
        regime: BusinessDayRegime = BusinessDayRegime.ADMINISTRATIVE,
        region: str | None = None,
    ) -> int:
        """Count business days in the half-open interval (start, end].

        When ``end`` precedes ``start`` the result is the negated count of
        (end, start].

        Args:
            start: Exclusive lower bound.
            end: Inclusive upper bound.
            regime: Weekday set to use.
            region: Region code for regional holidays, or None.

        Returns:
            Signed business-day count.
        """
        if end < start:
            return -self.count_business_days(end, start, regime, region)
        count = 0
        current = start
        while current < end:
            current += _ONE_DAY
            if self.is_business_day(current, regime, region):
                count += 1
        return count
