"""Holiday catalog domain models.

National holidays apply everywhere. Regional holidays only apply when the
caller supplies one of the entry's region codes, compared
case-insensitively; with no region, only national holidays count.

The catalog is static, versioned configuration data. It must be refreshed
at least yearly: a stale catalog silently miscounts business days.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType


def normalize_region(region: str | None) -> str | None:
    """Canonical region code: stripped and upper-cased, blank meaning none."""
    if region is None:
        return None
    code = region.strip().upper()
    return code or None


@dataclass(frozen=True, eq=True)
class NationalHoliday:
    """A holiday observed nationwide."""

    day: date
    description: str


@dataclass(frozen=True, eq=True)
class RegionalHoliday:
    """A holiday observed only in specific regions.

    Attributes:
        day: The holiday date.
        description: Human-readable name.
        regions: Region codes the holiday applies to (e.g. "V", "XV"),
            normalized with ``normalize_region``.
    """

    day: date
    description: str
    regions: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        codes = frozenset(normalize_region(code) for code in self.regions)
        if not codes or None in codes:
            raise ValueError(f"regional holiday {self.day} must list non-blank regions")
        object.__setattr__(self, "regions", codes)

    def applies_to(self, region: str | None) -> bool:
        code = normalize_region(region)
        return code is not None and code in self.regions


class HolidayCatalog:
    """Versioned set of national and regional holidays.

    Example:
        >>> catalog = HolidayCatalog(
        ...     version="2025.1",
        ...     national=[NationalHoliday(date(2025, 1, 1), "New Year")],
        ... )
        >>> catalog.is_holiday(date(2025, 1, 1))
        True
    """

    def __init__(
        self,
        version: str,
        national: Iterable[NationalHoliday] = (),
        regional: Iterable[RegionalHoliday] = (),
    ) -> None:
        self._version = version
        self._national = MappingProxyType({h.day: h for h in national})
        regional_by_day: dict[date, list[RegionalHoliday]] = {}
        for holiday in regional:
            regional_by_day.setdefault(holiday.day, []).append(holiday)
        self._regional = MappingProxyType(
            {day: tuple(entries) for day, entries in regional_by_day.items()}
        )

    @classmethod
    def empty(cls, version: str = "empty") -> HolidayCatalog:
        """Catalog with no holidays, for weekday-only arithmetic."""
        return cls(version=version)

    @property
    def version(self) -> str:
        return self._version

    @property
    def national_holidays(self) -> tuple[NationalHoliday, ...]:
        return tuple(sorted(self._national.values(), key=lambda h: h.day))

    @property
    def regional_holidays(self) -> tuple[RegionalHoliday, ...]:
        entries = [h for day_entries in self._regional.values() for h in day_entries]
        return tuple(sorted(entries, key=lambda h: h.day))

    def is_national_holiday(self, day: date) -> bool:
        return day in self._national

    def is_regional_holiday(self, day: date, region: str | None) -> bool:
        if normalize_region(region) is None:
            return False
        return any(h.applies_to(region) for h in self._regional.get(day, ()))

    def is_holiday(self, day: date, region: str | None = None) -> bool:
        """Check whether a date is a holiday for the given region.

        Args:
            day: Date to check.
            region: Region code, or None for national holidays only.

        Returns:
            True if the date is a national holiday, or a regional holiday
            for the supplied region.
        """
        return self.is_national_holiday(day) or self.is_regional_holiday(day, region)

    def covered_years(self) -> frozenset[int]:
        """Years with at least one national holiday entry."""
        return frozenset(day.year for day in self._national)

    def __repr__(self) -> str:
        return (
            f"HolidayCatalog(version={self._version!r}, "
            f"national={len(self._national)}, regional={len(self.regional_holidays)})"
        )
