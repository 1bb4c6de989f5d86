"""YAML holiday catalog loader.

The holiday catalog is a curated, versioned dataset checked into the
repository (``config/holidays/cl.yaml``). It must be refreshed at least
once a year. Files are parsed with ``yaml.safe_load`` and validated with
pydantic before a HolidayCatalog is built.

File format:

    version: "2026.1"
    national:
      - date: 2026-01-01
        description: New Year's Day
    regional:
      - date: 2026-06-07
        description: Assault and Capture of Morro de Arica
        regions: [XV]
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from structlog import get_logger

from src.domain.errors.deadline import InvalidCatalogError
from src.domain.models.holiday_calendar import (
    HolidayCatalog,
    NationalHoliday,
    RegionalHoliday,
    normalize_region,
)

logger = get_logger(__name__)


class NationalHolidayEntry(BaseModel):
    """One national holiday row."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    date: dt.date = Field(description="Holiday date (ISO 8601)")
    description: str = Field(min_length=1, description="Holiday name")


class RegionalHolidayEntry(BaseModel):
    """One regional holiday row."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    date: dt.date = Field(description="Holiday date (ISO 8601)")
    description: str = Field(min_length=1, description="Holiday name")
    regions: list[str] = Field(min_length=1, description="Region codes, e.g. XV")

    @field_validator("regions")
    @classmethod
    def normalize_regions(cls, v: list[str]) -> list[str]:
        """Strip and upper-case region codes, rejecting blanks."""
        codes = [normalize_region(str(code)) for code in v]
        if any(code is None for code in codes):
            raise ValueError("region codes must not be blank")
        return [code for code in codes if code is not None]


class HolidayCatalogFile(BaseModel):
    """Top-level holiday catalog document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(min_length=1, description="Dataset version label")
    national: list[NationalHolidayEntry] = Field(default_factory=list)
    regional: list[RegionalHolidayEntry] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> str:
        # YAML reads an unquoted 2026.1 as a float
        return str(v).strip() if v is not None else ""

    @field_validator("national")
    @classmethod
    def reject_duplicate_dates(
        cls, v: list[NationalHolidayEntry]
    ) -> list[NationalHolidayEntry]:
        seen: set[dt.date] = set()
        for entry in v:
            if entry.date in seen:
                raise ValueError(f"duplicate national holiday {entry.date.isoformat()}")
            seen.add(entry.date)
        return v

    def to_catalog(self) -> HolidayCatalog:
        return HolidayCatalog(
            version=self.version,
            national=[
                NationalHoliday(day=e.date, description=e.description) for e in self.national
            ],
            regional=[
                RegionalHoliday(day=e.date, description=e.description, regions=frozenset(e.regions))
                for e in self.regional
            ],
        )


def parse_holiday_catalog(data: Any, source: str = "<memory>") -> HolidayCatalog:
    """Validate an already parsed YAML document.

    Args:
        data: Result of ``yaml.safe_load``.
        source: Label used in error messages.

    Returns:
        The validated HolidayCatalog.

    Raises:
        InvalidCatalogError: If the document fails validation.
    """
    if not isinstance(data, dict):
        raise InvalidCatalogError(source=source, reason="top level must be a mapping")
    try:
        model = HolidayCatalogFile.model_validate(data)
    except ValidationError as exc:
        raise InvalidCatalogError(source=source, reason=str(exc)) from exc
    return model.to_catalog()


def load_holiday_catalog(path: Path | str) -> HolidayCatalog:
    """Load and validate a holiday catalog file.

    Args:
        path: YAML file path.

    Returns:
        The validated HolidayCatalog.

    Raises:
        InvalidCatalogError: If the file is missing, unreadable, not YAML,
            or fails validation.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise InvalidCatalogError(source=str(path), reason=f"cannot read file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidCatalogError(source=str(path), reason=f"invalid YAML: {exc}") from exc

    catalog = parse_holiday_catalog(data, source=str(path))
    logger.info(
        "holiday_catalog_loaded",
        path=str(path),
        version=catalog.version,
        national=len(catalog.national_holidays),
        regional=len(catalog.regional_holidays),
        years=sorted(catalog.covered_years()),
    )
    return catalog


class HolidayCatalogSource:
    """File-backed holiday catalog that reloads when the file changes.

    A failed reload keeps serving the last good catalog and re-raises the
    error to the caller.

    Example:
        >>> source = HolidayCatalogSource(Path("config/holidays/cl.yaml"))
        >>> catalog = source.current()
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._catalog: HolidayCatalog | None = None
        self._mtime_ns: int | None = None

    @property
    def path(self) -> Path:
        return self._path

    def current(self) -> HolidayCatalog:
        """Return the catalog, loading it on first use.

        Raises:
            InvalidCatalogError: If the first load fails or loads nothing.
        """
        if self._catalog is None:
            self.refresh()
        if self._catalog is None:
            raise InvalidCatalogError(source=str(self._path), reason="no catalog loaded")
        return self._catalog

    def refresh(self, force: bool = False) -> bool:
        """Reload the file if its modification time changed.

        Args:
            force: Reload even if the file looks unchanged.

        Returns:
            True if a new catalog was loaded.

        Raises:
            InvalidCatalogError: If the file cannot be loaded.
        """
        try:
            mtime_ns = self._path.stat().st_mtime_ns
        except OSError as exc:
            raise InvalidCatalogError(
                source=str(self._path), reason=f"cannot stat file: {exc}"
            ) from exc

        if not force and self._catalog is not None and mtime_ns == self._mtime_ns:
            return False

        catalog = load_holiday_catalog(self._path)
        previous = self._catalog.version if self._catalog is not None else None
        self._catalog = catalog
        self._mtime_ns = mtime_ns
        if previous is not None:
            logger.info(
                "holiday_catalog_reloaded",
                path=str(self._path),
                previous_version=previous,
                version=catalog.version,
            )
        return True
