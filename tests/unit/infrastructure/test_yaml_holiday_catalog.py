"""Unit tests for the YAML holiday catalog loader and HolidayCatalogSource."""

import os
from datetime import date
from pathlib import Path

import pytest

from src.domain.errors.deadline import InvalidCatalogError
from src.infrastructure.adapters.catalog import (
    HolidayCatalogSource,
    load_holiday_catalog,
    parse_holiday_catalog,
)

SHIPPED_CATALOG = Path(__file__).parents[3] / "config" / "holidays" / "cl.yaml"

MINIMAL = """\
version: "test.1"
national:
  - {date: 2025-05-01, description: "Labour Day"}
regional:
  - {date: 2025-08-20, description: "Birth of Bernardo O'Higgins", regions: [xvi]}
"""


def _write(path: Path, text: str, mtime_ns: int | None = None) -> Path:
    path.write_text(text, encoding="utf-8")
    if mtime_ns is not None:
        os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


class TestShippedCatalog:
    def test_loads(self) -> None:
        catalog = load_holiday_catalog(SHIPPED_CATALOG)

        assert catalog.version == "2026.1"
        assert {2024, 2025, 2026} <= catalog.covered_years()
        assert catalog.is_holiday(date(2025, 4, 18))
        assert catalog.is_holiday(date(2025, 8, 20), "XVI")
        assert not catalog.is_holiday(date(2025, 8, 20))


class TestParseHolidayCatalog:
    def test_minimal_document(self) -> None:
        catalog = parse_holiday_catalog(
            {
                "version": "v1",
                "national": [{"date": "2025-05-01", "description": "Labour Day"}],
            }
        )

        assert catalog.version == "v1"
        assert catalog.is_national_holiday(date(2025, 5, 1))
        assert catalog.regional_holidays == ()

    def test_unquoted_version_is_coerced(self) -> None:
        catalog = parse_holiday_catalog({"version": 2026.1})

        assert catalog.version == "2026.1"

    def test_region_codes_normalized(self, tmp_path: Path) -> None:
        catalog = load_holiday_catalog(_write(tmp_path / "h.yaml", MINIMAL))

        assert catalog.is_regional_holiday(date(2025, 8, 20), "XVI")

    @pytest.mark.parametrize(
        "data",
        [
            None,
            ["version", "v1"],
            {"national": []},
            {"version": ""},
            {"version": "v1", "unexpected": True},
            {"version": "v1", "national": [{"date": "not-a-date", "description": "x"}]},
            {"version": "v1", "national": [{"date": "2025-01-01", "description": ""}]},
            {
                "version": "v1",
                "regional": [{"date": "2025-08-20", "description": "x", "regions": []}],
            },
            {
                "version": "v1",
                "regional": [{"date": "2025-08-20", "description": "x", "regions": [" "]}],
            },
        ],
    )
    def test_invalid_documents(self, data: object) -> None:
        with pytest.raises(InvalidCatalogError) as exc_info:
            parse_holiday_catalog(data, source="test.yaml")

        assert exc_info.value.code == "invalid_catalog"
        assert exc_info.value.source == "test.yaml"

    def test_duplicate_national_dates(self) -> None:
        with pytest.raises(InvalidCatalogError, match="duplicate national holiday 2025-05-01"):
            parse_holiday_catalog(
                {
                    "version": "v1",
                    "national": [
                        {"date": "2025-05-01", "description": "Labour Day"},
                        {"date": "2025-05-01", "description": "Labour Day again"},
                    ],
                }
            )


class TestLoadHolidayCatalog:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidCatalogError, match="cannot read file"):
            load_holiday_catalog(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "bad.yaml", "version: [unclosed\n")

        with pytest.raises(InvalidCatalogError, match="invalid YAML"):
            load_holiday_catalog(path)


class TestHolidayCatalogSource:
    def test_loads_on_first_use(self, tmp_path: Path) -> None:
        source = HolidayCatalogSource(_write(tmp_path / "h.yaml", MINIMAL))

        assert source.current().version == "test.1"
        assert source.path == tmp_path / "h.yaml"

    def test_unchanged_file_is_not_reloaded(self, tmp_path: Path) -> None:
        source = HolidayCatalogSource(_write(tmp_path / "h.yaml", MINIMAL))
        first = source.current()

        assert source.refresh() is False
        assert source.current() is first

    def test_force_reload(self, tmp_path: Path) -> None:
        source = HolidayCatalogSource(_write(tmp_path / "h.yaml", MINIMAL))
        first = source.current()

        assert source.refresh(force=True) is True
        assert source.current() is not first

    def test_changed_file_is_reloaded(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "h.yaml", MINIMAL, mtime_ns=1_000_000_000)
        source = HolidayCatalogSource(path)
        source.current()

        _write(path, MINIMAL.replace("test.1", "test.2"), mtime_ns=2_000_000_000)

        assert source.refresh() is True
        assert source.current().version == "test.2"

    def test_failed_reload_keeps_previous_catalog(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "h.yaml", MINIMAL, mtime_ns=1_000_000_000)
        source = HolidayCatalogSource(path)
        source.current()

        _write(path, "version: [broken\n", mtime_ns=2_000_000_000)

        with pytest.raises(InvalidCatalogError):
            source.refresh()
        assert source.current().version == "test.1"

    def test_missing_file(self, tmp_path: Path) -> None:
        source = HolidayCatalogSource(tmp_path / "missing.yaml")

        with pytest.raises(InvalidCatalogError, match="cannot stat file"):
            source.current()

    def test_refresh_that_loads_nothing_is_an_error(self, tmp_path: Path) -> None:
        class InertSource(HolidayCatalogSource):
            def refresh(self, force: bool = False) -> bool:
                return False

        source = InertSource(_write(tmp_path / "h.yaml", MINIMAL))

        with pytest.raises(InvalidCatalogError, match="no catalog loaded"):
            source.current()
