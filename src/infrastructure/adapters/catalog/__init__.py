"""Holiday catalog loading from versioned YAML datasets."""

from src.infrastructure.adapters.catalog.yaml_holiday_catalog import (
    HolidayCatalogSource,
    load_holiday_catalog,
    parse_holiday_catalog,
)

__all__: list[str] = [
    "HolidayCatalogSource",
    "load_holiday_catalog",
    "parse_holiday_catalog",
]
