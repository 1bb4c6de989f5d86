"""Holiday catalog provider protocol.

Supplies the current holiday catalog and re-reads it on demand so a
running engine can pick up a refreshed dataset.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.models.holiday_calendar import HolidayCatalog


class HolidayCatalogProviderProtocol(Protocol):
    """Source of the versioned holiday catalog."""

    @abstractmethod
    def current(self) -> HolidayCatalog:
        """Return the catalog currently in effect.

        Raises:
            InvalidCatalogError: If no valid catalog could be loaded.
        """
        ...

    @abstractmethod
    def refresh(self, force: bool = False) -> bool:
        """Re-read the underlying dataset if it changed.

        Args:
            force: Reload even if the dataset looks unchanged.

        Returns:
            True if a new catalog was loaded.

        Raises:
            InvalidCatalogError: If the dataset is invalid; the previous
                catalog stays in effect.
        """
        ...
