"""Extension request store protocol.

Persistence port for deadline extension requests. The only concurrency
guard in the engine lives here: ``update_if_pending`` must atomically
replace a request only while its stored status is still pending, and
for approvals only while the cumulative cap still holds.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from uuid import UUID

    from src.domain.models.extension_request import ExtensionRequest, ExtensionStatus
    from src.domain.models.karin_stage import KarinStage


class ExtensionRequestStoreProtocol(Protocol):
    """Repository protocol for extension requests."""

    @abstractmethod
    async def save(self, request: ExtensionRequest) -> None:
        """Persist a new extension request.

        Args:
            request: The pending request to save.
        """
        ...

    @abstractmethod
    async def get_by_id(self, request_id: UUID) -> ExtensionRequest | None:
        """Retrieve a request by ID.

        Args:
            request_id: The request UUID.

        Returns:
            The ExtensionRequest if found, None otherwise.
        """
        ...

    @abstractmethod
    async def update_if_pending(
        self,
        request: ExtensionRequest,
        max_approved_days: int | None = None,
    ) -> bool:
        """Compare-and-set a resolved request.

        Replaces the stored request with ``request`` only if the stored
        copy is still pending. When ``request`` is an approval and
        ``max_approved_days`` is given, the write also requires that the
        approved days for the request's case and stage, this request
        included, stay within that maximum. Both checks and the write must
        be atomic with respect to concurrent callers.

        Args:
            request: The resolved request.
            max_approved_days: Cumulative cap for approvals, or None.

        Returns:
            True if the write happened, False if another resolver won.

        Raises:
            ExceedsMaximumError: The approval would push the case and stage
                past ``max_approved_days``; nothing is written.
        """
        ...

    @abstractmethod
    async def list_by_case(self, case_id: str) -> list[ExtensionRequest]:
        """List all requests for a case, oldest first."""
        ...

    @abstractmethod
    async def list_by_case_and_stage(
        self,
        case_id: str,
        stage: KarinStage,
    ) -> list[ExtensionRequest]:
        """List requests for one stage of a case, oldest first."""
        ...

    @abstractmethod
    async def list_by_status(self, status: ExtensionStatus) -> list[ExtensionRequest]:
        """List requests in a status, oldest first."""
        ...
