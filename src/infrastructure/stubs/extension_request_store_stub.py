"""In-memory stub implementation of ExtensionRequestStoreProtocol.

This module provides an in-memory implementation for testing purposes.
Not intended for production use.

The compare-and-set in ``update_if_pending`` is guarded by an
asyncio.Lock so concurrent resolvers in one event loop see exactly one
winner, and approvals racing for the same cumulative cap cannot both
commit past it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from uuid import UUID

from src.domain.errors.deadline import ExceedsMaximumError
from src.domain.models.extension_request import ExtensionRequest, ExtensionStatus
from src.domain.models.karin_stage import KarinStage


class ExtensionRequestStoreStub:
    """In-memory implementation of ExtensionRequestStoreProtocol.

    Example:
        >>> stub = ExtensionRequestStoreStub()
        >>> await stub.save(request)
        >>> await stub.update_if_pending(request.with_rejection(...))
        True
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._requests: dict[UUID, ExtensionRequest] = {}
        self._lock = asyncio.Lock()

    async def save(self, request: ExtensionRequest) -> None:
        self._requests[request.request_id] = request

    async def get_by_id(self, request_id: UUID) -> ExtensionRequest | None:
        return self._requests.get(request_id)

    async def update_if_pending(
        self,
        request: ExtensionRequest,
        max_approved_days: int | None = None,
    ) -> bool:
        """Replace the stored request only while it is still pending.

        Approvals also have to fit within ``max_approved_days`` together
        with the approvals already stored for the same case and stage.
        """
        async with self._lock:
            stored = self._requests.get(request.request_id)
            if stored is None or stored.status is not ExtensionStatus.PENDING:
                return False
            if max_approved_days is not None and request.status is ExtensionStatus.APPROVED:
                already_approved = sum(
                    r.requested_days
                    for r in self._requests.values()
                    if r.case_id == request.case_id
                    and r.stage is request.stage
                    and r.status is ExtensionStatus.APPROVED
                )
                if already_approved + request.requested_days > max_approved_days:
                    raise ExceedsMaximumError(
                        stage=request.stage.value,
                        requested_days=request.requested_days,
                        maximum_days=max_approved_days,
                        already_approved=already_approved,
                    )
            self._requests[request.request_id] = request
            return True

    async def list_by_case(self, case_id: str) -> list[ExtensionRequest]:
        return self._sorted(r for r in self._requests.values() if r.case_id == case_id)

    async def list_by_case_and_stage(
        self,
        case_id: str,
        stage: KarinStage,
    ) -> list[ExtensionRequest]:
        return self._sorted(
            r for r in self._requests.values() if r.case_id == case_id and r.stage is stage
        )

    async def list_by_status(self, status: ExtensionStatus) -> list[ExtensionRequest]:
        return self._sorted(r for r in self._requests.values() if r.status is status)

    @staticmethod
    def _sorted(requests: Iterable[ExtensionRequest]) -> list[ExtensionRequest]:
        # Sort by created_at for deterministic ordering
        return sorted(requests, key=lambda r: (r.created_at, str(r.request_id)))
