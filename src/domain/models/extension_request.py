"""Extension request domain models.

This module defines the domain models for the deadline extension workflow:
- ExtensionStatus: One-shot state machine (pending -> approved | rejected)
- Actor: Identity of a requester or approver
- ExtensionRequest: A request to lengthen a stage deadline

Status transitions are one-shot: a resolved request can never be resolved
again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from src.domain.models.karin_stage import KarinStage


class ExtensionStatus(str, Enum):
    """Status states for an extension request.

    State Transition Matrix:
    - PENDING -> APPROVED, REJECTED
    - APPROVED -> (terminal)
    - REJECTED -> (terminal)
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        return self in (ExtensionStatus.APPROVED, ExtensionStatus.REJECTED)

    def can_transition_to(self, target: ExtensionStatus) -> bool:
        """Check if transition to target state is valid."""
        return self is ExtensionStatus.PENDING and target.is_terminal()


@dataclass(frozen=True, eq=True)
class Actor:
    """A user acting on an extension request."""

    uid: str
    name: str
    role: str = field(default="")

    def __post_init__(self) -> None:
        if not self.uid:
            raise ValueError("actor uid must not be empty")


@dataclass(frozen=True, eq=True)
class ExtensionRequest:
    """A request to extend a stage deadline.

    Attributes:
        request_id: Unique identifier for this request.
        case_id: Case the request belongs to.
        stage: Stage whose deadline should be extended.
        current_deadline: Deadline at the time of the request.
        requested_days: Extra days requested, in the stage's unit.
        justification: Why the extension is needed.
        requested_by: The requester.
        created_at: When the request was created (UTC).
        region: Region whose holidays apply when extending.
        status: Current status.
        resolved_by: Approver or rejecter (once resolved).
        resolved_at: Resolution timestamp (once resolved).
        comments: Resolver comments.
        new_deadline: Resulting deadline (approved only).
    """

    request_id: UUID
    case_id: str
    stage: KarinStage
    current_deadline: date
    requested_days: int
    justification: str
    requested_by: Actor
    created_at: datetime

    region: str | None = field(default=None)
    status: ExtensionStatus = field(default=ExtensionStatus.PENDING)
    resolved_by: Actor | None = field(default=None)
    resolved_at: datetime | None = field(default=None)
    comments: str = field(default="")
    new_deadline: date | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate request fields after initialization.

        Raises:
            ValueError: If any field validation fails.
        """
        if self.requested_days <= 0:
            raise ValueError(f"requested_days must be positive, got {self.requested_days}")

        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware (UTC)")

        if self.resolved_at is not None and self.resolved_at.tzinfo is None:
            raise ValueError("resolved_at must be timezone-aware (UTC)")

        if self.status.is_terminal() and (self.resolved_by is None or self.resolved_at is None):
            raise ValueError(f"{self.status.value} requests require resolved_by and resolved_at")

        if self.status is ExtensionStatus.APPROVED and self.new_deadline is None:
            raise ValueError("approved requests require new_deadline")

        if self.status is not ExtensionStatus.APPROVED and self.new_deadline is not None:
            raise ValueError("new_deadline can only be set on approved requests")

    @property
    def is_pending(self) -> bool:
        return self.status is ExtensionStatus.PENDING

    def _resolve(
        self,
        status: ExtensionStatus,
        resolved_by: Actor,
        resolved_at: datetime,
        comments: str,
        new_deadline: date | None,
    ) -> ExtensionRequest:
        if not self.status.can_transition_to(status):
            raise ValueError(
                f"cannot transition extension request from {self.status.value} to {status.value}"
            )
        return ExtensionRequest(
            request_id=self.request_id,
            case_id=self.case_id,
            stage=self.stage,
            current_deadline=self.current_deadline,
            requested_days=self.requested_days,
            justification=self.justification,
            requested_by=self.requested_by,
            created_at=self.created_at,
            region=self.region,
            status=status,
            resolved_by=resolved_by,
            resolved_at=resolved_at,
            comments=comments,
            new_deadline=new_deadline,
        )

    def with_approval(
        self,
        approver: Actor,
        approved_at: datetime,
        new_deadline: date,
        comments: str = "",
    ) -> ExtensionRequest:
        """Return an approved copy of this request.

        Raises:
            ValueError: If the request is not pending.
        """
        return self._resolve(
            ExtensionStatus.APPROVED, approver, approved_at, comments, new_deadline
        )

    def with_rejection(
        self,
        rejecter: Actor,
        rejected_at: datetime,
        comments: str = "",
    ) -> ExtensionRequest:
        """Return a rejected copy of this request.

        Raises:
            ValueError: If the request is not pending.
        """
        return self._resolve(ExtensionStatus.REJECTED, rejecter, rejected_at, comments, None)
