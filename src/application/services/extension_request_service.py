"""Extension request service implementation.

This module implements the deadline extension workflow for Karin-law
stages: an investigator proposes more time for an extendable stage, and
an approver accepts or rejects the proposal exactly once.

Rules:
- Only extendable stages accept requests (investigation in the default
  catalog).
- Requested days plus days already approved for the same case and stage
  may not exceed the stage's legal maximum.
- A justification of at least the configured minimum length is required.
- Resolution is one-shot and committed through a single compare-and-set
  on the request store; the case deadline is only written by the winner.
- Approval moves only the extended stage. Downstream stages are left for
  the next recomputation.

Developer Golden Rules:
1. VALIDATE FIRST - Reject malformed requests before any write
2. CAS BEFORE SIDE EFFECTS - Never touch the case before winning the CAS
3. FAIL LOUD - Raise domain errors, never return partial results
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from structlog import get_logger

from src.domain.errors.deadline import (
    AlreadyResolvedError,
    CaseNotFoundError,
    ExceedsMaximumError,
    ExtensionRequestNotFoundError,
    InvalidExtensionRequestError,
    NotExtendableError,
)
from src.domain.models.case_timeline import ExtensionAudit
from src.domain.models.deadline import Deadline
from src.domain.models.extension_request import (
    Actor,
    ExtensionRequest,
    ExtensionStatus,
)
from src.domain.models.karin_stage import KarinStage, StageDefinition

if TYPE_CHECKING:
    from datetime import date

    from structlog import BoundLogger

    from src.application.ports.case_store import CaseStoreProtocol
    from src.application.ports.extension_request_store import (
        ExtensionRequestStoreProtocol,
    )
    from src.application.ports.time_authority import TimeAuthorityProtocol
    from src.application.services.deadline_calculator import DeadlineCalculator

logger = get_logger(__name__)

# Minimum justification length for extension requests
MIN_JUSTIFICATION_LENGTH: int = 10


class ExtensionRequestService:
    """Service for the deadline extension workflow.

    The service ensures:
    1. The stage is extendable
    2. A single request never asks for more than the stage maximum
    3. The justification meets the minimum length
    4. Cumulative approved days stay within the stage maximum, checked
       again inside the compare-and-set that approves a request
    5. A request is resolved at most once (compare-and-set)
    6. Approval writes the new deadline and an audit record to the case

    Example:
        >>> service = ExtensionRequestService(
        ...     calculator=calculator,
        ...     request_store=request_store,
        ...     case_store=case_store,
        ...     time_authority=time_authority,
        ... )
        >>> request = await service.request_extension(
        ...     case_id="case-1",
        ...     stage=KarinStage.INVESTIGATION,
        ...     current_deadline=date(2025, 4, 17),
        ...     requested_days=15,
        ...     justification="Additional witnesses must be interviewed",
        ...     requester=Actor(uid="u-1", name="Investigator"),
        ... )
    """

    def __init__(
        self,
        calculator: DeadlineCalculator,
        request_store: ExtensionRequestStoreProtocol,
        case_store: CaseStoreProtocol,
        time_authority: TimeAuthorityProtocol,
        min_justification_length: int = MIN_JUSTIFICATION_LENGTH,
    ) -> None:
        """Initialize the extension request service.

        Args:
            calculator: Deadline calculator (stage catalog and calendar).
            request_store: Persistence for extension requests.
            case_store: Case record store receiving approved deadlines.
            time_authority: Source of request and resolution timestamps.
            min_justification_length: Minimum stripped justification length
                (default: 10).
        """
        self._calculator = calculator
        self._request_store = request_store
        self._case_store = case_store
        self._time = time_authority
        self._min_justification_length = min_justification_length

    async def request_extension(
        self,
        case_id: str,
        stage: KarinStage | str,
        current_deadline: date,
        requested_days: int,
        justification: str,
        requester: Actor,
        region: str | None = None,
    ) -> ExtensionRequest:
        """Propose an extension for a stage deadline.

        Rejected proposals are never persisted.

        Args:
            case_id: The case the request belongs to.
            stage: Stage or raw stage identifier to extend.
            current_deadline: The stage's deadline at request time.
            requested_days: Extra days, in the stage's unit.
            justification: Why more time is needed.
            requester: Who is asking.
            region: Region whose holidays apply; defaults to the case's.

        Returns:
            The persisted pending ExtensionRequest.

        Raises:
            UnknownStageError: Stage has no definition.
            NotExtendableError: Stage does not allow extensions.
            InvalidExtensionRequestError: Non-positive days or short justification.
            ExceedsMaximumError: Requested days exceed the stage maximum, alone
                or together with days already approved.
            CaseNotFoundError: Case doesn't exist.
        """
        definition = self._calculator.definition_for(stage)
        log = logger.bind(
            case_id=case_id,
            stage=definition.stage.value,
            requested_days=requested_days,
            requester=requester.uid,
        )
        log.info("Processing extension request")

        # Step 1: Stage must allow extensions
        if not definition.extendable:
            log.warning("Stage not extendable")
            raise NotExtendableError(stage=definition.stage.value)

        # Step 2: A single request may never exceed the stage maximum
        if requested_days > definition.max_extension_days:
            log.warning(
                "Extension exceeds maximum",
                max_extension_days=definition.max_extension_days,
            )
            raise ExceedsMaximumError(
                stage=definition.stage.value,
                requested_days=requested_days,
                maximum_days=definition.max_extension_days,
            )

        # Step 3: Validate the request itself
        if requested_days <= 0:
            log.warning("Non-positive extension requested")
            raise InvalidExtensionRequestError(
                reason=f"requested_days must be positive, got {requested_days}"
            )

        trimmed = justification.strip() if justification else ""
        if len(trimmed) < self._min_justification_length:
            log.warning(
                "Justification validation failed",
                provided_length=len(trimmed),
                min_length=self._min_justification_length,
            )
            raise InvalidExtensionRequestError(
                reason=(
                    f"justification must be at least {self._min_justification_length} "
                    f"characters, got {len(trimmed)}"
                )
            )

        # Step 4: Cumulative cap
        already_approved = await self._approved_days(case_id, definition.stage)
        self._check_maximum(definition, requested_days, already_approved, log)

        # Step 5: Case must exist; inherit its region
        timeline = await self._case_store.get_timeline(case_id)
        if timeline is None:
            log.warning("Case not found")
            raise CaseNotFoundError(case_id=case_id)

        request = ExtensionRequest(
            request_id=uuid4(),
            case_id=case_id,
            stage=definition.stage,
            current_deadline=current_deadline,
            requested_days=requested_days,
            justification=trimmed,
            requested_by=requester,
            created_at=self._time.now(),
            region=region if region is not None else timeline.region,
        )
        await self._request_store.save(request)

        log.info(
            "extension_requested",
            request_id=str(request.request_id),
            already_approved=already_approved,
        )
        return request

    async def resolve_extension(
        self,
        request_id: UUID,
        approved: bool,
        approver: Actor,
        comments: str | None = None,
    ) -> ExtensionRequest:
        """Approve or reject a pending extension request.

        Args:
            request_id: The request to resolve.
            approved: True to approve, False to reject.
            approver: Who is resolving.
            comments: Optional resolver comments.

        Returns:
            The resolved ExtensionRequest.

        Raises:
            ExtensionRequestNotFoundError: Request doesn't exist.
            AlreadyResolvedError: Request is not pending, or another
                resolver won the race.
            ExceedsMaximumError: Approval would push the stage past its maximum.
            CaseNotFoundError: Case doesn't exist.
        """
        log = logger.bind(
            request_id=str(request_id),
            approver=approver.uid,
            approved=approved,
        )
        log.info("Resolving extension request")

        request = await self._request_store.get_by_id(request_id)
        if request is None:
            log.warning("Extension request not found")
            raise ExtensionRequestNotFoundError(request_id=request_id)

        if not request.is_pending:
            log.warning("Extension request already resolved", status=request.status.value)
            raise AlreadyResolvedError(
                request_id=request_id, current_status=request.status.value
            )

        log = log.bind(case_id=request.case_id, stage=request.stage.value)
        resolved_at = self._time.now()

        if not approved:
            rejected = request.with_rejection(
                rejecter=approver,
                rejected_at=resolved_at,
                comments=comments or "",
            )
            await self._commit(rejected, log)
            log.info("extension_rejected")
            return rejected

        definition = self._calculator.definition_for(request.stage)
        already_approved = await self._approved_days(request.case_id, request.stage)
        self._check_maximum(definition, request.requested_days, already_approved, log)

        timeline = await self._case_store.get_timeline(request.case_id)
        if timeline is None:
            log.warning("Case not found")
            raise CaseNotFoundError(case_id=request.case_id)

        new_deadline = self._calculator.extend_deadline(
            request.current_deadline,
            request.stage,
            request.requested_days,
            request.region,
        )
        approved_request = request.with_approval(
            approver=approver,
            approved_at=resolved_at,
            new_deadline=new_deadline,
            comments=comments or "",
        )

        # Single compare-and-set that also enforces the cumulative cap;
        # the case is untouched if we lose
        await self._commit(
            approved_request, log, max_approved_days=definition.max_extension_days
        )

        # Approved totals only grow, so a post-commit read includes this one
        total_days = await self._approved_days(request.case_id, request.stage)
        stage_deadline = await self._extended_stage_deadline(
            approved_request, definition, new_deadline, total_days
        )
        await self._case_store.set_stage_deadline(
            request.case_id, request.stage, stage_deadline
        )
        await self._case_store.record_extension_audit(
            request.case_id,
            ExtensionAudit(
                stage=request.stage,
                extension_days=total_days,
                justification=request.justification,
                approved_by=approver.name,
                approved_at=resolved_at,
            ),
        )

        log.info(
            "extension_approved",
            previous_deadline=request.current_deadline.isoformat(),
            new_deadline=stage_deadline.due_date.isoformat(),
            total_extension_days=total_days,
        )
        return approved_request

    async def list_extensions(self, case_id: str) -> list[ExtensionRequest]:
        """List every extension request for a case, oldest first."""
        return await self._request_store.list_by_case(case_id)

    async def list_pending(self) -> list[ExtensionRequest]:
        """List every request still awaiting resolution, oldest first."""
        return await self._request_store.list_by_status(ExtensionStatus.PENDING)

    async def _commit(
        self,
        resolved: ExtensionRequest,
        log: BoundLogger,
        max_approved_days: int | None = None,
    ) -> None:
        try:
            won = await self._request_store.update_if_pending(
                resolved, max_approved_days=max_approved_days
            )
        except ExceedsMaximumError as exc:
            log.warning(
                "Extension exceeds maximum at commit",
                already_approved=exc.already_approved,
                max_extension_days=exc.maximum_days,
            )
            raise
        if not won:
            current = await self._request_store.get_by_id(resolved.request_id)
            status = current.status.value if current is not None else "resolved"
            log.warning("Lost resolution race", current_status=status)
            raise AlreadyResolvedError(request_id=resolved.request_id, current_status=status)

    async def _approved_days(self, case_id: str, stage: KarinStage) -> int:
        requests = await self._request_store.list_by_case_and_stage(case_id, stage)
        return sum(
            r.requested_days for r in requests if r.status is ExtensionStatus.APPROVED
        )

    def _check_maximum(
        self,
        definition: StageDefinition,
        requested_days: int,
        already_approved: int,
        log: BoundLogger,
    ) -> None:
        if already_approved + requested_days > definition.max_extension_days:
            log.warning(
                "Extension exceeds maximum",
                already_approved=already_approved,
                max_extension_days=definition.max_extension_days,
            )
            raise ExceedsMaximumError(
                stage=definition.stage.value,
                requested_days=requested_days,
                maximum_days=definition.max_extension_days,
                already_approved=already_approved,
            )

    async def _extended_stage_deadline(
        self,
        request: ExtensionRequest,
        definition: StageDefinition,
        new_deadline: date,
        total_days: int,
    ) -> Deadline:
        """Build the Deadline written to the case for an approved request.

        Keeps the stored stage deadline's start date when one exists. Unless
        the stored deadline is exactly the one this request extended, the
        due date is rebuilt from that start and the committed total.
        """
        stored = await self._case_store.get_stage_deadlines(request.case_id)
        existing = stored.get(request.stage)
        if existing is not None:
            if (
                existing.due_date == request.current_deadline
                and existing.extension_days + request.requested_days == total_days
            ):
                return existing.with_due_date(new_deadline, total_days)
            return self._calculator.compute_deadline(
                existing.start_date,
                request.stage,
                region=existing.region,
                extension_days=total_days,
            )
        logger.warning(
            "No stored deadline for extended stage",
            case_id=request.case_id,
            stage=request.stage.value,
        )
        return Deadline(
            stage=request.stage,
            due_date=new_deadline,
            start_date=request.current_deadline,
            base_days=definition.base_days,
            extension_days=total_days,
            unit=definition.unit,
            regime=definition.regime,
            region=request.region,
        )
