"""Deadline engine domain errors.

Error taxonomy for stage lookup, the extension workflow, and record
access. Every error carries a stable ``code`` which the engine facade
copies into its ``OperationResult``.

A stage with no recorded start date is NOT an error: recomputation
reports it as unset.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from src.domain.exceptions import DeadlineEngineError


class UnknownStageError(DeadlineEngineError):
    """Raised when a stage identifier has no statutory deadline definition.

    Fatal to the calling operation; never silently defaulted.
    """

    code = "unknown_stage"

    def __init__(self, stage: str, catalog_version: str | None = None) -> None:
        """Initialize the error.

        Args:
            stage: The stage identifier that could not be resolved.
            catalog_version: Version of the catalog that was consulted.
        """
        self.stage = stage
        self.catalog_version = catalog_version
        msg = f"Unknown stage: {stage!r}"
        if catalog_version:
            msg += f" (stage catalog {catalog_version})"
        super().__init__(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Extension Workflow Errors
# ═══════════════════════════════════════════════════════════════════════════════


class NotExtendableError(DeadlineEngineError):
    """Raised when an extension is requested for a non-extendable stage."""

    code = "not_extendable"

    def __init__(self, stage: str) -> None:
        """Initialize the error.

        Args:
            stage: The stage that does not allow extensions.
        """
        self.stage = stage
        super().__init__(f"Stage {stage!r} does not allow deadline extensions")


class ExceedsMaximumError(DeadlineEngineError):
    """Raised when requested extension days exceed the stage's legal maximum.

    ``already_approved`` counts days granted by earlier approved requests
    for the same case and stage.
    """

    code = "exceeds_maximum"

    def __init__(
        self,
        stage: str,
        requested_days: int,
        maximum_days: int,
        already_approved: int = 0,
    ) -> None:
        """Initialize the error.

        Args:
            stage: The stage being extended.
            requested_days: Days requested in this request.
            maximum_days: Legal maximum extension for the stage.
            already_approved: Days already approved for this case and stage.
        """
        self.stage = stage
        self.requested_days = requested_days
        self.maximum_days = maximum_days
        self.already_approved = already_approved
        msg = (
            f"Requested extension ({requested_days} days) exceeds the maximum "
            f"allowed for {stage!r} ({maximum_days} days)"
        )
        if already_approved:
            msg += f"; {already_approved} days already approved"
        super().__init__(msg)


class InvalidExtensionRequestError(DeadlineEngineError):
    """Raised when an extension request is malformed.

    Covers non-positive day counts and missing or too-short justifications.
    """

    code = "invalid_request"

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Why the request was rejected.
        """
        self.reason = reason
        super().__init__(f"Invalid extension request: {reason}")


class AlreadyResolvedError(DeadlineEngineError):
    """Raised when resolving an extension request that is no longer pending.

    The original resolution stands and the case deadline is not touched.
    """

    code = "already_resolved"

    def __init__(self, request_id: UUID, current_status: str) -> None:
        """Initialize the error.

        Args:
            request_id: The extension request UUID.
            current_status: Status observed on the stored request.
        """
        self.request_id = request_id
        self.current_status = current_status
        super().__init__(
            f"Extension request {request_id} was already {current_status}"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Record Access Errors
# ═══════════════════════════════════════════════════════════════════════════════


class ExtensionRequestNotFoundError(DeadlineEngineError):
    """Raised when an extension request does not exist."""

    code = "not_found"

    def __init__(self, request_id: UUID) -> None:
        self.request_id = request_id
        super().__init__(f"Extension request not found: {request_id}")


class CaseNotFoundError(DeadlineEngineError):
    """Raised when the case store has no record for a case."""

    code = "not_found"

    def __init__(self, case_id: str) -> None:
        self.case_id = case_id
        super().__init__(f"Case not found: {case_id}")


class AlertNotFoundError(DeadlineEngineError):
    """Raised when a deadline alert does not exist."""

    code = "not_found"

    def __init__(self, alert_id: UUID) -> None:
        self.alert_id = alert_id
        super().__init__(f"Deadline alert not found: {alert_id}")


class AlertAlreadySentError(DeadlineEngineError):
    """Raised when marking an alert sent that is sent or cancelled."""

    code = "already_resolved"

    def __init__(self, alert_id: UUID, sent_on: date | None = None) -> None:
        self.alert_id = alert_id
        self.sent_on = sent_on
        super().__init__(f"Deadline alert {alert_id} is no longer deliverable")


# ═══════════════════════════════════════════════════════════════════════════════
# Configuration Errors
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidCatalogError(DeadlineEngineError):
    """Raised when a stage or holiday catalog fails validation."""

    code = "invalid_catalog"

    def __init__(self, source: str, reason: str) -> None:
        """Initialize the error.

        Args:
            source: Where the catalog came from (file path or name).
            reason: What was wrong with it.
        """
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid catalog {source}: {reason}")
