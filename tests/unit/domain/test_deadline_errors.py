"""Unit tests for deadline engine domain errors."""

from uuid import uuid4

import pytest

from src.domain.errors import (
    AlertAlreadySentError,
    AlertNotFoundError,
    AlreadyResolvedError,
    CaseNotFoundError,
    ExceedsMaximumError,
    ExtensionRequestNotFoundError,
    InvalidCatalogError,
    InvalidExtensionRequestError,
    NotExtendableError,
    UnknownStageError,
)
from src.domain.exceptions import DeadlineEngineError


class TestErrorCodes:
    """Every error carries a stable code."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (UnknownStageError("appeal"), "unknown_stage"),
            (NotExtendableError("dt_notification"), "not_extendable"),
            (ExceedsMaximumError("investigation", 31, 30), "exceeds_maximum"),
            (InvalidExtensionRequestError("too short"), "invalid_request"),
            (AlreadyResolvedError(uuid4(), "approved"), "already_resolved"),
            (ExtensionRequestNotFoundError(uuid4()), "not_found"),
            (CaseNotFoundError("case-1"), "not_found"),
            (AlertNotFoundError(uuid4()), "not_found"),
            (AlertAlreadySentError(uuid4()), "already_resolved"),
            (InvalidCatalogError("cl.yaml", "bad"), "invalid_catalog"),
        ],
    )
    def test_code(self, error: DeadlineEngineError, code: str) -> None:
        assert isinstance(error, DeadlineEngineError)
        assert error.code == code


class TestErrorMessages:
    def test_exceeds_maximum_mentions_prior_approvals(self) -> None:
        error = ExceedsMaximumError("investigation", 10, 30, already_approved=25)

        assert "30 days" in str(error)
        assert "25 days already approved" in str(error)
        assert error.already_approved == 25

    def test_exceeds_maximum_without_prior_approvals(self) -> None:
        assert "already approved" not in str(ExceedsMaximumError("investigation", 31, 30))

    def test_already_resolved_includes_status(self) -> None:
        request_id = uuid4()
        error = AlreadyResolvedError(request_id, "rejected")

        assert str(request_id) in str(error)
        assert "rejected" in str(error)

    def test_base_error_accepts_message(self) -> None:
        assert str(DeadlineEngineError("test message")) == "test message"
        assert str(DeadlineEngineError()) == ""
