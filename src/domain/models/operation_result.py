"""Structured result returned across the engine boundary.

Domain errors never escape DeadlineEngine operations; they are converted
into an OperationResult carrying the error's stable code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

STORE_FAILURE = "store_failure"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of an engine operation.

    Attributes:
        success: Whether the operation completed.
        value: Result value on success.
        error_code: Stable error code on failure (e.g. "not_extendable").
        error_message: Human-readable failure description.
    """

    success: bool
    value: T | None = field(default=None)
    error_code: str | None = field(default=None)
    error_message: str = field(default="")

    def __post_init__(self) -> None:
        if self.success and self.error_code is not None:
            raise ValueError("successful results cannot carry an error_code")
        if not self.success and not self.error_code:
            raise ValueError("failed results require an error_code")

    @classmethod
    def ok(cls, value: T | None = None) -> OperationResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error_code: str, error_message: str = "") -> OperationResult[T]:
        return cls(success=False, error_code=error_code, error_message=error_message)
