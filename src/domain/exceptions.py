"""Base exception classes for the deadline engine domain layer."""


class DeadlineEngineError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so the
    engine facade can translate them into structured results.

    Attributes:
        code: Stable machine-readable error code surfaced to callers.
    """

    code: str = "engine_error"

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
