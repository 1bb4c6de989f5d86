"""Domain errors for the deadline engine.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from DeadlineEngineError.
"""

from src.domain.errors.deadline import (
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

__all__: list[str] = [
    "AlertAlreadySentError",
    "AlertNotFoundError",
    "AlreadyResolvedError",
    "CaseNotFoundError",
    "ExceedsMaximumError",
    "ExtensionRequestNotFoundError",
    "InvalidCatalogError",
    "InvalidExtensionRequestError",
    "NotExtendableError",
    "UnknownStageError",
]
