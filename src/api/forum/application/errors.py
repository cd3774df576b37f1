"""Mapping from domain exceptions to structured operation errors."""

from __future__ import annotations

from forum.domain.value_objects import ErrorType, OperationError
from forum.ports.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForumValidationError,
)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error"


def classify(error: Exception) -> ErrorType:
    """Return the error category for an exception raised by an operation."""
    if isinstance(error, EntityNotFoundError):
        return ErrorType.NOT_FOUND
    if isinstance(error, ForumValidationError):
        return ErrorType.VALIDATION
    if isinstance(error, ConflictError):
        return ErrorType.CONFLICT
    return ErrorType.UNEXPECTED


def operation_error(
    error: Exception, unexpected_message: str = UNEXPECTED_ERROR_MESSAGE
) -> OperationError:
    """Build the OperationError returned to the caller for error.

    Domain errors carry their own message. Anything else (store failures,
    programming errors) is reported with a short fixed message so internal
    details never reach the caller.
    """
    error_type = classify(error)
    if error_type is ErrorType.UNEXPECTED:
        return OperationError(error_type=error_type, message=unexpected_message)
    return OperationError(error_type=error_type, message=str(error))
