"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # Validation errors (422)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    CORRUPT_DATA = "CORRUPT_DATA"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class TaskNotFoundError(AppException):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            status_code=404,
            details={"task_id": task_id},
        )


class StorageUnavailableError(AppException):
    """The key-value backend could not be read or written.

    Raised by storage implementations; the task store contains it.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_UNAVAILABLE,
            message=f"Storage unavailable for key {key!r}: {reason}",
            status_code=503,
            details={"key": key},
        )


class CorruptTaskDataError(AppException):
    """The persisted task blob could not be decoded."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.CORRUPT_DATA,
            message=f"Stored task data is malformed: {reason}",
            status_code=500,
        )
