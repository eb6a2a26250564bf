"""
Error taxonomy for the sync pipeline.

Every error carries an ErrorKind tag so callers can branch on the category
without isinstance chains, and the orchestrator can report it in SyncResult.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure category."""

    VALIDATION = "validation"
    CONVERSION = "conversion"
    SCHEMA = "schema"
    RETRYABLE_REMOTE = "retryable_remote"
    FATAL_REMOTE = "fatal_remote"
    CONFIG = "config"
    UNEXPECTED = "unexpected"


class SyncError(Exception):
    """Base class for all sync failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationError(SyncError):
    """Raised when a row fails type validation."""

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: list[str], context: dict[str, Any] | None = None):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors), context)


class ConversionError(SyncError):
    """Raised when a value cannot be coerced to its declared property type."""

    kind = ErrorKind.CONVERSION

    def __init__(self, property_type: str, value: Any, reason: str):
        self.property_type = property_type
        self.value = value
        self.reason = reason
        super().__init__(
            f"Cannot convert {value!r} to {property_type}: {reason}",
            {"property_type": property_type},
        )


class SchemaError(SyncError):
    """Raised when the column mapping list is structurally invalid."""

    kind = ErrorKind.SCHEMA

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("Invalid column mappings: " + "; ".join(self.errors))


class ConfigError(SyncError):
    """Raised for missing or malformed credentials, database id or mapping source."""

    kind = ErrorKind.CONFIG


class RemoteError(SyncError):
    """Base class for failures talking to the Notion API."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_text: str = "",
        context: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message, context)


class RetryableRemoteError(RemoteError):
    """429, 5xx, and transport-level network/timeout failures."""

    kind = ErrorKind.RETRYABLE_REMOTE


class FatalRemoteError(RemoteError):
    """Any non-429 4xx response. Never retried."""

    kind = ErrorKind.FATAL_REMOTE


class RetryExhaustedError(RetryableRemoteError):
    """Raised by RetryPolicy when every attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: RetryableRemoteError):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Request failed after {attempts} attempts: {last_error.message}",
            status_code=last_error.status_code,
            response_text=last_error.response_text,
            context={"attempts": attempts},
        )


def is_retryable_status(status_code: int) -> bool:
    """Return True for HTTP statuses worth retrying (429 and 5xx)."""
    return status_code == 429 or 500 <= status_code < 600
