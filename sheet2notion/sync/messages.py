"""
User-facing messages for sync outcomes, one per failure category.
"""

from sheet2notion.errors import (
    ConfigError,
    ConversionError,
    FatalRemoteError,
    RetryableRemoteError,
    SchemaError,
    SyncError,
    ValidationError,
)

FATAL_STATUS_MESSAGES = {
    401: "Sync failed: invalid credentials. Check the Notion API token.",
    403: "Sync failed: permission denied. Share the database with the integration.",
    404: "Sync failed: target not found. Check the database id or page id.",
}


def success_message(row_id: int, operation: str, page_id: str) -> str:
    verb = "created" if operation == "create" else "updated"
    return f"Row {row_id}: Notion page {verb} ({page_id})"


def failure_message(error: BaseException) -> str:
    """Map an error to the message shown to the user."""
    if isinstance(error, ValidationError):
        return f"Sync failed: data validation errors: {error.message}"
    if isinstance(error, ConversionError):
        return f"Sync failed: data conversion error: {error.message}"
    if isinstance(error, SchemaError):
        return f"Sync failed: mapping configuration invalid: {'; '.join(error.errors)}"
    if isinstance(error, ConfigError):
        return f"Sync failed: configuration problem: {error.message}"
    if isinstance(error, FatalRemoteError):
        return FATAL_STATUS_MESSAGES.get(
            error.status_code,
            f"Sync failed: Notion rejected the request ({error.status_code or 'no status'}).",
        )
    if isinstance(error, RetryableRemoteError):
        return "Sync failed: Notion is temporarily unavailable. Please try again later."
    if isinstance(error, SyncError):
        return f"Sync failed: {error.message}"
    return f"Sync failed: unexpected error: {error}"


def rejected_message(row_id: int) -> str:
    return f"Row {row_id}: another sync is already in progress"
