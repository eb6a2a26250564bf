"""
Upsert orchestration: one row in, one Notion page created or updated.

State machine per run: Idle -> Processing -> {Succeeded, Failed} -> Idle.
"""

import time
from typing import Any, Awaitable, Sequence

from sheet2notion.constants import CHECKBOX_SLOT, PRIMARY_KEY_SLOT
from sheet2notion.core.conversion import PropertyConverter
from sheet2notion.core.models import ProcessingStatus, SyncResult
from sheet2notion.core.models.processing_status import utc_now
from sheet2notion.core.rules import TypeValidator
from sheet2notion.core.schema import SchemaRegistry
from sheet2notion.errors import ErrorKind, FatalRemoteError, SyncError, ValidationError
from sheet2notion.observability.logger import get_logger, log_operation
from sheet2notion.observability.metrics import record_row_outcome
from sheet2notion.utils.values import is_number

from .interfaces import ConfigProvider, Notifier, PageWriter, RowStore
from .messages import failure_message, rejected_message, success_message

logger = get_logger(__name__)


def is_checked(value: Any) -> bool:
    """Trigger filter: only True, "TRUE", 1 and "1" count as a checked box."""
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value == 1
    return value in ("TRUE", "1")


def existing_page_id(row: Sequence[Any]) -> str | None:
    """Return the persisted page id from the id slot, or None when blank."""
    if len(row) <= PRIMARY_KEY_SLOT:
        return None
    value = row[PRIMARY_KEY_SLOT]
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class UpsertOrchestrator:
    """
    Runs one row through validation, conversion and the remote upsert.

    Construct one instance per service lifetime and pass it where needed.

    The re-entrancy guard is a plain flag checked and set without awaiting
    in between. Under a single event loop that makes the Idle -> Processing
    transition atomic; callers on other threads or loops can still race
    past it, which is accepted.
    """

    def __init__(
        self,
        config_provider: ConfigProvider,
        row_store: RowStore,
        notifier: Notifier,
        client: PageWriter,
        registry: SchemaRegistry | None = None,
        type_validator: TypeValidator | None = None,
        converter: PropertyConverter | None = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config_provider: Source of database id, token and mappings
            row_store: Row reader/writer
            notifier: User notification sink
            client: Remote page writer (NotionClient in production)
            registry: Schema registry (a fresh one by default)
            type_validator: Row validator
            converter: Property converter
        """
        self.config_provider = config_provider
        self.row_store = row_store
        self.notifier = notifier
        self.client = client
        self.registry = registry or SchemaRegistry()
        self.type_validator = type_validator or TypeValidator()
        self.converter = converter or PropertyConverter()
        self._status = ProcessingStatus()

    @property
    def is_processing(self) -> bool:
        return self._status.is_processing

    def status(self) -> ProcessingStatus:
        """Snapshot of the current run state and history."""
        return self._status.snapshot()

    def clear_history(self) -> None:
        self._status.history.clear()
        logger.info("Processing history cleared")

    async def handle_trigger(self, row_id: int, column: int, value: Any) -> SyncResult | None:
        """
        Process a row in response to an edit event.

        Only a checked checkbox in the trigger slot starts a run.

        Returns:
            The run's result, or None when the edit is ignored
        """
        if column != CHECKBOX_SLOT:
            logger.debug("Edit is not in checkbox column, skipping", extra={"column": column})
            return None
        if not is_checked(value):
            logger.debug("Checkbox is not checked, skipping", extra={"row_id": row_id})
            return None
        return await self.process(row_id)

    async def process(self, row_id: int) -> SyncResult:
        """
        Sync one row. Never raises.

        Args:
            row_id: Row identifier understood by the RowStore

        Returns:
            SyncResult with outcome "succeeded", "failed" or "rejected"
        """
        if self._status.is_processing:
            message = rejected_message(row_id)
            logger.warning(
                "Processing already in progress, skipping", extra={"row_id": row_id}
            )
            record_row_outcome("rejected")
            return SyncResult(outcome="rejected", row_id=row_id, message=message)

        self._status.is_processing = True
        self._status.last_run_at = utc_now()
        started = time.monotonic()

        try:
            with log_operation("Sync row", logger=logger, row_id=row_id):
                result = await self._run(row_id)
        except Exception as e:
            result = self._failed(row_id, e)
        finally:
            self._status.is_processing = False

        record_row_outcome(result.outcome, time.monotonic() - started)
        self._status.record(
            result.message,
            {
                "row_id": row_id,
                "outcome": result.outcome,
                "operation": result.operation,
                "page_id": result.page_id,
                "error_kind": result.error_kind.value if result.error_kind else None,
            },
        )
        self._notify(result)
        return result

    async def _run(self, row_id: int) -> SyncResult:
        config = self.config_provider.get()
        mappings = self.registry.load(config.column_mappings)

        row = self.row_store.read_row(row_id)
        logger.debug(
            "Row data retrieved", extra={"row_id": row_id, "cell_count": len(row)}
        )

        validation = self.type_validator.validate_row(row, mappings)
        if not validation.valid:
            raise ValidationError(validation.errors, {"row_id": row_id})

        payload = self.converter.build_payload(row, mappings)

        page_id = existing_page_id(row)
        if page_id:
            operation = "update"
            logger.info("Updating existing Notion page", extra={"page_id": page_id})
            await self._call_remote(operation, self.client.update_page(page_id, payload))
        else:
            operation = "create"
            logger.info("Creating new Notion page", extra={"row_id": row_id})
            response = await self._call_remote(
                operation, self.client.create_page(config.database_id, payload)
            )
            page_id = response.get("id") if isinstance(response, dict) else None
            if not page_id:
                raise FatalRemoteError(
                    "Create response did not include a page id",
                    context={"sync_operation": operation},
                )
            self._persist_page_id(row_id, page_id)

        return SyncResult(
            outcome="succeeded",
            row_id=row_id,
            page_id=page_id,
            operation=operation,
            message=success_message(row_id, operation, page_id),
        )

    async def _call_remote(self, operation: str, call: Awaitable[Any]) -> Any:
        try:
            return await call
        except SyncError as e:
            e.context["sync_operation"] = operation
            raise

    def _persist_page_id(self, row_id: int, page_id: str) -> None:
        try:
            self.row_store.write_cell(row_id, PRIMARY_KEY_SLOT, page_id)
        except Exception as e:
            # The page exists remotely; a failed write-back only loses the link
            logger.error(
                "Failed to record page id",
                extra={"row_id": row_id, "page_id": page_id, "error_message": str(e)},
            )
            return
        logger.info("Page id recorded", extra={"row_id": row_id, "page_id": page_id})

    def _failed(self, row_id: int, error: Exception) -> SyncResult:
        if isinstance(error, SyncError):
            kind = error.kind
            logger.error(
                "Import process failed",
                extra={
                    "row_id": row_id,
                    "error_kind": kind.value,
                    "error_message": error.message,
                },
            )
        else:
            kind = ErrorKind.UNEXPECTED
            logger.exception("Import process failed unexpectedly", extra={"row_id": row_id})

        context = getattr(error, "context", {}) or {}
        return SyncResult(
            outcome="failed",
            row_id=row_id,
            operation=context.get("sync_operation"),
            error_kind=kind,
            message=failure_message(error),
            errors=list(getattr(error, "errors", []) or []),
        )

    def _notify(self, result: SyncResult) -> None:
        try:
            if result.success:
                self.notifier.success(result.message)
            else:
                self.notifier.failure(result.message)
        except Exception as e:
            logger.warning(
                "Failed to deliver notification",
                extra={"row_id": result.row_id, "error_message": str(e)},
            )
