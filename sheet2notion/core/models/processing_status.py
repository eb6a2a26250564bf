"""
Run-state models owned by the UpsertOrchestrator.
"""

from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Literal

from pydantic import BaseModel, Field

from sheet2notion.constants import HISTORY_CAPACITY
from sheet2notion.errors import ErrorKind


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class HistoryEntry(BaseModel):
    """One outcome recorded by the orchestrator."""

    timestamp: datetime = Field(default_factory=utc_now)
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


class ProcessingStatus(BaseModel):
    """
    Orchestrator run state.

    Attributes:
        is_processing: Re-entrancy flag (best-effort, not a lock)
        last_run_at: When the most recent run started
        history: Bounded ring buffer of outcomes; oldest entries are evicted
    """

    is_processing: bool = False
    last_run_at: datetime | None = None
    history: Deque[HistoryEntry] = Field(
        default_factory=lambda: deque(maxlen=HISTORY_CAPACITY)
    )

    def record(self, message: str, context: dict[str, Any] | None = None) -> HistoryEntry:
        entry = HistoryEntry(message=message, context=context or {})
        self.history.append(entry)
        return entry

    def snapshot(self) -> "ProcessingStatus":
        return ProcessingStatus(
            is_processing=self.is_processing,
            last_run_at=self.last_run_at,
            history=deque(self.history, maxlen=HISTORY_CAPACITY),
        )


class SyncResult(BaseModel):
    """
    Discriminated outcome of UpsertOrchestrator.process().

    Attributes:
        outcome: "succeeded", "failed", or "rejected" (already processing)
        row_id: Row that was processed
        page_id: Notion page id on success
        operation: "create" or "update" when a remote write was attempted
        error_kind: Failure category when outcome is "failed"
        message: Human-readable summary (the text sent to the notifier)
        errors: Field-level errors for validation/schema failures
    """

    outcome: Literal["succeeded", "failed", "rejected"]
    row_id: int
    page_id: str | None = None
    operation: Literal["create", "update"] | None = None
    error_kind: ErrorKind | None = None
    message: str = ""
    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.outcome == "succeeded"
