"""
Collaborator interfaces consumed by the UpsertOrchestrator.

Row storage, configuration and user notification are external; the
orchestrator only depends on these narrow protocols.
"""

from typing import Any, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field

from sheet2notion.core.models import PagePayload, RawColumnMapping


class SyncConfig(BaseModel):
    """
    Settings needed for one sync run.

    Attributes:
        database_id: Target Notion database id
        api_token: Notion integration token
        column_mappings: Column mappings as configured (validated per run)
    """

    database_id: str
    api_token: str = Field(..., repr=False)
    column_mappings: list[RawColumnMapping] = Field(default_factory=list)


@runtime_checkable
class ConfigProvider(Protocol):
    def get(self) -> SyncConfig:
        """Return the current settings. Raises ConfigError when unusable."""
        ...


@runtime_checkable
class RowStore(Protocol):
    def read_row(self, row_id: int) -> Sequence[Any]:
        """Return the full row (trigger slot, id slot, then data cells)."""
        ...

    def write_cell(self, row_id: int, slot: int, value: Any) -> None:
        ...


@runtime_checkable
class Notifier(Protocol):
    def success(self, message: str) -> None:
        ...

    def failure(self, message: str) -> None:
        ...


@runtime_checkable
class PageWriter(Protocol):
    """The subset of NotionClient the orchestrator calls."""

    async def create_page(self, database_id: str, payload: PagePayload) -> dict[str, Any]:
        ...

    async def update_page(self, page_id: str, payload: PagePayload) -> dict[str, Any]:
        ...
