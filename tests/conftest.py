"""
Pytest configuration and fixtures for sheet2notion tests

This module provides shared fixtures and in-memory collaborators for unit,
integration, and E2E tests. No test talks to the real Notion API.
"""
import os
from typing import Any

import pytest

from sheet2notion.core.models import PagePayload, RawColumnMapping
from sheet2notion.core.schema import SchemaRegistry
from sheet2notion.errors import FatalRemoteError, RetryableRemoteError
from sheet2notion.remote import RateLimiter, RetryPolicy
from sheet2notion.sync import SyncConfig

VALID_TOKEN = "secret_" + "a" * 43
VALID_DATABASE_ID = "0123456789abcdef0123456789abcdef"


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests wiring several components with fakes"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests that test the full pipeline"
    )


# =======================
# IN-MEMORY COLLABORATORS
# =======================

class StaticConfigProvider:
    """ConfigProvider returning a fixed SyncConfig (or raising a fixed error)."""

    def __init__(self, config: SyncConfig | None = None, error: Exception | None = None):
        self.config = config
        self.error = error
        self.calls = 0

    def get(self) -> SyncConfig:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.config


class InMemoryRowStore:
    """RowStore over a dict of row_id -> list of cells."""

    def __init__(self, rows: dict[int, list[Any]] | None = None, fail_writes: bool = False):
        self.rows = {row_id: list(cells) for row_id, cells in (rows or {}).items()}
        self.fail_writes = fail_writes
        self.writes: list[tuple[int, int, Any]] = []

    def read_row(self, row_id: int) -> list[Any]:
        if row_id not in self.rows:
            raise IndexError(f"Row {row_id} not found")
        return list(self.rows[row_id])

    def write_cell(self, row_id: int, slot: int, value: Any) -> None:
        if self.fail_writes:
            raise OSError("sheet is read-only")
        self.writes.append((row_id, slot, value))
        row = self.rows[row_id]
        if len(row) <= slot:
            row.extend([""] * (slot + 1 - len(row)))
        row[slot] = value


class RecordingNotifier:
    def __init__(self):
        self.successes: list[str] = []
        self.failures: list[str] = []

    def success(self, message: str) -> None:
        self.successes.append(message)

    def failure(self, message: str) -> None:
        self.failures.append(message)


class FakePageWriter:
    """
    Records create/update calls.

    Args:
        page_id: Id returned by create_page
        error: Exception raised by every call, if set
    """

    def __init__(self, page_id: str = "page-new", error: Exception | None = None):
        self.page_id = page_id
        self.error = error
        self.created: list[tuple[str, PagePayload]] = []
        self.updated: list[tuple[str, PagePayload]] = []

    async def create_page(self, database_id: str, payload: PagePayload) -> dict[str, Any]:
        self.created.append((database_id, payload))
        if self.error is not None:
            raise self.error
        return {"object": "page", "id": self.page_id}

    async def update_page(self, page_id: str, payload: PagePayload) -> dict[str, Any]:
        self.updated.append((page_id, payload))
        if self.error is not None:
            raise self.error
        return {"object": "page", "id": page_id}


class RecordingSleep:
    """Async sleep replacement that records requested delays and returns at once."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# =======================
# MAPPING FIXTURES
# =======================

@pytest.fixture
def mapping_entries() -> list[dict[str, Any]]:
    """Raw mappings for a task sheet: slots A/B reserved, data from column C."""
    return [
        {"column": "C", "property": "Name", "type": "title", "required": True},
        {"column": "D", "property": "Notes", "type": "rich_text"},
        {"column": "E", "property": "Amount", "type": "number"},
        {"column": "F", "property": "Due", "type": "date"},
        {"column": "G", "property": "Tags", "type": "multi_select"},
        {"column": "H", "property": "Done", "type": "checkbox"},
        {"column": "I", "property": "Legacy", "type": "rich_text", "active": False},
    ]


@pytest.fixture
def sample_mappings(mapping_entries):
    """Typed ColumnMapping list for mapping_entries."""
    return SchemaRegistry(mapping_entries).mappings


@pytest.fixture
def sync_config(mapping_entries) -> SyncConfig:
    return SyncConfig(
        database_id=VALID_DATABASE_ID,
        api_token=VALID_TOKEN,
        column_mappings=[RawColumnMapping(**entry) for entry in mapping_entries],
    )


@pytest.fixture
def sample_row() -> list[Any]:
    """A valid row for mapping_entries with an empty id slot."""
    return ["TRUE", "", "Task A", "", "42", "2023-01-01", "urgent, home", "yes", "old"]


# =======================
# COLLABORATOR FIXTURES
# =======================

@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def page_writer() -> FakePageWriter:
    return FakePageWriter()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def instant_retry_policy(recording_sleep) -> RetryPolicy:
    """Retry policy with no rate-limit spacing and recorded (not real) backoff."""
    return RetryPolicy(RateLimiter(interval=0.0), sleep=recording_sleep)


@pytest.fixture
def make_row_store():
    return InMemoryRowStore


@pytest.fixture
def make_config_provider():
    return StaticConfigProvider


@pytest.fixture
def make_page_writer():
    return FakePageWriter


@pytest.fixture
def retryable_error() -> RetryableRemoteError:
    return RetryableRemoteError("API request failed: 503", status_code=503)


@pytest.fixture
def fatal_error() -> FatalRemoteError:
    return FatalRemoteError("API request failed: 400", status_code=400)


# =======================
# CONFIGURATION FIXTURES
# =======================

@pytest.fixture
def notion_env(monkeypatch, tmp_path, mapping_entries):
    """
    Set Notion environment variables and write a mapping file

    Returns:
        Path to the mapping YAML
    """
    import yaml

    mappings_path = tmp_path / "mappings.yaml"
    mappings_path.write_text(yaml.safe_dump({"mappings": mapping_entries}))

    monkeypatch.setenv("NOTION_API_TOKEN", VALID_TOKEN)
    monkeypatch.setenv("NOTION_DATABASE_ID", VALID_DATABASE_ID)
    monkeypatch.setenv("SHEET2NOTION_MAPPINGS", os.fspath(mappings_path))
    return mappings_path
