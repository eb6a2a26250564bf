"""
Row sync orchestration and its collaborator interfaces.
"""

from .interfaces import ConfigProvider, Notifier, PageWriter, RowStore, SyncConfig
from .notifier import LoggingNotifier
from .orchestrator import UpsertOrchestrator, existing_page_id, is_checked

__all__ = [
    "UpsertOrchestrator",
    "SyncConfig",
    "ConfigProvider",
    "RowStore",
    "Notifier",
    "PageWriter",
    "LoggingNotifier",
    "existing_page_id",
    "is_checked",
]
