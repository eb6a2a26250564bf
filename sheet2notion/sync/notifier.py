"""
Notifier that reports sync outcomes through the package logger.
"""

from collections import deque

from sheet2notion.constants import HISTORY_CAPACITY
from sheet2notion.observability.logger import get_logger

logger = get_logger(__name__)


class LoggingNotifier:
    """Notifier for headless runs: success at INFO, failure at ERROR."""

    def __init__(self, echo: bool = False):
        """
        Args:
            echo: Also print messages to stdout (used by the CLI)

        Only the most recent HISTORY_CAPACITY messages are kept.
        """
        self.echo = echo
        self.messages: deque[tuple[str, str]] = deque(maxlen=HISTORY_CAPACITY)

    def success(self, message: str) -> None:
        self.messages.append(("success", message))
        logger.info(message, extra={"notification": "success"})
        if self.echo:
            print(f"✓ {message}")

    def failure(self, message: str) -> None:
        self.messages.append(("failure", message))
        logger.error(message, extra={"notification": "failure"})
        if self.echo:
            print(f"✗ {message}")
