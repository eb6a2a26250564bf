"""
Structured JSON logging for sheet2notion

This module provides consistent structured logging across the application
using python-json-logger for easy parsing and analysis. Extra fields whose
names look like credentials are masked before they are emitted.
"""
import logging
import os
import sys
import time
from typing import Any

from pythonjsonlogger import jsonlogger

from sheet2notion.constants import SENSITIVE_FIELDS

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

ROOT_LOGGER_NAME = "sheet2notion"
MASK = "***"


def is_sensitive(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(marker in lowered for marker in SENSITIVE_FIELDS)


def mask_sensitive(data: Any) -> Any:
    """Recursively replace values of credential-like keys with a mask."""
    if isinstance(data, dict):
        return {
            key: MASK if isinstance(key, str) and is_sensitive(key) else mask_sensitive(value)
            for key, value in data.items()
        }
    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive(item) for item in data)
    return data


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter that adds additional context fields

    Adds: timestamp, level, logger_name, and masks sensitive fields
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        """
        Add custom fields to log record

        Args:
            log_record: Log record dictionary
            record: LogRecord object
            message_dict: Message dictionary
        """
        super().add_fields(log_record, record, message_dict)

        # Add timestamp
        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        # Add level name
        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName

        for key in list(log_record.keys()):
            if is_sensitive(key):
                log_record[key] = MASK
            else:
                log_record[key] = mask_sensitive(log_record[key])


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text" (defaults to env var LOG_FORMAT or json)

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.INFO)
    format_type = format_type or os.getenv("LOG_FORMAT", "json")

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if format_type == "json":
        formatter = CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        # Text format for local development
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance under the package root logger.

    Module loggers propagate to the root "sheet2notion" logger, which is
    configured once on first use.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        setup_logger(ROOT_LOGGER_NAME)
    return logging.getLogger(name)


class log_operation:
    """
    Context manager for logging operation duration

    Usage:
        with log_operation("Processing row", logger=logger, row_id=12):
            # do work
            pass
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        """
        Initialize operation logger

        Args:
            operation_name: Name of the operation
            logger: Logger instance (uses root package logger if None)
            **extra_fields: Additional fields to include in logs
        """
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.extra_fields = extra_fields
        self.start_time = None

    def __enter__(self):
        self.start_time = time.monotonic()
        self.logger.info(
            f"Starting: {self.operation_name}",
            extra={"operation": self.operation_name, **self.extra_fields},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.monotonic() - self.start_time

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "success",
                    **self.extra_fields,
                },
            )
        else:
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra={
                    "operation": self.operation_name,
                    "duration_seconds": round(duration, 3),
                    "status": "error",
                    "error_type": exc_type.__name__,
                    "error_message": str(exc_val),
                    **self.extra_fields,
                },
            )
        return False  # Don't suppress exceptions
