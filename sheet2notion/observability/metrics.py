"""
Prometheus metrics collection for sheet2notion

This module provides metrics instrumentation for monitoring row sync
outcomes, validation quality, and Notion API traffic.
"""
import os
from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# SYNC METRICS
# =======================

rows_processed_total = Counter(
    name="sync_rows_processed_total",
    documentation="Total number of rows processed by the orchestrator",
    labelnames=["outcome"],  # succeeded, failed, rejected
    registry=REGISTRY,
)

row_duration_seconds = Histogram(
    name="sync_row_duration_seconds",
    documentation="Time spent processing a single row, including retries",
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

validation_failures_total = Counter(
    name="sync_validation_failures_total",
    documentation="Total number of field validation failures",
    labelnames=["property_type"],
    registry=REGISTRY,
)

# =======================
# REMOTE API METRICS
# =======================

remote_requests_total = Counter(
    name="sync_remote_requests_total",
    documentation="Total number of Notion API requests by outcome",
    labelnames=["operation", "status"],  # status: HTTP code or "network"
    registry=REGISTRY,
)

remote_retries_total = Counter(
    name="sync_remote_retries_total",
    documentation="Total number of retried Notion API requests",
    labelnames=["operation"],
    registry=REGISTRY,
)

rate_limit_wait_seconds = Histogram(
    name="sync_rate_limit_wait_seconds",
    documentation="Time callers spent waiting on the outbound rate limiter",
    buckets=[0.0, 0.05, 0.1, 0.2, 0.334, 0.5, 1.0],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Content type for the metrics endpoint"""
    return CONTENT_TYPE_LATEST


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Lazy import: the HTTP server is only needed when the endpoint is enabled
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


def record_row_outcome(outcome: str, duration_seconds: float | None = None) -> None:
    rows_processed_total.labels(outcome=outcome).inc()
    if duration_seconds is not None:
        row_duration_seconds.observe(duration_seconds)


def record_validation_failure(property_type: str) -> None:
    validation_failures_total.labels(property_type=property_type).inc()


def record_remote_request(operation: str, status: int | str) -> None:
    remote_requests_total.labels(operation=operation, status=str(status)).inc()


def record_retry(operation: str) -> None:
    remote_retries_total.labels(operation=operation).inc()


def record_rate_limit_wait(seconds: float) -> None:
    rate_limit_wait_seconds.observe(seconds)
