"""
Notion API access: rate limiting, retries and the async HTTP client.
"""

from .client import (
    ConnectionTestResult,
    DatabaseInfo,
    NotionClient,
    PropertyInfo,
    QueryResult,
    extract_property_config,
)
from .rate_limiter import RateLimiter
from .retry import RetryPolicy

__all__ = [
    "NotionClient",
    "DatabaseInfo",
    "PropertyInfo",
    "QueryResult",
    "ConnectionTestResult",
    "extract_property_config",
    "RateLimiter",
    "RetryPolicy",
]
