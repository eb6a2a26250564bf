"""
Async Notion API client.

Every request goes through one RetryPolicy (and therefore one RateLimiter)
per client. HTTP failures are classified into RetryableRemoteError (429,
5xx, network/timeout) and FatalRemoteError (any other 4xx).
"""

from typing import Any

import httpx
from pydantic import BaseModel, Field

from sheet2notion.constants import NOTION_API_VERSION, NOTION_BASE_URL, REQUEST_TIMEOUT_SECONDS
from sheet2notion.core.models import PagePayload
from sheet2notion.errors import FatalRemoteError, RetryableRemoteError, is_retryable_status
from sheet2notion.observability.logger import get_logger
from sheet2notion.observability.metrics import record_remote_request

from .rate_limiter import RateLimiter
from .retry import RetryPolicy

logger = get_logger(__name__)

QUERY_PAGE_SIZE = 100
ERROR_TEXT_LIMIT = 300


class PropertyInfo(BaseModel):
    """One property of a Notion database schema."""

    name: str
    type: str
    id: str = ""
    config: dict[str, Any] = Field(default_factory=dict)


class DatabaseInfo(BaseModel):
    """Summary of a Notion database: id, title and property schema."""

    id: str
    title: str = "Untitled"
    properties: list[PropertyInfo] = Field(default_factory=list)

    def property_names(self) -> list[str]:
        return [prop.name for prop in self.properties]


class QueryResult(BaseModel):
    results: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None


class ConnectionTestResult(BaseModel):
    success: bool
    message: str
    database_title: str | None = None
    property_count: int | None = None
    error: str | None = None


def extract_property_config(prop: dict[str, Any]) -> dict[str, Any]:
    """Pull the type-specific settings out of a database property definition."""
    prop_type = prop.get("type", "")
    config: dict[str, Any] = {"type": prop_type}

    if prop_type in ("select", "multi_select"):
        options = (prop.get(prop_type) or {}).get("options") or []
        config["options"] = [
            {"name": option.get("name"), "color": option.get("color")} for option in options
        ]
    elif prop_type == "date":
        config["format"] = (prop.get("date") or {}).get("format")
    elif prop_type == "number":
        config["format"] = (prop.get("number") or {}).get("format") or "number"
    elif prop_type == "formula":
        config["expression"] = (prop.get("formula") or {}).get("expression") or ""

    return config


class NotionClient:
    """
    Client for the Notion pages and databases endpoints.

    Usage:
        async with NotionClient(api_token) as client:
            page = await client.create_page(database_id, payload)
    """

    def __init__(
        self,
        api_token: str,
        retry_policy: RetryPolicy | None = None,
        base_url: str = NOTION_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_token: Notion integration token
            retry_policy: Shared retry policy (a default one with its own
                RateLimiter is created when omitted)
            base_url: API base URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.retry_policy = retry_policy or RetryPolicy(RateLimiter())
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_token}",
                "Notion-Version": NOTION_API_VERSION,
                "Content-Type": "application/json",
            },
        )

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        operation: str,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform exactly one HTTP attempt and classify the outcome."""
        logger.debug("Making API request", extra={"method": method, "path": path})
        try:
            response = await self._http.request(method, path, json=json_body)
        except httpx.TransportError as e:
            record_remote_request(operation, "network")
            raise RetryableRemoteError(
                f"Network or timeout error: {e}", context={"operation": operation}
            ) from e

        record_remote_request(operation, response.status_code)

        if response.status_code >= 400:
            text = response.text[:ERROR_TEXT_LIMIT]
            message = f"API request failed: {response.status_code}"
            error_class = (
                RetryableRemoteError
                if is_retryable_status(response.status_code)
                else FatalRemoteError
            )
            raise error_class(
                message,
                status_code=response.status_code,
                response_text=text,
                context={"operation": operation, "path": path},
            )

        try:
            return response.json()
        except ValueError as e:
            raise FatalRemoteError(
                f"Unparseable response body: {e}",
                status_code=response.status_code,
                context={"operation": operation},
            ) from e

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await self.retry_policy.execute(
            lambda: self._send(method, path, operation, json_body),
            operation_name=operation,
        )

    async def create_page(self, database_id: str, payload: PagePayload) -> dict[str, Any]:
        """Create a page in a database. Returns the page object (with "id")."""
        body = {
            "parent": {"database_id": database_id},
            "properties": payload.to_notion(),
        }
        response = await self._request("POST", "/pages", "create_page", body)
        logger.info("Page created successfully", extra={"page_id": response.get("id")})
        return response

    async def update_page(self, page_id: str, payload: PagePayload) -> dict[str, Any]:
        """Update an existing page's properties."""
        body = {"properties": payload.to_notion()}
        response = await self._request("PATCH", f"/pages/{page_id}", "update_page", body)
        logger.info("Page updated successfully", extra={"page_id": page_id})
        return response

    async def get_page(self, page_id: str) -> dict[str, Any]:
        response = await self._request("GET", f"/pages/{page_id}", "get_page")
        logger.info("Page retrieved successfully", extra={"page_id": page_id})
        return response

    async def get_database_info(self, database_id: str) -> DatabaseInfo:
        """Describe a database: title and property schema."""
        response = await self._request("GET", f"/databases/{database_id}", "get_database")

        title_items = response.get("title") or []
        title = title_items[0].get("plain_text") if title_items else None
        properties = [
            PropertyInfo(
                name=name,
                type=prop.get("type", ""),
                id=prop.get("id", ""),
                config=extract_property_config(prop),
            )
            for name, prop in (response.get("properties") or {}).items()
        ]
        return DatabaseInfo(
            id=response.get("id", database_id),
            title=title or "Untitled",
            properties=properties,
        )

    async def query_database(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> QueryResult:
        """Query one page of database results."""
        body: dict[str, Any] = {"page_size": QUERY_PAGE_SIZE}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts

        response = await self._request(
            "POST", f"/databases/{database_id}/query", "query_database", body
        )
        return QueryResult(
            results=response.get("results") or [],
            has_more=bool(response.get("has_more")),
            next_cursor=response.get("next_cursor"),
        )

    async def test_connection(self, database_id: str) -> ConnectionTestResult:
        """Check credentials and database access by describing the database."""
        try:
            info = await self.get_database_info(database_id)
        except (RetryableRemoteError, FatalRemoteError) as e:
            logger.error("Connection test failed", extra={"error_message": e.message})
            return ConnectionTestResult(
                success=False,
                message="Connection test failed",
                error=e.message,
            )

        return ConnectionTestResult(
            success=True,
            message="Connection test succeeded",
            database_title=info.title,
            property_count=len(info.properties),
        )
