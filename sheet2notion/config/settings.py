"""
Environment-backed configuration.

Settings come from environment variables (optionally loaded from a .env
file) and the column mapping YAML file they point to.
"""

import os
import time
from pathlib import Path
from typing import Callable

from dotenv import load_dotenv

from sheet2notion.constants import API_TOKEN_PATTERN, CONFIG_CACHE_SECONDS, DATABASE_ID_PATTERN
from sheet2notion.core.rules import MappingConfigLoader
from sheet2notion.core.schema import SchemaRegistry
from sheet2notion.errors import ConfigError
from sheet2notion.observability.logger import get_logger
from sheet2notion.sync.interfaces import SyncConfig

logger = get_logger(__name__)

TOKEN_ENV = "NOTION_API_TOKEN"
DATABASE_ID_ENV = "NOTION_DATABASE_ID"
MAPPINGS_ENV = "SHEET2NOTION_MAPPINGS"
DEFAULT_MAPPINGS_PATH = "mappings.yaml"


def validate_api_token(token: str | None) -> list[str]:
    if not token:
        return [f"Notion API token is not set ({TOKEN_ENV})"]
    if not API_TOKEN_PATTERN.match(token):
        return ["Notion API token has an invalid format (expected secret_... or ntn_...)"]
    return []


def validate_database_id(database_id: str | None) -> list[str]:
    if not database_id:
        return [f"Notion database id is not set ({DATABASE_ID_ENV})"]
    if not DATABASE_ID_PATTERN.match(database_id):
        return ["Notion database id must be 32 hex characters (dashes optional)"]
    return []


class EnvConfigProvider:
    """
    ConfigProvider reading credentials from the environment and mappings
    from YAML.

    The assembled SyncConfig is cached for five minutes; call clear_cache()
    after changing the environment or the mapping file.
    """

    def __init__(
        self,
        api_token: str | None = None,
        database_id: str | None = None,
        mappings_path: str | Path | None = None,
        env_file: str | Path | None = None,
        cache_seconds: float = CONFIG_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize config provider.

        Args:
            api_token: Notion token (defaults to env var NOTION_API_TOKEN)
            database_id: Target database (defaults to env var NOTION_DATABASE_ID)
            mappings_path: Mapping YAML (defaults to env var SHEET2NOTION_MAPPINGS
                or ./mappings.yaml)
            env_file: Optional .env file to load first (existing env vars win)
            cache_seconds: How long a loaded config is reused
            clock: Monotonic clock (injectable for tests)
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)

        self._api_token = api_token
        self._database_id = database_id
        self._mappings_path = mappings_path
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._cached: SyncConfig | None = None
        self._cached_at = 0.0

    @property
    def api_token(self) -> str | None:
        return self._api_token or os.getenv(TOKEN_ENV)

    @property
    def database_id(self) -> str | None:
        return self._database_id or os.getenv(DATABASE_ID_ENV)

    @property
    def mappings_path(self) -> Path:
        return Path(self._mappings_path or os.getenv(MAPPINGS_ENV, DEFAULT_MAPPINGS_PATH))

    def get(self) -> SyncConfig:
        """
        Return the current config, reloading it when the cache has expired.

        Raises:
            ConfigError: If credentials are missing or malformed, or the
                mapping file cannot be loaded
        """
        if self._cached is not None and self._clock() - self._cached_at < self.cache_seconds:
            return self._cached

        token = self.api_token
        database_id = self.database_id
        errors = validate_api_token(token) + validate_database_id(database_id)
        if errors:
            raise ConfigError("; ".join(errors))

        mappings = MappingConfigLoader(self.mappings_path).load_mappings()

        self._cached = SyncConfig(
            database_id=database_id,
            api_token=token,
            column_mappings=mappings,
        )
        self._cached_at = self._clock()
        logger.info(
            "Configuration loaded",
            extra={
                "database": database_id[:8] + "...",
                "mapping_count": len(mappings),
            },
        )
        return self._cached

    def clear_cache(self) -> None:
        self._cached = None
        self._cached_at = 0.0
        logger.debug("Configuration cache cleared")

    def health_check(self) -> dict:
        """
        Check that configuration and mappings load cleanly.

        Returns:
            {"healthy": bool, "issues": list[str]}
        """
        issues: list[str] = []
        issues.extend(validate_api_token(self.api_token))
        issues.extend(validate_database_id(self.database_id))

        try:
            mappings = MappingConfigLoader(self.mappings_path).load_mappings()
        except ConfigError as e:
            issues.append(e.message)
        else:
            result = SchemaRegistry().validate(mappings)
            issues.extend(result.errors)

        return {"healthy": not issues, "issues": issues}
