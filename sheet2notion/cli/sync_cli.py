"""
Command-line interface for syncing spreadsheet rows into Notion.

Usage:
    python -m sheet2notion.cli.sync_cli sync --csv <file_path> --row <row_id> [options]
    python -m sheet2notion.cli.sync_cli validate-mappings [--mappings <path>]
    python -m sheet2notion.cli.sync_cli check-row --csv <file_path> --row <row_id> [options]
    python -m sheet2notion.cli.sync_cli test-connection [--env-file <path>]
"""

import argparse
import asyncio
import json
import os
import sys

from dotenv import load_dotenv

from sheet2notion.config import EnvConfigProvider
from sheet2notion.config.settings import DEFAULT_MAPPINGS_PATH, MAPPINGS_ENV
from sheet2notion.core.models import ColumnMapping
from sheet2notion.core.rules import MappingConfigLoader, TypeValidator
from sheet2notion.core.schema import SchemaRegistry
from sheet2notion.errors import ConfigError, SchemaError
from sheet2notion.observability.logger import get_logger
from sheet2notion.observability.metrics import start_metrics_server
from sheet2notion.remote import NotionClient
from sheet2notion.storage import CsvRowStore
from sheet2notion.sync import LoggingNotifier, UpsertOrchestrator

logger = get_logger(__name__)


def _mappings_path(args) -> str:
    return args.mappings or os.getenv(MAPPINGS_ENV, DEFAULT_MAPPINGS_PATH)


def _load_mappings(args) -> list[ColumnMapping]:
    """Load and validate mappings; raises ConfigError or SchemaError."""
    raw = MappingConfigLoader(_mappings_path(args)).load_mappings()
    return SchemaRegistry(raw).mappings


async def _sync_row(args) -> int:
    provider = EnvConfigProvider(mappings_path=args.mappings)
    try:
        config = provider.get()
    except ConfigError as e:
        logger.error(f"Configuration problem: {e.message}")
        print(f"✗ Configuration problem: {e.message}")
        return 1

    try:
        store = CsvRowStore(args.csv)
    except FileNotFoundError as e:
        print(f"✗ {e}")
        return 1
    notifier = LoggingNotifier(echo=True)

    async with NotionClient(config.api_token) as client:
        orchestrator = UpsertOrchestrator(
            config_provider=provider,
            row_store=store,
            notifier=notifier,
            client=client,
        )
        result = await orchestrator.process(args.row)

    for error in result.errors:
        print(f"  - {error}")
    return 0 if result.success else 1


def sync_command(args) -> int:
    """
    Sync one CSV row into Notion.

    Args:
        args: Command line arguments

    Returns:
        Exit code (0 on success)
    """
    logger.info(f"Syncing row {args.row} from {args.csv}")
    if args.metrics_port:
        start_metrics_server(args.metrics_port)
    return asyncio.run(_sync_row(args))


def validate_mappings_command(args) -> int:
    """Validate the mapping file and print a summary."""
    path = _mappings_path(args)
    try:
        raw = MappingConfigLoader(path).load_mappings()
    except ConfigError as e:
        print(f"✗ {e.message}")
        return 1

    registry = SchemaRegistry()
    result = registry.validate(raw)
    if not result.valid:
        print(f"✗ Mapping configuration in {path} is invalid:")
        for error in result.errors:
            print(f"  - {error}")
        return 1

    registry.load(raw)
    print(f"✓ Mapping configuration in {path} is valid")
    print(json.dumps(registry.mapping_stats(), indent=2))
    return 0


def check_row_command(args) -> int:
    """Validate one CSV row against the mappings without calling Notion."""
    try:
        mappings = _load_mappings(args)
    except (ConfigError, SchemaError) as e:
        print(f"✗ {e.message}")
        return 1

    try:
        row = CsvRowStore(args.csv).read_row(args.row)
    except (FileNotFoundError, IndexError) as e:
        print(f"✗ {e}")
        return 1
    validator = TypeValidator()
    result = validator.validate_row(row, mappings)

    if result.valid:
        print(f"✓ Row {args.row} is valid")
        return 0

    print(f"✗ Row {args.row} has {len(result.errors)} error(s):")
    for error in result.errors:
        print(f"  - {error}")
    return 1


async def _check_connection(args) -> int:
    provider = EnvConfigProvider(mappings_path=args.mappings)
    token = provider.api_token
    database_id = provider.database_id
    if not token or not database_id:
        print("✗ NOTION_API_TOKEN and NOTION_DATABASE_ID must be set")
        return 1

    async with NotionClient(token) as client:
        result = await client.test_connection(database_id)

    if not result.success:
        print(f"✗ {result.message}: {result.error}")
        return 1

    print(f"✓ {result.message}")
    print(f"  Database: {result.database_title}")
    print(f"  Properties: {result.property_count}")
    return 0


def connection_command(args) -> int:
    """Describe the configured database to check credentials and access."""
    return asyncio.run(_check_connection(args))


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sync spreadsheet rows into a Notion database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sync row 3 of a CSV export
  python -m sheet2notion.cli.sync_cli sync --csv data/tasks.csv --row 3

  # Check the mapping file
  python -m sheet2notion.cli.sync_cli validate-mappings --mappings config/mappings.yaml

  # Validate a row without calling Notion
  python -m sheet2notion.cli.sync_cli check-row --csv data/tasks.csv --row 3
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser("sync", help="Sync one row into Notion")
    sync_parser.add_argument("--csv", required=True, help="Path to CSV file")
    sync_parser.add_argument(
        "--row", type=int, required=True, help="Data row number (1 = first row after header)"
    )
    sync_parser.add_argument(
        "--metrics-port",
        type=int,
        default=None,
        help="Expose Prometheus metrics on this port while syncing"
    )

    validate_parser = subparsers.add_parser(
        "validate-mappings", help="Validate the column mapping file"
    )

    check_parser = subparsers.add_parser(
        "check-row", help="Validate a row without calling Notion"
    )
    check_parser.add_argument("--csv", required=True, help="Path to CSV file")
    check_parser.add_argument("--row", type=int, required=True, help="Data row number")

    connection_parser = subparsers.add_parser(
        "test-connection", help="Check credentials and database access"
    )

    for sub in (sync_parser, validate_parser, check_parser, connection_parser):
        sub.add_argument(
            "--mappings",
            default=None,
            help=f"Path to mapping YAML (default: ${MAPPINGS_ENV} or {DEFAULT_MAPPINGS_PATH})"
        )
        sub.add_argument("--env-file", default=None, help="Optional .env file to load")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.env_file:
        load_dotenv(args.env_file, override=False)

    commands = {
        "sync": sync_command,
        "validate-mappings": validate_mappings_command,
        "check-row": check_row_command,
        "test-connection": connection_command,
    }
    sys.exit(commands[args.command](args))


if __name__ == "__main__":
    main()
