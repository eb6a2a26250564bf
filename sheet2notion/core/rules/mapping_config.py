"""
Column mapping configuration management.

Loads column mappings from YAML files and provides a builder for
constructing them in code.
"""

from pathlib import Path
from typing import Any

import yaml

from sheet2notion.core.models import PropertyType, RawColumnMapping
from sheet2notion.errors import ConfigError


class MappingConfigLoader:
    """
    Loads column mappings from YAML configuration files.

    Expected YAML format:
    ```yaml
    mappings:
      - column: C
        property: Name
        type: title
        required: yes
      - column: D
        property: Amount
        type: number
      - column: E
        property: Tags
        type: multi_select
        active: no
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the mapping config loader.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigError: If the file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigError(f"Mapping configuration file not found: {config_path}")

    def load_mappings(self) -> list[RawColumnMapping]:
        """
        Load and parse column mappings from the YAML file.

        Entries are returned unvalidated; SchemaRegistry.validate() reports
        structural problems.

        Raises:
            ConfigError: If YAML is invalid or the 'mappings' section is missing
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(config, dict) or "mappings" not in config:
            raise ConfigError("Configuration file must contain 'mappings' section")

        entries = config["mappings"]
        if not isinstance(entries, list):
            raise ConfigError("'mappings' section must be a list")

        return [self._parse_mapping(entry, idx) for idx, entry in enumerate(entries, start=1)]

    def _parse_mapping(self, entry: Any, idx: int) -> RawColumnMapping:
        if not isinstance(entry, dict):
            raise ConfigError(f"Mapping {idx} must be a mapping of keys, got {type(entry).__name__}")

        unknown = set(entry) - set(RawColumnMapping.model_fields)
        if unknown:
            raise ConfigError(f"Mapping {idx} has unknown keys: {', '.join(sorted(unknown))}")

        return RawColumnMapping(**entry)


class MappingConfigBuilder:
    """
    Programmatically build column mappings (for testing or dynamic setups).
    """

    def __init__(self):
        """Initialize empty mapping configuration."""
        self.mappings: list[RawColumnMapping] = []

    def add(
        self,
        column: str | int,
        property_name: str,
        property_type: PropertyType | str,
        required: bool = False,
        active: bool = True,
    ) -> "MappingConfigBuilder":
        """Add a mapping of any type."""
        type_name = (
            property_type.value if isinstance(property_type, PropertyType) else property_type
        )
        self.mappings.append(
            RawColumnMapping(
                column=column,
                property=property_name,
                type=type_name,
                active=active,
                required=required,
            )
        )
        return self

    def add_title(self, column: str | int, property_name: str) -> "MappingConfigBuilder":
        """Add the title mapping (always required)."""
        return self.add(column, property_name, PropertyType.TITLE, required=True)

    def add_text(
        self, column: str | int, property_name: str, required: bool = False
    ) -> "MappingConfigBuilder":
        return self.add(column, property_name, PropertyType.RICH_TEXT, required=required)

    def add_number(
        self, column: str | int, property_name: str, required: bool = False
    ) -> "MappingConfigBuilder":
        return self.add(column, property_name, PropertyType.NUMBER, required=required)

    def add_inactive(
        self, column: str | int, property_name: str, property_type: PropertyType | str
    ) -> "MappingConfigBuilder":
        """Add a mapping that is configured but not synced."""
        return self.add(column, property_name, property_type, active=False)

    def build(self) -> list[RawColumnMapping]:
        """Build and return the mapping configuration."""
        return list(self.mappings)

    def to_yaml(self) -> str:
        """Render the mappings in the loader's YAML format."""
        data: dict[str, Any] = {
            "mappings": [mapping.model_dump() for mapping in self.mappings]
        }
        return yaml.safe_dump(data, sort_keys=False)
