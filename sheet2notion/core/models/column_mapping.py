"""
ColumnMapping model: one spreadsheet column mapped to one Notion property.

Mappings arrive as loosely-typed strings (from YAML, a sheet, or env) and are
parsed once into RawColumnMapping. ColumnMapping.from_raw turns a raw entry
into the typed form used by validation and conversion.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sheet2notion.errors import SchemaError


class PropertyType(str, Enum):
    """Closed set of supported Notion property types (wire names as values)."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"

    @classmethod
    def parse(cls, name: str) -> "PropertyType":
        """
        Parse a type name, accepting wire names and CamelCase names.

        Raises:
            ValueError: If the name is not a supported property type
        """
        normalized = (name or "").strip()
        for member in cls:
            if normalized == member.value:
                return member
        # "RichText" / "PhoneNumber" / "Title"
        lowered = normalized.replace("_", "").lower()
        for member in cls:
            if member.value.replace("_", "") == lowered:
                return member
        raise ValueError(f"Unsupported property type '{name}'")


_TRUE_FLAGS = {"yes", "true", "1", "y", "on"}


def parse_flag(value: Any) -> bool:
    """Parse a yes/no style flag from a config cell."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_FLAGS


def column_ref_to_index(ref: str | int) -> int:
    """
    Convert a column reference to a zero-based index.

    Numeric references are used directly; letter codes are base-26 with A=1
    (A -> 0, Z -> 25, AA -> 26).

    Raises:
        ValueError: If the reference is neither numeric nor a letter code
    """
    if isinstance(ref, bool):
        raise ValueError(f"Invalid column reference {ref!r}")
    if isinstance(ref, int):
        if ref < 0:
            raise ValueError(f"Column index must be non-negative, got {ref}")
        return ref

    text = str(ref).strip()
    if text.isdigit():
        return int(text)
    if text.isascii() and text.isalpha():
        result = 0
        for char in text.upper():
            result = result * 26 + (ord(char) - ord("A") + 1)
        return result - 1
    raise ValueError(f"Invalid column reference '{ref}'")


class RawColumnMapping(BaseModel):
    """
    A column mapping exactly as configured, before type parsing.

    Attributes:
        column: Column reference ("C", "AA", or "2")
        property: Target Notion property name
        type: Property type name
        active: Whether the column is synced
        required: Whether an empty cell fails validation
    """

    column: str = ""
    property: str = ""
    type: str = ""
    active: bool = True
    required: bool = False

    @field_validator("column", "property", "type", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("active", "required", mode="before")
    @classmethod
    def coerce_flag(cls, v):
        return parse_flag(v)


class ColumnMapping(BaseModel):
    """
    Typed column mapping used by the validation and conversion core.

    Attributes:
        source_column: Zero-based resolved column index
        column_label: Column reference as configured (used in messages)
        target_property: Notion property name
        declared_type: Notion property type
        is_active: Whether the column is synced
        is_required: Whether an empty cell fails validation
    """

    model_config = ConfigDict(frozen=True)

    source_column: int = Field(..., ge=0)
    column_label: str
    target_property: str = Field(..., min_length=1)
    declared_type: PropertyType
    is_active: bool = True
    is_required: bool = False

    @property
    def field_name(self) -> str:
        """Field label used in validation messages: ``column (property)``."""
        return f"{self.column_label} ({self.target_property})"

    @classmethod
    def from_raw(cls, raw: RawColumnMapping | dict[str, Any]) -> "ColumnMapping":
        """
        Build a typed mapping from a raw entry.

        Raises:
            SchemaError: If the column reference or type cannot be parsed
        """
        if isinstance(raw, dict):
            raw = RawColumnMapping(**raw)

        errors = []
        index = None
        declared_type = None
        try:
            index = column_ref_to_index(raw.column)
        except ValueError as e:
            errors.append(str(e))
        try:
            declared_type = PropertyType.parse(raw.type)
        except ValueError as e:
            errors.append(str(e))
        if not raw.property.strip():
            errors.append("Notion property name is required")
        if errors:
            raise SchemaError(errors)

        return cls(
            source_column=index,
            column_label=raw.column.strip(),
            target_property=raw.property.strip(),
            declared_type=declared_type,
            is_active=raw.active,
            is_required=raw.required,
        )

    def to_raw(self) -> RawColumnMapping:
        return RawColumnMapping(
            column=self.column_label,
            property=self.target_property,
            type=self.declared_type.value,
            active=self.is_active,
            required=self.is_required,
        )
