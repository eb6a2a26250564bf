"""
Schema registry for column mappings.

Holds the ordered column -> property mapping list and validates the
structural invariants every sync relies on.
"""

from collections import Counter
from typing import Any, Sequence

from sheet2notion.constants import MAX_PROPERTY_NAME_LENGTH, RESERVED_PROPERTY_NAMES
from sheet2notion.core.models import (
    ColumnMapping,
    PropertyType,
    RawColumnMapping,
    ValidationResult,
    column_ref_to_index,
)
from sheet2notion.errors import SchemaError
from sheet2notion.observability.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND = -1

MappingInput = RawColumnMapping | ColumnMapping | dict[str, Any]


def _as_raw(mapping: MappingInput) -> RawColumnMapping:
    if isinstance(mapping, ColumnMapping):
        return mapping.to_raw()
    if isinstance(mapping, RawColumnMapping):
        return mapping
    return RawColumnMapping(**mapping)


def _find_duplicates(items: list[str]) -> list[str]:
    counts = Counter(items)
    seen = []
    for item in items:
        if counts[item] > 1 and item not in seen:
            seen.append(item)
    return seen


class SchemaRegistry:
    """
    Registry for the active column mapping list.

    validate() collects every structural problem; load() validates and keeps
    the typed mappings for the validation and conversion core.
    """

    def __init__(self, mappings: Sequence[MappingInput] | None = None):
        """
        Initialize schema registry.

        Args:
            mappings: Optional mapping list to load immediately
        """
        self._mappings: list[ColumnMapping] = []
        if mappings is not None:
            self.load(mappings)

    @property
    def mappings(self) -> list[ColumnMapping]:
        return list(self._mappings)

    def active_mappings(self) -> list[ColumnMapping]:
        return [m for m in self._mappings if m.is_active]

    def load(self, mappings: Sequence[MappingInput]) -> list[ColumnMapping]:
        """
        Validate and store a mapping list.

        Returns:
            Typed mappings in configured order

        Raises:
            SchemaError: If validation reports any problem
        """
        result = self.validate(mappings)
        if not result.valid:
            logger.warning(
                "Column mapping validation failed",
                extra={"error_count": len(result.errors)},
            )
            raise SchemaError(result.errors)

        self._mappings = [ColumnMapping.from_raw(_as_raw(m)) for m in mappings]
        logger.debug(
            "Column mappings loaded",
            extra={
                "total_mappings": len(self._mappings),
                "active_mappings": len(self.active_mappings()),
            },
        )
        return self.mappings

    def validate(self, mappings: Any) -> ValidationResult:
        """
        Validate a mapping list.

        Per-entry problems are prefixed with "Mapping N:". List-wide checks
        (duplicate columns, duplicate properties, title cardinality) run over
        the active subset. No check short-circuits another.

        Args:
            mappings: Sequence of raw dicts, RawColumnMapping, or ColumnMapping

        Returns:
            ValidationResult with every problem found
        """
        if isinstance(mappings, (str, bytes)) or not isinstance(mappings, Sequence) or not mappings:
            return ValidationResult(valid=False, errors=["Column mappings are required"])

        errors: list[str] = []
        active_columns: list[tuple[int, str]] = []
        active_properties: list[str] = []
        title_count = 0

        for position, mapping in enumerate(mappings, start=1):
            try:
                raw = _as_raw(mapping)
            except (TypeError, ValueError) as e:
                errors.append(f"Mapping {position}: malformed entry ({e})")
                continue

            entry_errors, index, declared_type = self._validate_entry(raw)
            errors.extend(f"Mapping {position}: {error}" for error in entry_errors)

            if not raw.active:
                continue
            if index is not None:
                active_columns.append((index, raw.column.strip()))
            if raw.property.strip():
                active_properties.append(raw.property.strip())
            if declared_type is PropertyType.TITLE:
                title_count += 1

        duplicate_indexes = _find_duplicates([str(index) for index, _ in active_columns])
        if duplicate_indexes:
            labels = []
            for dup in duplicate_indexes:
                refs = [label for index, label in active_columns if str(index) == dup]
                labels.append(f"{' = '.join(refs)} (index {dup})")
            errors.append(f"Duplicate spreadsheet columns: {', '.join(labels)}")

        duplicate_properties = _find_duplicates(active_properties)
        if duplicate_properties:
            errors.append(f"Duplicate Notion properties: {', '.join(duplicate_properties)}")

        if title_count == 0:
            errors.append("At least one title property mapping is required")
        elif title_count > 1:
            errors.append(
                f"Only one title property mapping is allowed (found {title_count})"
            )

        return ValidationResult.from_errors(errors)

    def _validate_entry(
        self, raw: RawColumnMapping
    ) -> tuple[list[str], int | None, PropertyType | None]:
        errors: list[str] = []
        index = None
        declared_type = None

        column = raw.column.strip()
        if not column:
            errors.append("Spreadsheet column is required")
        else:
            try:
                index = column_ref_to_index(column)
            except ValueError:
                errors.append(f"Invalid column reference '{column}'")

        name = raw.property.strip()
        if not name:
            errors.append("Notion property name is required")
        else:
            if len(name) > MAX_PROPERTY_NAME_LENGTH:
                errors.append(
                    f"Notion property name exceeds maximum length of "
                    f"{MAX_PROPERTY_NAME_LENGTH} characters"
                )
            if name.lower() in RESERVED_PROPERTY_NAMES:
                errors.append(f"'{name}' is a reserved property name")

        type_name = raw.type.strip()
        if not type_name:
            errors.append("Data type is required")
        else:
            try:
                declared_type = PropertyType.parse(type_name)
            except ValueError:
                errors.append(f"Invalid data type '{type_name}'")

        return errors, index, declared_type

    @staticmethod
    def resolve_column(ref: str | int, row_length: int) -> int:
        """
        Resolve a column reference against a row.

        Returns:
            Zero-based index, or NOT_FOUND when the reference is invalid or
            points past the end of the row
        """
        try:
            index = column_ref_to_index(ref)
        except ValueError:
            return NOT_FOUND
        if index >= row_length:
            return NOT_FOUND
        return index

    @staticmethod
    def describe_missing_column(ref: str | int, row_length: int) -> str:
        """Diagnostic for a column that resolve_column could not find."""
        try:
            index = column_ref_to_index(ref)
        except ValueError:
            return f"Column '{ref}' is not a valid column reference"
        return (
            f"Column '{ref}' (resolved index {index}) not found: "
            f"row has {row_length} column{'s' if row_length != 1 else ''}"
        )

    def mapping_stats(self) -> dict[str, Any]:
        """
        Get summary of loaded mappings.

        Returns:
            Dictionary with total, active, required counts and per-type breakdown
        """
        active = self.active_mappings()
        by_type: dict[str, int] = {}
        for mapping in active:
            key = mapping.declared_type.value
            by_type[key] = by_type.get(key, 0) + 1
        return {
            "total": len(self._mappings),
            "active": len(active),
            "required": sum(1 for m in active if m.is_required),
            "by_type": by_type,
        }
