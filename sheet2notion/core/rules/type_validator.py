"""
Row type validation.

TypeValidator dispatches each active mapping's cell to the per-type
validator registered for its declared property type and collects every
failure in mapping order.
"""

from typing import Any, Sequence

from sheet2notion.core.models import ColumnMapping, PropertyType, ValidationResult
from sheet2notion.core.schema import NOT_FOUND, SchemaRegistry
from sheet2notion.core.validators import (
    BaseValidator,
    CheckboxValidator,
    DateValidator,
    EmailValidator,
    FieldValidationError,
    MultiSelectValidator,
    NumberValidator,
    PhoneNumberValidator,
    RequiredFieldValidator,
    SelectValidator,
    TextValidator,
    UrlValidator,
)
from sheet2notion.observability.logger import get_logger
from sheet2notion.observability.metrics import record_validation_failure
from sheet2notion.utils.values import is_empty

logger = get_logger(__name__)


def _mapping_sequence_error(mappings: Any) -> str | None:
    if isinstance(mappings, (str, bytes)) or not isinstance(mappings, Sequence):
        return f"Column mappings must be a sequence, got {type(mappings).__name__}"
    invalid = [
        idx for idx, mapping in enumerate(mappings, start=1)
        if not isinstance(mapping, ColumnMapping)
    ]
    if invalid:
        positions = ", ".join(str(idx) for idx in invalid)
        return f"Column mappings must be ColumnMapping entries (invalid at {positions})"
    return None


class TypeValidator:
    """
    Validates one row against the declared types of the mapping list.

    Only the mapping list is consulted; structural mapping problems are the
    SchemaRegistry's concern.
    """

    VALIDATOR_REGISTRY: dict[PropertyType, tuple[type[BaseValidator], dict[str, Any]]] = {
        PropertyType.TITLE: (TextValidator, {"rule_type": "title"}),
        PropertyType.RICH_TEXT: (TextValidator, {"rule_type": "rich_text"}),
        PropertyType.NUMBER: (NumberValidator, {}),
        PropertyType.SELECT: (SelectValidator, {}),
        PropertyType.MULTI_SELECT: (MultiSelectValidator, {}),
        PropertyType.DATE: (DateValidator, {}),
        PropertyType.CHECKBOX: (CheckboxValidator, {}),
        PropertyType.URL: (UrlValidator, {}),
        PropertyType.EMAIL: (EmailValidator, {}),
        PropertyType.PHONE_NUMBER: (PhoneNumberValidator, {}),
    }

    def build_validator(self, mapping: ColumnMapping) -> BaseValidator:
        validator_class, parameters = self.VALIDATOR_REGISTRY[mapping.declared_type]
        return validator_class(mapping.field_name, dict(parameters))

    def validate_row(self, row: Any, mappings: Sequence[ColumnMapping]) -> ValidationResult:
        """
        Validate a row.

        Args:
            row: Ordered cell values
            mappings: Column mappings; inactive ones are ignored

        Returns:
            ValidationResult with every field error in mapping order
        """
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence):
            return ValidationResult(
                valid=False,
                errors=[f"Row data must be a sequence of cells, got {type(row).__name__}"],
            )

        mapping_error = _mapping_sequence_error(mappings)
        if mapping_error is not None:
            return ValidationResult(valid=False, errors=[mapping_error])

        active = [m for m in mappings if m.is_active]
        if not active:
            return ValidationResult(valid=False, errors=["No active column mappings"])

        errors: list[str] = []
        for mapping in active:
            error = self._validate_field(row, mapping)
            if error is not None:
                record_validation_failure(mapping.declared_type.value)
                errors.append(error)

        if errors:
            logger.info(
                "Row validation failed",
                extra={"error_count": len(errors), "checked_fields": len(active)},
            )
        return ValidationResult.from_errors(errors)

    def _validate_field(self, row: Sequence[Any], mapping: ColumnMapping) -> str | None:
        index = SchemaRegistry.resolve_column(mapping.source_column, len(row))
        if index == NOT_FOUND:
            return (
                f"[column] {mapping.field_name}: "
                f"{SchemaRegistry.describe_missing_column(mapping.column_label, len(row))}"
            )

        value = row[index]
        if is_empty(value):
            if not mapping.is_required:
                return None
            try:
                RequiredFieldValidator(mapping.field_name).validate(value)
            except FieldValidationError as e:
                return str(e)

        try:
            self.build_validator(mapping).validate(value)
        except FieldValidationError as e:
            return str(e)
        return None

    def check_compatibility(
        self, row: Sequence[Any], mappings: Sequence[ColumnMapping]
    ) -> dict[str, Any]:
        """
        Lightweight pre-flight check: can each active cell be converted?

        Returns:
            {"compatible": bool, "issues": list[str]}
        """
        mapping_error = _mapping_sequence_error(mappings)
        if mapping_error is not None:
            return {"compatible": False, "issues": [mapping_error]}

        issues: list[str] = []
        for mapping in mappings:
            if not mapping.is_active:
                continue
            index = SchemaRegistry.resolve_column(mapping.source_column, len(row))
            if index == NOT_FOUND:
                issues.append(f"Column '{mapping.column_label}' not found")
                continue

            value = row[index]
            if is_empty(value):
                if mapping.is_required:
                    issues.append(f"Required field '{mapping.target_property}' is empty")
                continue

            try:
                self.build_validator(mapping).validate(value)
            except FieldValidationError:
                issues.append(
                    f"Value '{value}' cannot be converted to {mapping.declared_type.value}"
                )

        return {"compatible": not issues, "issues": issues}
