"""
Base validator interface for per-type cell rules.

Each validator checks one non-empty cell value against one declared property
type and raises FieldValidationError on failure.
"""

from abc import ABC, abstractmethod
from typing import Any

from sheet2notion.utils.values import render_text


class FieldValidationError(Exception):
    """Raised when a cell value violates a validation rule."""

    def __init__(self, rule_name: str, field_name: str, message: str, value: Any = None):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        self.value = value
        super().__init__(f"[{rule_name}] {field_name}: {message}")


class BaseValidator(ABC):
    """
    Abstract base class for all cell validators.

    Validators never see empty values; the row validator handles
    required/optional emptiness before dispatching.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Field label used in messages, e.g. "C (Name)"
            parameters: Rule-specific parameters (e.g., max_length)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: Any) -> None:
        """
        Validate a non-empty cell value.

        Raises:
            FieldValidationError: If validation fails
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def fail(self, message: str, value: Any = None) -> FieldValidationError:
        return FieldValidationError(self.rule_type, self.field_name, message, value)

    @staticmethod
    def literal(value: Any) -> str:
        """Quote the offending value for error messages."""
        return f"'{render_text(value)}'"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
