"""
CheckboxValidator - validates checkbox cells.
"""

from typing import Any

from sheet2notion.utils.values import parse_checkbox

from .base_validator import BaseValidator


class CheckboxValidator(BaseValidator):
    """
    Accepts booleans, numeric 0/1, and the case-insensitive strings
    true/false/yes/no/1/0/on/off.
    """

    def validate(self, value: Any) -> None:
        try:
            parse_checkbox(value)
        except ValueError:
            raise self.fail(f"must be a boolean value, got {self.literal(value)}", value)

    @property
    def rule_type(self) -> str:
        return "checkbox"
