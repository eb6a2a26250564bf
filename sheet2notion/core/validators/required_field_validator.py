"""
RequiredFieldValidator - ensures a required cell is not empty.
"""

from typing import Any

from sheet2notion.utils.values import is_empty

from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Fails if the value is None, a blank string, or NaN.

    Unlike the type validators this one is called on empty values.
    """

    def validate(self, value: Any) -> None:
        if is_empty(value):
            raise self.fail("required field is empty", value)

    @property
    def rule_type(self) -> str:
        return "required"
