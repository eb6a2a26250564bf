"""
NumberValidator - validates number cells.
"""

import math
from typing import Any

from sheet2notion.utils.values import parse_number

from .base_validator import BaseValidator


class NumberValidator(BaseValidator):
    """
    Accepts numeric cells and numeric strings that parse to a finite value.

    NaN (including unparseable text) and +/-Infinity are reported with
    distinct messages.
    """

    def validate(self, value: Any) -> None:
        number = parse_number(value)
        if math.isnan(number):
            raise self.fail(f"must be a valid number, got {self.literal(value)}", value)
        if math.isinf(number):
            raise self.fail(f"must be a finite number, got {self.literal(value)}", value)

    @property
    def rule_type(self) -> str:
        return "number"
