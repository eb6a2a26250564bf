"""
DateValidator - validates date cells.
"""

from datetime import date
from typing import Any

from sheet2notion.utils.values import is_number, parse_date_string, serial_to_date

from .base_validator import BaseValidator


class DateValidator(BaseValidator):
    """
    Accepts native date/datetime objects, ISO-like or regional date strings,
    and spreadsheet date serials between 1 and 2958465 (years 1900-9999).
    """

    def validate(self, value: Any) -> None:
        if isinstance(value, date):
            return

        if isinstance(value, str):
            try:
                parse_date_string(value)
            except ValueError:
                raise self.fail(f"contains invalid date value {self.literal(value)}", value)
            return

        if is_number(value):
            try:
                serial_to_date(float(value))
            except ValueError:
                raise self.fail(
                    f"date serial out of range (1-2958465), got {self.literal(value)}", value
                )
            return

        raise self.fail(
            f"must be a valid date, got {type(value).__name__} {self.literal(value)}", value
        )

    @property
    def rule_type(self) -> str:
        return "date"
