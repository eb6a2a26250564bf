"""
PhoneNumberValidator - validates phone number cells.
"""

from typing import Any

from sheet2notion.constants import MIN_PHONE_DIGITS, PHONE_PATTERN
from sheet2notion.utils.values import count_digits, is_number, render_text

from .base_validator import BaseValidator


class PhoneNumberValidator(BaseValidator):
    """
    Digits, spaces, '+', '-' and parentheses, with at least 10 digits once
    separators are stripped. No country-code awareness.
    """

    def validate(self, value: Any) -> None:
        if not isinstance(value, str) and not is_number(value):
            raise self.fail(
                f"must be a valid phone number, got {type(value).__name__} {self.literal(value)}",
                value,
            )

        text = render_text(value).strip()
        if not PHONE_PATTERN.match(text):
            raise self.fail(
                f"must be a valid phone number format, got {self.literal(value)}", value
            )

        digits = count_digits(text)
        if digits < MIN_PHONE_DIGITS:
            raise self.fail(
                f"must contain at least {MIN_PHONE_DIGITS} digits (found {digits}), "
                f"got {self.literal(value)}",
                value,
            )

    @property
    def rule_type(self) -> str:
        return "phone_number"
