"""
SelectValidator and MultiSelectValidator - validate option cells.
"""

from typing import Any

from sheet2notion.constants import MAX_SELECT_LENGTH
from sheet2notion.utils.values import is_number, render_text

from .base_validator import BaseValidator


class SelectValidator(BaseValidator):
    """
    A select option must be a non-empty string or number of at most 100 characters.
    """

    def validate(self, value: Any) -> None:
        if not isinstance(value, str) and not is_number(value):
            raise self.fail(
                f"must be text for select option, got {type(value).__name__} {self.literal(value)}",
                value,
            )

        option = render_text(value).strip()
        if not option:
            raise self.fail("select option cannot be empty", value)
        if len(option) > MAX_SELECT_LENGTH:
            raise self.fail(
                f"select option exceeds maximum length of {MAX_SELECT_LENGTH} characters, "
                f"got {self.literal(option)}",
                value,
            )

    @property
    def rule_type(self) -> str:
        return "select"


class MultiSelectValidator(BaseValidator):
    """
    A comma-separated option list must contain at least one non-blank option.

    Option count and per-option length are enforced by truncation during
    conversion, not here.
    """

    def validate(self, value: Any) -> None:
        if not isinstance(value, str) and not is_number(value):
            raise self.fail(
                f"must be comma-separated text, got {type(value).__name__} {self.literal(value)}",
                value,
            )

        options = [token.strip() for token in render_text(value).split(",")]
        if not any(options):
            raise self.fail(f"contains no options, got {self.literal(value)}", value)

    @property
    def rule_type(self) -> str:
        return "multi_select"
