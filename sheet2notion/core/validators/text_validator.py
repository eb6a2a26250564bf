"""
TextValidator - validates title and rich_text cells.
"""

from typing import Any

from sheet2notion.constants import MAX_TEXT_LENGTH
from sheet2notion.utils.values import is_number, render_text

from .base_validator import BaseValidator


class TextValidator(BaseValidator):
    """
    Accepts strings and numbers whose rendered text fits the Notion limit.

    Parameters:
    - max_length: Maximum rendered length (default 2000)
    - rule_type: "title" or "rich_text" (default "rich_text")
    """

    def validate(self, value: Any) -> None:
        if not isinstance(value, str) and not is_number(value):
            raise self.fail(
                f"must be text or number, got {type(value).__name__} {self.literal(value)}",
                value,
            )

        max_length = self.parameters.get("max_length", MAX_TEXT_LENGTH)
        text = render_text(value)
        if len(text) > max_length:
            raise self.fail(
                f"exceeds maximum length of {max_length} characters "
                f"(got {len(text)}): {self.literal(text[:50] + '...')}",
                value,
            )

    @property
    def rule_type(self) -> str:
        return self.parameters.get("rule_type", "rich_text")
