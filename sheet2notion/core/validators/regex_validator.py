"""
RegexValidator - validates string cells against a pattern and a length cap.

UrlValidator and EmailValidator are preconfigured subclasses.
"""

import re
from re import Pattern
from typing import Any

from sheet2notion.constants import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_URL_LENGTH,
    URL_PATTERN,
)

from .base_validator import BaseValidator


class RegexValidator(BaseValidator):
    """
    Validates that a string cell matches a regular expression.

    Parameters:
    - pattern: Regular expression pattern (string or compiled Pattern)
    - max_length: Optional maximum length
    - description: Noun used in messages (e.g. "URL")
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        pattern = self.parameters.get("pattern")
        if not pattern:
            raise ValueError("RegexValidator requires 'pattern' parameter")

        try:
            if isinstance(pattern, str):
                self.pattern: Pattern = re.compile(pattern)
            elif isinstance(pattern, Pattern):
                self.pattern = pattern
            else:
                raise ValueError(f"Pattern must be string or compiled Pattern, got {type(pattern)}")
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

        self.max_length = self.parameters.get("max_length")
        self.description = self.parameters.get("description", "value")

    def validate(self, value: Any) -> None:
        if not isinstance(value, str):
            raise self.fail(
                f"must be a valid {self.description} string, got {type(value).__name__} "
                f"{self.literal(value)}",
                value,
            )

        if not self.pattern.match(value.strip()):
            raise self.fail(f"must be a valid {self.description}, got {self.literal(value)}", value)

        if self.max_length is not None and len(value) > self.max_length:
            raise self.fail(
                f"{self.description} exceeds maximum length of {self.max_length} characters "
                f"(got {len(value)})",
                value,
            )

    @property
    def rule_type(self) -> str:
        return self.parameters.get("rule_type", "regex")


class UrlValidator(RegexValidator):
    """HTTP/HTTPS URL of at most 2000 characters."""

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(
            field_name,
            {
                "pattern": URL_PATTERN,
                "max_length": MAX_URL_LENGTH,
                "description": "HTTP/HTTPS URL",
                "rule_type": "url",
                **(parameters or {}),
            },
        )


class EmailValidator(RegexValidator):
    """local@domain.tld address of at most 320 characters."""

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(
            field_name,
            {
                "pattern": EMAIL_PATTERN,
                "max_length": MAX_EMAIL_LENGTH,
                "description": "email address",
                "rule_type": "email",
                **(parameters or {}),
            },
        )
