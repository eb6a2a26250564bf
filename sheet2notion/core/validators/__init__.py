"""
Per-type cell validators.

Provides validators for required fields, text, numbers, dates, checkboxes,
select options, URLs, emails and phone numbers.
"""

from .base_validator import BaseValidator, FieldValidationError
from .checkbox_validator import CheckboxValidator
from .date_validator import DateValidator
from .number_validator import NumberValidator
from .phone_validator import PhoneNumberValidator
from .regex_validator import EmailValidator, RegexValidator, UrlValidator
from .required_field_validator import RequiredFieldValidator
from .select_validator import MultiSelectValidator, SelectValidator
from .text_validator import TextValidator

__all__ = [
    "BaseValidator",
    "FieldValidationError",
    "RequiredFieldValidator",
    "TextValidator",
    "NumberValidator",
    "DateValidator",
    "CheckboxValidator",
    "SelectValidator",
    "MultiSelectValidator",
    "RegexValidator",
    "UrlValidator",
    "EmailValidator",
    "PhoneNumberValidator",
]
