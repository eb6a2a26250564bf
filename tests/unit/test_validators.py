"""
Unit tests for per-type cell validators.

Includes property-based testing with hypothesis for validators.
"""

import math
from datetime import date, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from sheet2notion.core.validators import (
    CheckboxValidator,
    DateValidator,
    EmailValidator,
    FieldValidationError,
    MultiSelectValidator,
    NumberValidator,
    PhoneNumberValidator,
    RegexValidator,
    RequiredFieldValidator,
    SelectValidator,
    TextValidator,
    UrlValidator,
)

FIELD = "C (Name)"


@pytest.mark.unit
class TestRequiredFieldValidator:
    """Tests for RequiredFieldValidator"""

    @pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
    def test_empty_values_fail(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            RequiredFieldValidator(FIELD).validate(value)

        assert str(exc_info.value) == "[required] C (Name): required field is empty"
        assert exc_info.value.field_name == FIELD

    @pytest.mark.parametrize("value", ["x", 0, False, date(2023, 1, 1)])
    def test_present_values_pass(self, value):
        RequiredFieldValidator(FIELD).validate(value)  # Should not raise

    @given(st.text(min_size=1).filter(lambda s: s.strip() != ""))
    def test_property_any_nonblank_string_passes(self, value):
        """Property test: any non-blank string satisfies required"""
        RequiredFieldValidator(FIELD).validate(value)


@pytest.mark.unit
class TestTextValidator:
    """Tests for title/rich_text validation"""

    def test_string_and_number_pass(self):
        validator = TextValidator(FIELD)
        validator.validate("hello")
        validator.validate(42)
        validator.validate(3.5)

    def test_bool_is_not_text(self):
        with pytest.raises(FieldValidationError, match="must be text or number"):
            TextValidator(FIELD).validate(True)

    def test_too_long(self):
        with pytest.raises(FieldValidationError) as exc_info:
            TextValidator(FIELD, {"rule_type": "title"}).validate("x" * 2001)

        assert exc_info.value.rule_name == "title"
        assert "exceeds maximum length of 2000 characters (got 2001)" in str(exc_info.value)

    def test_exact_limit_passes(self):
        TextValidator(FIELD).validate("x" * 2000)

    @given(st.text(max_size=2000))
    def test_property_strings_within_limit_pass(self, value):
        """Property test: strings up to 2000 chars always pass"""
        TextValidator(FIELD).validate(value)


@pytest.mark.unit
class TestNumberValidator:
    """Tests for number validation"""

    @pytest.mark.parametrize("value", [0, -3, 2.5, "42", " 1e3 ", "-0.5"])
    def test_valid_numbers(self, value):
        NumberValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", ["abc", "12abc", "1_000", True, [1]])
    def test_invalid_numbers(self, value):
        with pytest.raises(FieldValidationError, match="must be a valid number"):
            NumberValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", [float("inf"), "-Infinity", "inf"])
    def test_infinite_numbers_have_distinct_message(self, value):
        with pytest.raises(FieldValidationError, match="must be a finite number"):
            NumberValidator(FIELD).validate(value)

    def test_message_quotes_offending_literal(self):
        with pytest.raises(FieldValidationError) as exc_info:
            NumberValidator("E (Amount)").validate("abc")

        assert str(exc_info.value) == "[number] E (Amount): must be a valid number, got 'abc'"

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_property_finite_floats_pass(self, value):
        """Property test: every finite float is a valid number"""
        NumberValidator(FIELD).validate(value)

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_property_finite_float_strings_pass(self, value):
        """Property test: the text form of a finite float is a valid number"""
        NumberValidator(FIELD).validate(repr(value))


@pytest.mark.unit
class TestDateValidator:
    """Tests for date validation"""

    @pytest.mark.parametrize("value", [
        date(2023, 1, 1),
        datetime(2023, 1, 1, 12, 30),
        "2023-01-01",
        "2023-01-01T10:00:00Z",
        "2023/01/31",
        "01/31/2023",
        "Jan 31, 2023",
        44927,
        1,
        2958465,
    ])
    def test_valid_dates(self, value):
        DateValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", ["not a date", "2023-13-45", "31/31/2023"])
    def test_invalid_date_strings(self, value):
        with pytest.raises(FieldValidationError, match="contains invalid date value"):
            DateValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", [0, -5, 2958466, 1e12])
    def test_serial_out_of_range(self, value):
        with pytest.raises(FieldValidationError, match="date serial out of range"):
            DateValidator(FIELD).validate(value)

    def test_bool_is_not_a_date(self):
        with pytest.raises(FieldValidationError, match="must be a valid date"):
            DateValidator(FIELD).validate(True)

    @given(st.integers(min_value=1, max_value=2958465))
    def test_property_serials_in_range_pass(self, serial):
        """Property test: every serial in range is a valid date"""
        DateValidator(FIELD).validate(serial)


@pytest.mark.unit
class TestCheckboxValidator:
    """Tests for checkbox validation"""

    @pytest.mark.parametrize("value", [
        True, False, 0, 1, "true", "FALSE", "Yes", "no", "1", "0", "ON", "off",
    ])
    def test_accepted_values(self, value):
        CheckboxValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", [2, "maybe", "y", 0.5, date(2023, 1, 1)])
    def test_rejected_values(self, value):
        with pytest.raises(FieldValidationError, match="must be a boolean value"):
            CheckboxValidator(FIELD).validate(value)


@pytest.mark.unit
class TestSelectValidators:
    """Tests for select and multi_select validation"""

    def test_select_accepts_text_and_numbers(self):
        SelectValidator(FIELD).validate("Open")
        SelectValidator(FIELD).validate(3)

    def test_select_too_long(self):
        with pytest.raises(FieldValidationError, match="exceeds maximum length of 100"):
            SelectValidator(FIELD).validate("x" * 101)

    def test_select_rejects_bool(self):
        with pytest.raises(FieldValidationError, match="must be text for select option"):
            SelectValidator(FIELD).validate(False)

    def test_multi_select_needs_one_option(self):
        MultiSelectValidator(FIELD).validate("a, b")
        with pytest.raises(FieldValidationError, match="contains no options"):
            MultiSelectValidator(FIELD).validate(" , ,")


@pytest.mark.unit
class TestRegexValidators:
    """Tests for URL, email and generic regex validation"""

    @pytest.mark.parametrize("value", ["https://example.com", "http://a.b/c?d=1"])
    def test_valid_urls(self, value):
        UrlValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", ["ftp://example.com", "example.com", "https://"])
    def test_invalid_urls(self, value):
        with pytest.raises(FieldValidationError, match="must be a valid HTTP/HTTPS URL"):
            UrlValidator(FIELD).validate(value)

    def test_url_too_long(self):
        with pytest.raises(FieldValidationError, match="exceeds maximum length of 2000"):
            UrlValidator(FIELD).validate("https://example.com/" + "a" * 2000)

    def test_url_must_be_string(self):
        with pytest.raises(FieldValidationError, match="string"):
            UrlValidator(FIELD).validate(42)

    @pytest.mark.parametrize("value", ["a@b.co", "first.last+tag@example.org"])
    def test_valid_emails(self, value):
        EmailValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", ["a@b", "no-at.example.com", "a b@c.de"])
    def test_invalid_emails(self, value):
        with pytest.raises(FieldValidationError) as exc_info:
            EmailValidator(FIELD).validate(value)

        assert exc_info.value.rule_name == "email"

    def test_email_too_long(self):
        with pytest.raises(FieldValidationError, match="exceeds maximum length of 320"):
            EmailValidator(FIELD).validate("a" * 320 + "@example.com")

    def test_regex_validator_requires_pattern(self):
        with pytest.raises(ValueError, match="requires 'pattern'"):
            RegexValidator(FIELD)

    def test_regex_validator_rejects_bad_pattern(self):
        with pytest.raises(ValueError, match="Invalid regex pattern"):
            RegexValidator(FIELD, {"pattern": "[unclosed"})


@pytest.mark.unit
class TestPhoneNumberValidator:
    """Tests for phone number validation"""

    @pytest.mark.parametrize("value", [
        "+1 (555) 123-4567",
        "090-1234-5678",
        "5551234567",
        5551234567,
    ])
    def test_valid_phone_numbers(self, value):
        PhoneNumberValidator(FIELD).validate(value)

    @pytest.mark.parametrize("value", ["555-CALL-NOW", "12+34567890", "phone: 5551234567"])
    def test_invalid_format(self, value):
        with pytest.raises(FieldValidationError, match="valid phone number format"):
            PhoneNumberValidator(FIELD).validate(value)

    def test_too_few_digits(self):
        with pytest.raises(FieldValidationError, match=r"at least 10 digits \(found 7\)"):
            PhoneNumberValidator(FIELD).validate("555-1234")

    @given(st.text(alphabet="0123456789", min_size=10, max_size=20))
    def test_property_ten_or_more_digits_pass(self, digits):
        """Property test: a run of 10+ digits is always a valid phone number"""
        PhoneNumberValidator(FIELD).validate(digits)


@pytest.mark.unit
def test_nan_is_not_a_valid_number_literal():
    with pytest.raises(FieldValidationError, match="must be a valid number"):
        NumberValidator(FIELD).validate(math.nan)
