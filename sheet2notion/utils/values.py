"""
Cell value helpers shared by validation and conversion.

Spreadsheet cells arrive as str, int, float, bool, date/datetime, or None.
These helpers give every caller the same notion of "empty", the same
string rendering, and the same number/date/checkbox parsing.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from sheet2notion.constants import (
    CHECKBOX_FALSE_VALUES,
    CHECKBOX_TRUE_VALUES,
    MAX_DATE_SERIAL,
    MIN_DATE_SERIAL,
    SERIAL_EPOCH_OFFSET_DAYS,
)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Formats tried after ISO-8601 parsing fails
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def is_number(value: Any) -> bool:
    """True for int/float cells; bool is deliberately excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_empty(value: Any) -> bool:
    """None, blank/whitespace strings, and NaN floats count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def render_text(value: Any) -> str:
    """Render a cell as text; integral floats drop their trailing '.0'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def parse_number(value: Any) -> float:
    """
    Parse a cell as a float.

    Returns NaN for values that do not parse, including digit-grouping
    underscores ("1_000"). Infinity literals parse to +/-inf so callers can
    report them separately.
    """
    if isinstance(value, bool):
        return math.nan
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        if "_" in value:
            return math.nan
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def normalize_number(number: float) -> int | float:
    """Integral floats become ints so the wire payload reads 42, not 42.0."""
    if number.is_integer():
        return int(number)
    return number


def serial_to_date(serial: float) -> date:
    """
    Convert a spreadsheet date serial to a UTC calendar date.

    Uses timestamp_ms = (serial - 25569) * 86400 * 1000.

    Raises:
        ValueError: If the serial is outside 1..2958465
    """
    if not math.isfinite(serial) or serial < MIN_DATE_SERIAL or serial > MAX_DATE_SERIAL:
        raise ValueError(
            f"date serial {serial} is outside {MIN_DATE_SERIAL}..{MAX_DATE_SERIAL}"
        )
    timestamp_ms = (serial - SERIAL_EPOCH_OFFSET_DAYS) * 86400 * 1000
    return (_UNIX_EPOCH + timedelta(milliseconds=timestamp_ms)).date()


def parse_date_string(text: str) -> date:
    """
    Parse an ISO-like or common regional date string.

    Timezone-aware timestamps are converted to UTC before taking the date.

    Raises:
        ValueError: If no supported format matches
    """
    candidate = text.strip()
    iso_candidate = candidate[:-1] + "+00:00" if candidate.endswith("Z") else candidate
    try:
        parsed = datetime.fromisoformat(iso_candidate)
        return _to_utc_date(parsed)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized date format '{text}'")


def _to_utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).date()
    return value.date()


def to_date(value: Any) -> date:
    """
    Coerce a date-like cell (date, datetime, string, or serial number) to a date.

    Raises:
        ValueError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return _to_utc_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date_string(value)
    if is_number(value):
        return serial_to_date(float(value))
    raise ValueError(f"expected a date, string, or serial number, got {type(value).__name__}")


def parse_checkbox(value: Any) -> bool:
    """
    Coerce a checkbox cell to bool.

    Accepts bool, numeric 0/1, and case-insensitive true/false/yes/no/1/0/on/off.

    Raises:
        ValueError: For anything else
    """
    if isinstance(value, bool):
        return value
    if is_number(value):
        if value == 1:
            return True
        if value == 0:
            return False
        raise ValueError(f"numeric checkbox must be 0 or 1, got {render_text(value)}")
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in CHECKBOX_TRUE_VALUES:
            return True
        if lowered in CHECKBOX_FALSE_VALUES:
            return False
    raise ValueError(f"'{value}' is not a recognized boolean")


def count_digits(text: str) -> int:
    return sum(1 for char in text if char.isdigit())


def truncate_for_log(value: Any, limit: int = 100) -> Any:
    """Shorten long strings before logging them."""
    if isinstance(value, str) and len(value) > limit:
        return value[:limit] + "..."
    return value
