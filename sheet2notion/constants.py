"""
Shared constants for the sheet-to-Notion sync.

Limits mirror the Notion API's documented property constraints.
"""

import re

# Row layout (zero-based slots)
CHECKBOX_SLOT = 0
PRIMARY_KEY_SLOT = 1
DATA_START_SLOT = 2

# Notion API
NOTION_API_VERSION = "2022-06-28"
NOTION_BASE_URL = "https://api.notion.com/v1"
REQUEST_TIMEOUT_SECONDS = 30.0

# 3 requests/second ceiling -> 1000ms / 3, rounded up
RATE_LIMIT_INTERVAL_SECONDS = 0.334

MAX_RETRIES = 3
RETRY_DELAYS_SECONDS = (1.0, 2.0, 4.0)

# Property limits
MAX_TEXT_LENGTH = 2000
MAX_SELECT_LENGTH = 100
MAX_MULTI_SELECT_OPTIONS = 100
MAX_URL_LENGTH = 2000
MAX_EMAIL_LENGTH = 320
MAX_PHONE_LENGTH = 50
MIN_PHONE_DIGITS = 10
MAX_PROPERTY_NAME_LENGTH = 100

RESERVED_PROPERTY_NAMES = frozenset({
    "id",
    "created_time",
    "last_edited_time",
    "created_by",
    "last_edited_by",
})

# Spreadsheet date serials: 1 = 1899-12-31, 2958465 = 9999-12-31
MIN_DATE_SERIAL = 1
MAX_DATE_SERIAL = 2_958_465
# Days between the 1899-12-30 spreadsheet epoch and 1970-01-01
SERIAL_EPOCH_OFFSET_DAYS = 25569

CHECKBOX_TRUE_VALUES = frozenset({"true", "yes", "1", "on"})
CHECKBOX_FALSE_VALUES = frozenset({"false", "no", "0", "off"})

HISTORY_CAPACITY = 100
CONFIG_CACHE_SECONDS = 5 * 60

# Regular expression patterns
URL_PATTERN = re.compile(r"^https?://.+")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[\d\s\-()]+$")
DATABASE_ID_PATTERN = re.compile(
    r"^[a-f0-9]{8}-?[a-f0-9]{4}-?[a-f0-9]{4}-?[a-f0-9]{4}-?[a-f0-9]{12}$",
    re.IGNORECASE,
)
API_TOKEN_PATTERN = re.compile(r"^(secret_[a-zA-Z0-9]{43}|ntn_[a-zA-Z0-9]+)$")

SENSITIVE_FIELDS = ("api_token", "token", "password", "key", "authorization")
