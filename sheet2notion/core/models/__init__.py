"""
Core data models for the sheet-to-Notion sync.

All models use Pydantic for runtime validation and type safety.
"""

from .column_mapping import (
    ColumnMapping,
    PropertyType,
    RawColumnMapping,
    column_ref_to_index,
    parse_flag,
)
from .processing_status import HistoryEntry, ProcessingStatus, SyncResult
from .typed_property import (
    CheckboxProperty,
    DateProperty,
    EmailProperty,
    MultiSelectProperty,
    NumberProperty,
    PagePayload,
    PhoneNumberProperty,
    RichTextProperty,
    SelectProperty,
    TitleProperty,
    TypedProperty,
    UrlProperty,
)
from .validation_result import ValidationResult

__all__ = [
    "PropertyType",
    "RawColumnMapping",
    "ColumnMapping",
    "column_ref_to_index",
    "parse_flag",
    "ValidationResult",
    "TypedProperty",
    "TitleProperty",
    "RichTextProperty",
    "NumberProperty",
    "SelectProperty",
    "MultiSelectProperty",
    "DateProperty",
    "CheckboxProperty",
    "UrlProperty",
    "EmailProperty",
    "PhoneNumberProperty",
    "PagePayload",
    "HistoryEntry",
    "ProcessingStatus",
    "SyncResult",
]
