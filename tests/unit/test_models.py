"""
Unit tests for core data models.
"""

from collections import deque

import pytest
from pydantic import ValidationError as PydanticValidationError

from sheet2notion.constants import HISTORY_CAPACITY
from sheet2notion.core.models import (
    CheckboxProperty,
    ColumnMapping,
    DateProperty,
    MultiSelectProperty,
    NumberProperty,
    PagePayload,
    ProcessingStatus,
    PropertyType,
    RawColumnMapping,
    RichTextProperty,
    SelectProperty,
    SyncResult,
    TitleProperty,
    ValidationResult,
    column_ref_to_index,
    parse_flag,
)
from sheet2notion.errors import ErrorKind, SchemaError


@pytest.mark.unit
class TestPropertyType:
    """Tests for PropertyType parsing"""

    @pytest.mark.parametrize("name,expected", [
        ("title", PropertyType.TITLE),
        ("rich_text", PropertyType.RICH_TEXT),
        ("RichText", PropertyType.RICH_TEXT),
        ("PhoneNumber", PropertyType.PHONE_NUMBER),
        ("multi_select", PropertyType.MULTI_SELECT),
        ("  number ", PropertyType.NUMBER),
    ])
    def test_parse_accepts_wire_and_camel_names(self, name, expected):
        assert PropertyType.parse(name) is expected

    def test_parse_rejects_unknown_type(self):
        with pytest.raises(ValueError, match="Unsupported property type"):
            PropertyType.parse("relation")

    def test_wire_values(self):
        assert [t.value for t in PropertyType] == [
            "title", "rich_text", "number", "select", "multi_select",
            "date", "checkbox", "url", "email", "phone_number",
        ]


@pytest.mark.unit
class TestColumnRefToIndex:
    """Tests for column reference resolution"""

    @pytest.mark.parametrize("ref,expected", [
        ("A", 0),
        ("C", 2),
        ("Z", 25),
        ("AA", 26),
        ("AZ", 51),
        ("ba", 52),
        ("2", 2),
        (" 7 ", 7),
        (4, 4),
    ])
    def test_resolves_letters_and_numbers(self, ref, expected):
        assert column_ref_to_index(ref) == expected

    @pytest.mark.parametrize("ref", ["", "A1", "-1", "Ä", -3, True])
    def test_rejects_invalid_references(self, ref):
        with pytest.raises(ValueError):
            column_ref_to_index(ref)


@pytest.mark.unit
class TestColumnMapping:
    """Tests for RawColumnMapping and ColumnMapping"""

    @pytest.mark.parametrize("flag,expected", [
        ("yes", True), ("Y", True), ("true", True), ("1", True), (True, True),
        ("no", False), ("", False), (None, False), ("maybe", False),
    ])
    def test_parse_flag(self, flag, expected):
        assert parse_flag(flag) is expected

    def test_raw_mapping_coerces_strings_and_flags(self):
        raw = RawColumnMapping(column=3, property="Name", type="title", required="yes", active="no")
        assert raw.column == "3"
        assert raw.required is True
        assert raw.active is False

    def test_from_raw_builds_typed_mapping(self):
        mapping = ColumnMapping.from_raw(
            {"column": "C", "property": " Name ", "type": "Title", "required": "yes"}
        )
        assert mapping.source_column == 2
        assert mapping.column_label == "C"
        assert mapping.target_property == "Name"
        assert mapping.declared_type is PropertyType.TITLE
        assert mapping.is_required is True
        assert mapping.is_active is True
        assert mapping.field_name == "C (Name)"

    def test_from_raw_collects_all_problems(self):
        with pytest.raises(SchemaError) as exc_info:
            ColumnMapping.from_raw({"column": "C3", "property": "", "type": "relation"})

        assert len(exc_info.value.errors) == 3
        assert exc_info.value.kind is ErrorKind.SCHEMA

    def test_to_raw_round_trips_flags(self):
        mapping = ColumnMapping.from_raw(
            {"column": "D", "property": "Notes", "type": "rich_text", "active": False}
        )
        raw = mapping.to_raw()
        assert raw.column == "D"
        assert raw.type == "rich_text"
        assert raw.active is False

    def test_mapping_is_frozen(self):
        mapping = ColumnMapping.from_raw({"column": "C", "property": "Name", "type": "title"})
        with pytest.raises(PydanticValidationError):
            mapping.target_property = "Other"


@pytest.mark.unit
class TestValidationResult:
    """Tests for ValidationResult model"""

    def test_from_errors(self):
        assert ValidationResult.from_errors([]).valid is True
        result = ValidationResult.from_errors(["bad"])
        assert result.valid is False
        assert result.errors == ["bad"]

    def test_valid_with_errors_is_rejected(self):
        with pytest.raises(PydanticValidationError, match="valid=True but errors is not empty"):
            ValidationResult(valid=True, errors=["oops"])


@pytest.mark.unit
class TestTypedProperty:
    """Tests for wire rendering of property variants"""

    def test_title_renders_text_items(self):
        assert TitleProperty(content="Task A").to_notion() == {
            "type": "title",
            "title": [{"type": "text", "text": {"content": "Task A"}}],
        }

    def test_empty_text_renders_empty_list(self):
        assert RichTextProperty().to_notion() == {"type": "rich_text", "rich_text": []}

    def test_empty_variants_render_null(self):
        assert NumberProperty().to_notion() == {"type": "number", "number": None}
        assert SelectProperty().to_notion() == {"type": "select", "select": None}
        assert DateProperty().to_notion() == {"type": "date", "date": None}
        assert CheckboxProperty().to_notion() == {"type": "checkbox", "checkbox": False}

    def test_multi_select_preserves_order(self):
        prop = MultiSelectProperty(options=("b", "a"))
        assert prop.to_notion()["multi_select"] == [{"name": "b"}, {"name": "a"}]

    def test_date_requires_iso_day(self):
        with pytest.raises(PydanticValidationError):
            DateProperty(start="01/02/2023")

    def test_payload_parses_discriminated_union(self):
        payload = PagePayload.model_validate({
            "properties": {
                "Name": {"type": "title", "content": "Task A"},
                "Amount": {"type": "number", "number": 42},
            }
        })
        assert isinstance(payload.properties["Name"], TitleProperty)
        assert isinstance(payload.properties["Amount"], NumberProperty)
        assert payload.has_title()
        assert payload.to_notion()["Amount"] == {"type": "number", "number": 42}


@pytest.mark.unit
class TestProcessingStatus:
    """Tests for run state and history ring buffer"""

    def test_history_is_bounded(self):
        status = ProcessingStatus()
        for i in range(HISTORY_CAPACITY + 5):
            status.record(f"event {i}", {"i": i})

        assert len(status.history) == HISTORY_CAPACITY
        assert status.history[0].message == "event 5"
        assert status.history[-1].context == {"i": HISTORY_CAPACITY + 4}

    def test_snapshot_is_independent(self):
        status = ProcessingStatus()
        status.record("first")
        snapshot = status.snapshot()
        status.record("second")

        assert isinstance(snapshot.history, deque)
        assert [e.message for e in snapshot.history] == ["first"]

    def test_sync_result_success(self):
        assert SyncResult(outcome="succeeded", row_id=1).success is True
        assert SyncResult(outcome="rejected", row_id=1).success is False
