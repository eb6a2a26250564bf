"""
Property converter: cell value + declared type -> TypedProperty.

convert() is pure and deterministic. build_payload() applies it across the
active mappings of a row and assembles the page payload.
"""

import math
from typing import Any, Callable, Sequence

from sheet2notion.constants import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_MULTI_SELECT_OPTIONS,
    MAX_PHONE_LENGTH,
    MAX_SELECT_LENGTH,
    MAX_TEXT_LENGTH,
    MAX_URL_LENGTH,
    PHONE_PATTERN,
    URL_PATTERN,
)
from sheet2notion.core.models import (
    CheckboxProperty,
    ColumnMapping,
    DateProperty,
    EmailProperty,
    MultiSelectProperty,
    NumberProperty,
    PagePayload,
    PhoneNumberProperty,
    PropertyType,
    RichTextProperty,
    SelectProperty,
    TitleProperty,
    TypedProperty,
    UrlProperty,
)
from sheet2notion.core.schema import NOT_FOUND, SchemaRegistry
from sheet2notion.errors import ConversionError
from sheet2notion.observability.logger import get_logger
from sheet2notion.utils.values import (
    is_empty,
    normalize_number,
    parse_checkbox,
    parse_number,
    render_text,
    to_date,
    truncate_for_log,
)

logger = get_logger(__name__)

EMPTY_PROPERTIES: dict[PropertyType, Callable[[], TypedProperty]] = {
    PropertyType.TITLE: TitleProperty,
    PropertyType.RICH_TEXT: RichTextProperty,
    PropertyType.NUMBER: NumberProperty,
    PropertyType.SELECT: SelectProperty,
    PropertyType.MULTI_SELECT: MultiSelectProperty,
    PropertyType.DATE: DateProperty,
    PropertyType.CHECKBOX: CheckboxProperty,
    PropertyType.URL: UrlProperty,
    PropertyType.EMAIL: EmailProperty,
    PropertyType.PHONE_NUMBER: PhoneNumberProperty,
}


def split_options(value: Any) -> list[str]:
    """Split a comma-separated cell into trimmed, non-blank, capped option names."""
    options = [token.strip() for token in render_text(value).split(",")]
    options = [option[:MAX_SELECT_LENGTH] for option in options if option]
    return options[:MAX_MULTI_SELECT_OPTIONS]


class PropertyConverter:
    """
    Converts cell values into typed Notion properties.

    Each declared type has one conversion method; empty values always
    produce the type's empty variant.
    """

    def __init__(self):
        self._converters: dict[PropertyType, Callable[[Any], TypedProperty]] = {
            PropertyType.TITLE: self._to_title,
            PropertyType.RICH_TEXT: self._to_rich_text,
            PropertyType.NUMBER: self._to_number,
            PropertyType.SELECT: self._to_select,
            PropertyType.MULTI_SELECT: self._to_multi_select,
            PropertyType.DATE: self._to_date,
            PropertyType.CHECKBOX: self._to_checkbox,
            PropertyType.URL: self._to_url,
            PropertyType.EMAIL: self._to_email,
            PropertyType.PHONE_NUMBER: self._to_phone_number,
        }

    def convert(self, value: Any, property_type: PropertyType | str) -> TypedProperty:
        """
        Convert one cell value.

        Args:
            value: Raw cell value
            property_type: Declared type (enum member or type name)

        Returns:
            Typed property holding normalized data

        Raises:
            ConversionError: If the value cannot be coerced to the type
        """
        if not isinstance(property_type, PropertyType):
            try:
                property_type = PropertyType.parse(property_type)
            except ValueError as e:
                raise ConversionError(str(property_type), value, str(e))

        if is_empty(value):
            return EMPTY_PROPERTIES[property_type]()
        return self._converters[property_type](value)

    def build_payload(self, row: Sequence[Any], mappings: Sequence[ColumnMapping]) -> PagePayload:
        """
        Convert the active mappings of a row into a page payload.

        Empty optional fields are omitted. A conversion failure on a required
        field raises; on an optional field it is logged and the field omitted.

        Raises:
            ConversionError: On a required-field failure, or when the payload
                ends up without a title property
        """
        properties: dict[str, TypedProperty] = {}

        for mapping in mappings:
            if not mapping.is_active:
                continue

            index = SchemaRegistry.resolve_column(mapping.source_column, len(row))
            value = row[index] if index != NOT_FOUND else None

            if not mapping.is_required and is_empty(value):
                logger.debug(
                    "Skipping empty optional field",
                    extra={"property": mapping.target_property},
                )
                continue

            try:
                properties[mapping.target_property] = self.convert(value, mapping.declared_type)
            except ConversionError as e:
                logger.warning(
                    f"Failed to convert field '{mapping.field_name}'",
                    extra={
                        "property": mapping.target_property,
                        "property_type": mapping.declared_type.value,
                        "value": truncate_for_log(render_text(value)),
                        "reason": e.reason,
                    },
                )
                if mapping.is_required:
                    raise

        payload = PagePayload(properties=properties)
        if not payload.has_title():
            raise ConversionError(
                PropertyType.TITLE.value, None, "no title property in mapped data"
            )
        return payload

    # --- per-type conversions (value is never empty here) ---

    def _to_title(self, value: Any) -> TitleProperty:
        return TitleProperty(content=render_text(value).strip()[:MAX_TEXT_LENGTH])

    def _to_rich_text(self, value: Any) -> RichTextProperty:
        return RichTextProperty(content=render_text(value).strip()[:MAX_TEXT_LENGTH])

    def _to_number(self, value: Any) -> NumberProperty:
        number = parse_number(value)
        if math.isnan(number):
            raise ConversionError(PropertyType.NUMBER.value, value, "not a valid number")
        if math.isinf(number):
            raise ConversionError(PropertyType.NUMBER.value, value, "not a finite number")
        return NumberProperty(number=normalize_number(number))

    def _to_select(self, value: Any) -> SelectProperty:
        name = render_text(value).strip()
        if len(name) > MAX_SELECT_LENGTH:
            raise ConversionError(
                PropertyType.SELECT.value,
                value,
                f"option exceeds {MAX_SELECT_LENGTH} characters",
            )
        return SelectProperty(name=name)

    def _to_multi_select(self, value: Any) -> MultiSelectProperty:
        return MultiSelectProperty(options=tuple(split_options(value)))

    def _to_date(self, value: Any) -> DateProperty:
        try:
            parsed = to_date(value)
        except ValueError as e:
            raise ConversionError(PropertyType.DATE.value, value, str(e))
        return DateProperty(start=parsed.isoformat())

    def _to_checkbox(self, value: Any) -> CheckboxProperty:
        try:
            return CheckboxProperty(checked=parse_checkbox(value))
        except ValueError as e:
            raise ConversionError(PropertyType.CHECKBOX.value, value, str(e))

    def _to_url(self, value: Any) -> UrlProperty:
        url = render_text(value).strip()
        if not URL_PATTERN.match(url):
            raise ConversionError(PropertyType.URL.value, value, "must start with http:// or https://")
        return UrlProperty(url=url[:MAX_URL_LENGTH])

    def _to_email(self, value: Any) -> EmailProperty:
        email = render_text(value).strip()
        if not EMAIL_PATTERN.match(email):
            raise ConversionError(PropertyType.EMAIL.value, value, "not a valid email address")
        return EmailProperty(email=email[:MAX_EMAIL_LENGTH])

    def _to_phone_number(self, value: Any) -> PhoneNumberProperty:
        phone = render_text(value).strip()
        if not PHONE_PATTERN.match(phone):
            raise ConversionError(
                PropertyType.PHONE_NUMBER.value, value, "not a valid phone number format"
            )
        return PhoneNumberProperty(phone_number=phone[:MAX_PHONE_LENGTH])
