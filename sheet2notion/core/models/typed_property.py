"""
TypedProperty: discriminated union of normalized Notion property values.

Each variant holds already-normalized data and renders itself to the
Notion API wire format via to_notion().
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


def _text_items(content: str) -> list[dict[str, Any]]:
    if not content:
        return []
    return [{"type": "text", "text": {"content": content}}]


class _PropertyBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_notion(self) -> dict[str, Any]:
        raise NotImplementedError


class TitleProperty(_PropertyBase):
    type: Literal["title"] = "title"
    content: str = ""

    def to_notion(self) -> dict[str, Any]:
        return {"type": "title", "title": _text_items(self.content)}


class RichTextProperty(_PropertyBase):
    type: Literal["rich_text"] = "rich_text"
    content: str = ""

    def to_notion(self) -> dict[str, Any]:
        return {"type": "rich_text", "rich_text": _text_items(self.content)}


class NumberProperty(_PropertyBase):
    type: Literal["number"] = "number"
    number: int | float | None = None

    def to_notion(self) -> dict[str, Any]:
        return {"type": "number", "number": self.number}


class SelectProperty(_PropertyBase):
    type: Literal["select"] = "select"
    name: str | None = None

    def to_notion(self) -> dict[str, Any]:
        return {"type": "select", "select": {"name": self.name} if self.name else None}


class MultiSelectProperty(_PropertyBase):
    type: Literal["multi_select"] = "multi_select"
    options: tuple[str, ...] = ()

    def to_notion(self) -> dict[str, Any]:
        return {
            "type": "multi_select",
            "multi_select": [{"name": option} for option in self.options],
        }


class DateProperty(_PropertyBase):
    """Date variant; start is an ISO-8601 YYYY-MM-DD string."""

    type: Literal["date"] = "date"
    start: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")

    def to_notion(self) -> dict[str, Any]:
        return {"type": "date", "date": {"start": self.start} if self.start else None}


class CheckboxProperty(_PropertyBase):
    type: Literal["checkbox"] = "checkbox"
    checked: bool = False

    def to_notion(self) -> dict[str, Any]:
        return {"type": "checkbox", "checkbox": self.checked}


class UrlProperty(_PropertyBase):
    type: Literal["url"] = "url"
    url: str | None = None

    def to_notion(self) -> dict[str, Any]:
        return {"type": "url", "url": self.url}


class EmailProperty(_PropertyBase):
    type: Literal["email"] = "email"
    email: str | None = None

    def to_notion(self) -> dict[str, Any]:
        return {"type": "email", "email": self.email}


class PhoneNumberProperty(_PropertyBase):
    type: Literal["phone_number"] = "phone_number"
    phone_number: str | None = None

    def to_notion(self) -> dict[str, Any]:
        return {"type": "phone_number", "phone_number": self.phone_number}


TypedProperty = Annotated[
    Union[
        TitleProperty,
        RichTextProperty,
        NumberProperty,
        SelectProperty,
        MultiSelectProperty,
        DateProperty,
        CheckboxProperty,
        UrlProperty,
        EmailProperty,
        PhoneNumberProperty,
    ],
    Field(discriminator="type"),
]


class PagePayload(BaseModel):
    """Properties for one Notion page, keyed by property name in mapping order."""

    properties: dict[str, TypedProperty] = Field(default_factory=dict)

    def to_notion(self) -> dict[str, Any]:
        return {name: prop.to_notion() for name, prop in self.properties.items()}

    def has_title(self) -> bool:
        return any(prop.type == "title" for prop in self.properties.values())
