from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .enums import FieldType

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

FIELD_DEFAULTS: dict[str, Any] = {
    "id": "default_field",
    "title": "Default Field",
    "description": "",
    "default": "",
    "type": FieldType.TEXT.value,
    "placeholder": "",
    "choices": {},
    "css_class": "",
}


def _check_identifier(v: str, what: str) -> str:
    if v and not IDENTIFIER_PATTERN.match(v):
        raise ValueError(
            f"Invalid {what} '{v}': only letters, digits, '_' and '-' are allowed"
        )
    return v


class SchemaModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FieldSchema(SchemaModel):
    id: str = ""
    title: Optional[str] = None
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "desc")
    )
    default: Any = Field(default="", validation_alias=AliasChoices("default", "std"))
    type: str = FieldType.TEXT.value
    placeholder: str = ""
    choices: dict[str, str] = {}
    css_class: str = Field(
        default="", validation_alias=AliasChoices("css_class", "class")
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if v is None:
            return ""
        return _check_identifier(str(v), "field id")

    @field_validator("choices", mode="before")
    @classmethod
    def coerce_choices(cls, v):
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            return {str(item): str(item) for item in v}
        if isinstance(v, dict):
            return {str(key): str(label) for key, label in v.items()}
        return v


class SectionSchema(SchemaModel):
    section_id: str = Field(
        default="", validation_alias=AliasChoices("section_id", "id")
    )
    title: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("title", "section_title")
    )
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "section_description"),
    )
    order: float = Field(
        default=0, validation_alias=AliasChoices("order", "section_order")
    )
    fields: list[FieldSchema] = []

    @field_validator("section_id", mode="before")
    @classmethod
    def coerce_section_id(cls, v):
        if v is None:
            return ""
        return _check_identifier(str(v), "section id")

    @field_validator("fields", mode="before")
    @classmethod
    def coerce_fields(cls, v):
        return [] if v is None else v


class TabSchema(SchemaModel):
    id: str
    title: str


class SettingsDocument(SchemaModel):
    sections: list[SectionSchema] = []
    tabs: list[TabSchema] = []

    def to_source(self) -> dict[str, Any]:
        """Dump the document back into the canonical ``{sections, tabs}`` shape.

        Only attributes the source set are dumped, so defaults stay unset and
        keep following the ``field_defaults`` filter when loaded again.
        """
        return self.model_dump(mode="python", exclude_unset=True)


def apply_defaults(
    field: FieldSchema, defaults: dict[str, Any] | None = None
) -> FieldSchema:
    """Overlay the attributes set on ``field`` onto a default record.

    Attributes the field never set take their value from ``defaults``
    (``FIELD_DEFAULTS`` when omitted). The input field is left untouched.
    """
    record = dict(FIELD_DEFAULTS if defaults is None else defaults)
    record.update(field.model_dump(include=field.model_fields_set))
    return FieldSchema.model_validate(record)
