"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Field types the renderer knows how to draw"""

    TEXT = "text"
    PASSWORD = "password"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    CHECKBOXES = "checkboxes"
    COLOR = "color"
    FILE = "file"
    EDITOR = "editor"
    CUSTOM = "custom"

    @classmethod
    def lookup(cls, value: str) -> "FieldType | None":
        try:
            return cls(value)
        except ValueError:
            return None


class NoticeType(str, Enum):
    UPDATED = "updated"
    ERROR = "error"
