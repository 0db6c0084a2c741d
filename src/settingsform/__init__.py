"""Declarative settings forms: sections of fields rendered as an HTML form."""

from .errors import SchemaError, SettingsFormException
from .framework import SettingsFramework
from .hooks import HookBus
from .loader import load
from .options import (
    delete_settings,
    element_id,
    get_setting,
    get_settings,
    option_group_from_source,
)
from .registrar import Registrar, sort_sections
from .renderer import FieldRenderer
from .schema import FieldSchema, SectionSchema, SettingsDocument, TabSchema

__version__ = "0.1.0"

__all__ = [
    "FieldRenderer",
    "FieldSchema",
    "HookBus",
    "Registrar",
    "SchemaError",
    "SectionSchema",
    "SettingsDocument",
    "SettingsFormException",
    "SettingsFramework",
    "TabSchema",
    "delete_settings",
    "element_id",
    "get_setting",
    "get_settings",
    "load",
    "option_group_from_source",
    "sort_sections",
]
