"""Field markup generation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional

from markupsafe import Markup

from .consts import (
    HOOK_AFTER_FIELD,
    HOOK_BEFORE_FIELD,
    HOOK_FIELD_DEFAULTS,
    OPTION_NAME_SUFFIX,
    TEMPLATE_FIELD,
)
from .enums import FieldType
from .hooks import HookBus
from .host import EditorWidget, TextareaEditor
from .options import element_id
from .schema import FIELD_DEFAULTS, FieldSchema, SectionSchema, apply_defaults
from .templating import render
from .utils import is_checked, same_choice

logger = logging.getLogger(__name__)


class FieldRenderer:
    """Render one field's control from its schema and the stored values.

    Args:
        option_group: Namespace the values are stored under
        hooks: Hook bus for the defaults filter and before/after field actions
        editor: Rich-text widget used for ``editor`` fields
    """

    def __init__(
        self,
        option_group: str,
        hooks: Optional[HookBus] = None,
        editor: Optional[EditorWidget] = None,
    ) -> None:
        self.option_group = option_group
        self.hooks = hooks or HookBus()
        self.editor = editor or TextareaEditor()
        self._dispatch: dict[FieldType, Callable[..., str]] = {
            FieldType.TEXT: self._render_input,
            FieldType.PASSWORD: self._render_input,
            FieldType.TEXTAREA: self._render_simple,
            FieldType.SELECT: self._render_choice,
            FieldType.RADIO: self._render_choice,
            FieldType.CHECKBOX: self._render_checkbox,
            FieldType.CHECKBOXES: self._render_checkboxes,
            FieldType.COLOR: self._render_simple,
            FieldType.FILE: self._render_simple,
            FieldType.EDITOR: self._render_editor,
            FieldType.CUSTOM: self._render_custom,
        }

    def input_name(self, el_id: str) -> str:
        return f"{self.option_group}{OPTION_NAME_SUFFIX}[{el_id}]"

    def render(
        self,
        section: SectionSchema,
        field: FieldSchema,
        stored_values: Optional[Mapping[str, Any]] = None,
    ) -> str:
        defaults = FIELD_DEFAULTS
        if self.hooks.has_filter(HOOK_FIELD_DEFAULTS):
            defaults = self.hooks.apply_filters(HOOK_FIELD_DEFAULTS, dict(FIELD_DEFAULTS))
        field = apply_defaults(field, defaults)
        stored_values = stored_values or {}

        el_id = element_id(self.option_group, section.section_id, field.id)
        value = stored_values.get(el_id)
        if value is None:
            value = field.default

        output = [
            self.hooks.do_action(HOOK_BEFORE_FIELD, section, field),
            self.hooks.do_action(f"{HOOK_BEFORE_FIELD}_{el_id}", section, field),
        ]

        field_type = FieldType.lookup(field.type)
        if field_type is None:
            logger.debug(f"No renderer for field type '{field.type}' ({el_id})")
        else:
            output.append(
                self._dispatch[field_type](field_type, field, el_id, value, stored_values)
            )

        output.append(self.hooks.do_action(HOOK_AFTER_FIELD, section, field))
        output.append(self.hooks.do_action(f"{HOOK_AFTER_FIELD}_{el_id}", section, field))
        return "".join(output)

    def _template(self, field_type: FieldType, **context) -> str:
        return render(TEMPLATE_FIELD.format(type=field_type.value), **context)

    def _context(self, field: FieldSchema, el_id: str, value: Any) -> dict[str, Any]:
        return {
            "field": field,
            "element_id": el_id,
            "name": self.input_name(el_id),
            "value": "" if value is None else value,
        }

    def _render_input(self, field_type, field, el_id, value, stored_values) -> str:
        return render(
            TEMPLATE_FIELD.format(type=FieldType.TEXT.value),
            input_type=field_type.value,
            **self._context(field, el_id, value),
        )

    def _render_simple(self, field_type, field, el_id, value, stored_values) -> str:
        return self._template(field_type, **self._context(field, el_id, value))

    def _render_choice(self, field_type, field, el_id, value, stored_values) -> str:
        choices = [
            {
                "key": key,
                "label": label,
                "selected": same_choice(key, value),
            }
            for key, label in field.choices.items()
        ]
        return self._template(
            field_type, choices=choices, **self._context(field, el_id, value)
        )

    def _render_checkbox(self, field_type, field, el_id, value, stored_values) -> str:
        return self._template(
            field_type, checked=is_checked(value), **self._context(field, el_id, value)
        )

    def _render_checkboxes(self, field_type, field, el_id, value, stored_values) -> str:
        defaults = field.default if isinstance(field.default, (list, tuple)) else ()
        default_keys = {str(item) for item in defaults}

        choices = []
        for key, label in field.choices.items():
            sub_id = f"{el_id}_{key}"
            if stored_values.get(sub_id) is not None:
                current = stored_values[sub_id]
            elif key in default_keys:
                current = key
            else:
                current = ""
            choices.append(
                {
                    "key": key,
                    "label": label,
                    "element_id": sub_id,
                    "name": self.input_name(sub_id),
                    "checked": same_choice(key, current),
                }
            )

        return self._template(field_type, field=field, choices=choices)

    def _render_editor(self, field_type, field, el_id, value, stored_values) -> str:
        widget = self.editor("" if value is None else value, el_id, self.input_name(el_id))
        return self._template(field_type, field=field, widget=Markup(widget))

    def _render_custom(self, field_type, field, el_id, value, stored_values) -> str:
        # Trusted host markup: emitted as-is.
        return self._template(field_type, markup=field.default)
