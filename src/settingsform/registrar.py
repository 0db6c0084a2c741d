"""Registration of a settings document with the host settings API."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from .consts import HOOK_VALIDATE, TEMPLATE_SECTION_INTRO
from .hooks import HookBus
from .host import EditorWidget, PersistenceAPI, RegistrationAPI
from .options import get_settings, option_name
from .renderer import FieldRenderer
from .schema import SectionSchema, SettingsDocument
from .templating import render

logger = logging.getLogger(__name__)


class SettingsAPI(RegistrationAPI, PersistenceAPI, Protocol):
    pass


def sort_sections(sections: list[SectionSchema]) -> list[SectionSchema]:
    """Order sections by ``order`` ascending; equal orders keep their input order."""
    return sorted(sections, key=lambda section: section.order)


class Registrar:
    """Walk a settings document and register its sections and fields.

    Sections need a non-empty ``section_id`` and a title, fields a non-empty
    ``id`` and a title; anything else is left out without complaint.
    """

    def __init__(
        self,
        settings_api: SettingsAPI,
        hooks: Optional[HookBus] = None,
        editor: Optional[EditorWidget] = None,
    ) -> None:
        self.settings_api = settings_api
        self.hooks = hooks or HookBus()
        self.editor = editor
        self.option_group = ""
        self.sections: list[SectionSchema] = []
        self.renderer: Optional[FieldRenderer] = None

    def register(self, document: SettingsDocument, option_group: str) -> None:
        self.option_group = option_group
        self.sections = sort_sections(document.sections)
        self.renderer = FieldRenderer(option_group, self.hooks, self.editor)

        self.settings_api.register_setting(
            option_group, option_name(option_group), self.settings_validate
        )

        section_count = field_count = 0
        for section in self.sections:
            if not section.section_id or section.title is None:
                continue

            self.settings_api.add_settings_section(
                section.section_id, section.title, self.section_intro, option_group
            )
            section_count += 1

            for field in section.fields:
                if not field.id or field.title is None:
                    continue

                self.settings_api.add_settings_field(
                    field.id,
                    field.title,
                    self.generate_setting,
                    option_group,
                    section.section_id,
                    {"section": section, "field": field},
                )
                field_count += 1

        logger.info(
            f"Registered option group {option_group}: "
            f"{section_count} sections, {field_count} fields"
        )

    def settings_validate(self, input: Any) -> Any:
        """Pass submitted values through the group's validation filters."""
        return self.hooks.apply_filters(
            HOOK_VALIDATE.format(option_group=self.option_group), input
        )

    def section_intro(self, args: dict[str, Any]) -> str:
        for section in self.sections:
            if section.section_id == args.get("id"):
                if section.description:
                    return render(TEMPLATE_SECTION_INTRO, description=section.description)
                break
        return ""

    def generate_setting(self, args: dict[str, Any]) -> str:
        stored_values = get_settings(self.settings_api, self.option_group)
        return self.renderer.render(args["section"], args["field"], stored_values)
