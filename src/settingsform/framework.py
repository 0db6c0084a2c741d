"""Settings page built from a declarative settings document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from .consts import (
    DEFAULT_FORM_ACTION,
    HOOK_AFTER_SETTINGS,
    HOOK_AFTER_TAB_LINKS,
    HOOK_BEFORE_SETTINGS,
    HOOK_BEFORE_SETTINGS_FIELDS,
    HOOK_BEFORE_TAB_LINKS,
    TEMPLATE_FORM,
    TEMPLATE_TAB_LINKS,
)
from .errors import SchemaError
from .hooks import HookBus
from .host import EditorWidget, NoticeAPI
from .loader import load
from .options import option_group_from_source
from .registrar import Registrar, SettingsAPI
from .schema import SectionSchema, SettingsDocument, TabSchema
from .templating import render

logger = logging.getLogger(__name__)


class HostSettingsAPI(SettingsAPI, NoticeAPI, Protocol):
    pass


class SettingsFramework:
    """One settings page: load the document, register it, render the form.

    Args:
        source: Settings file path (``.toml``/``.json``) or the raw document
        option_group: Overrides the group derived from the source file name
        settings_api: Host registration, persistence and notice API
        hooks: Hook bus shared with the host and extensions
        editor: Rich-text widget for ``editor`` fields
        form_action: URL the form posts to
    """

    def __init__(
        self,
        source: Any,
        option_group: str = "",
        *,
        settings_api: HostSettingsAPI,
        hooks: Optional[HookBus] = None,
        editor: Optional[EditorWidget] = None,
        form_action: str = DEFAULT_FORM_ACTION,
    ) -> None:
        self.settings_api = settings_api
        self.hooks = hooks or HookBus()
        self.form_action = form_action

        if option_group:
            self.option_group = option_group
        elif isinstance(source, (str, Path)):
            self.option_group = option_group_from_source(source)
        else:
            raise SchemaError("option_group is required when the source is not a file")

        self.sections: list[SectionSchema] = []
        self.tabs: list[TabSchema] = []
        self._registrar = Registrar(settings_api, self.hooks, editor)

        self.construct_settings(source)

    def construct_settings(self, source: Any) -> None:
        document = load(source, self.hooks, self.option_group)
        self.sections = document.sections
        self.tabs = document.tabs

        # Reloading must not stack a second set of tab links.
        self.hooks.remove_action(HOOK_BEFORE_SETTINGS, self._tab_links_action)
        if self.tabs:
            self.hooks.add_action(HOOK_BEFORE_SETTINGS, self._tab_links_action)

        logger.debug(
            f"Constructed settings for {self.option_group}: "
            f"{len(self.sections)} sections, {len(self.tabs)} tabs"
        )

    def get_option_group(self) -> str:
        return self.option_group

    def admin_init(self) -> None:
        """Register the storage slot, sections and fields with the host."""
        self._registrar.register(
            SettingsDocument(sections=self.sections, tabs=self.tabs), self.option_group
        )
        self.sections = self._registrar.sections

    def admin_notices(self) -> str:
        return self.settings_api.settings_errors()

    def settings_validate(self, input: Any) -> Any:
        return self._registrar.settings_validate(input)

    def section_intro(self, args: dict[str, Any]) -> str:
        return self._registrar.section_intro(args)

    def generate_setting(self, args: dict[str, Any]) -> str:
        return self._registrar.generate_setting(args)

    def settings(self) -> str:
        """Render the complete settings form."""
        group = self.option_group
        return render(
            TEMPLATE_FORM,
            form_action=self.form_action,
            before_settings=self.hooks.do_action(HOOK_BEFORE_SETTINGS, group),
            before_settings_fields=self.hooks.do_action(
                HOOK_BEFORE_SETTINGS_FIELDS, group
            ),
            hidden_fields=self.settings_api.settings_fields(group),
            sections=self.settings_api.do_settings_sections(group),
            after_settings=self.hooks.do_action(HOOK_AFTER_SETTINGS, group),
        )

    def tab_links(self) -> str:
        group = self.option_group
        return render(
            TEMPLATE_TAB_LINKS,
            tabs=self.tabs,
            before_tab_links=self.hooks.do_action(HOOK_BEFORE_TAB_LINKS, group),
            after_tab_links=self.hooks.do_action(HOOK_AFTER_TAB_LINKS, group),
        )

    def _tab_links_action(self, option_group: str) -> str:
        # The bus may be shared by several pages; only draw our own tabs.
        if option_group != self.option_group:
            return ""
        return self.tab_links()
