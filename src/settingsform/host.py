"""Host settings API: the collaborators the framework registers with.

The framework only talks to the protocols defined here. ``AdminSettings``
is the in-process implementation used by the bundled Flask host, the CLI and
the tests; an embedding application may supply its own.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

from itsdangerous import BadData, URLSafeTimedSerializer

from .consts import (
    ACTION_FIELD,
    NONCE_FIELD,
    NONCE_MAX_AGE,
    OPTION_PAGE_FIELD,
    TEMPLATE_EDITOR,
    TEMPLATE_HIDDEN_FIELDS,
    TEMPLATE_NOTICES,
    TEMPLATE_SECTIONS,
)
from .enums import NoticeType
from .errors import NonceError
from .i18n import gettext as _
from .stores import OptionStore
from .templating import render

logger = logging.getLogger(__name__)

IntroCallback = Callable[[dict[str, Any]], str]
RenderCallback = Callable[[dict[str, Any]], str]
Sanitizer = Callable[[Any], Any]

_FORM_KEY = re.compile(r"^(?P<name>[^\[\]]+)\[(?P<key>[^\[\]]+)\]$")


class RegistrationAPI(Protocol):
    def add_settings_section(
        self, section_id: str, title: str, callback: IntroCallback, page: str
    ) -> None: ...

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        callback: RenderCallback,
        page: str,
        section: str,
        args: Optional[dict[str, Any]] = None,
    ) -> None: ...

    def do_settings_sections(self, page: str) -> str: ...


class PersistenceAPI(Protocol):
    def register_setting(
        self, option_group: str, option_name: str, sanitize_callback: Sanitizer
    ) -> None: ...

    def get_option(self, name: str, default: Any = None) -> Any: ...

    def update_option(self, name: str, value: Any) -> None: ...

    def delete_option(self, name: str) -> bool: ...

    def settings_fields(self, option_group: str) -> str: ...


class NoticeAPI(Protocol):
    def settings_errors(self) -> str: ...


class EditorWidget(Protocol):
    def __call__(self, value: Any, element_id: str, textarea_name: str) -> str: ...


class NonceIssuer(Protocol):
    def create(self, action: str) -> str: ...

    def verify(self, action: str, token: str) -> bool: ...


class SignedNonceIssuer:
    """Time-limited nonces signed with the application's secret key."""

    def __init__(self, secret_key: str, max_age: int = NONCE_MAX_AGE) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key, salt="settingsform-nonce")
        self._max_age = max_age

    def create(self, action: str) -> str:
        return self._serializer.dumps(action)

    def verify(self, action: str, token: str) -> bool:
        if not token:
            return False
        try:
            return self._serializer.loads(token, max_age=self._max_age) == action
        except BadData:
            return False


class TextareaEditor:
    """Fallback rich-text widget: a plain, larger textarea."""

    def __init__(self, rows: int = 10) -> None:
        self.rows = rows

    def __call__(self, value: Any, element_id: str, textarea_name: str) -> str:
        return render(
            TEMPLATE_EDITOR,
            element_id=element_id,
            name=textarea_name,
            value="" if value is None else value,
            rows=self.rows,
        )


@dataclass
class RegisteredSection:
    id: str
    title: str
    callback: Optional[IntroCallback]


@dataclass
class RegisteredField:
    id: str
    title: str
    callback: RenderCallback
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class Notice:
    setting: str
    code: str
    message: str
    type: NoticeType = NoticeType.ERROR


def nonce_action(option_group: str) -> str:
    return f"{option_group}-options"


def parse_form(items: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Fold submitted ``name[key]`` pairs into nested dicts.

    Later values for the same key win, so a hidden ``0`` placed before a
    checkbox is overridden when the box is ticked.
    """
    data: dict[str, Any] = {}
    for name, value in items:
        match = _FORM_KEY.match(name)
        if match is None:
            data[name] = value
            continue
        group = data.get(match["name"])
        if not isinstance(group, dict):
            group = data[match["name"]] = {}
        group[match["key"]] = value
    return data


class AdminSettings:
    """In-process settings API: registration, option storage and notices.

    Args:
        store: Where option values are persisted
        nonces: Issues and checks the form nonces
        notices: Returns the list notices are collected in; a host serving
            concurrent requests passes one that is scoped to the request
    """

    def __init__(
        self,
        store: OptionStore,
        nonces: NonceIssuer,
        notices: Optional[Callable[[], list[Notice]]] = None,
    ) -> None:
        self._store = store
        self._nonces = nonces
        self._sections: dict[str, dict[str, RegisteredSection]] = {}
        self._fields: dict[str, dict[str, dict[str, RegisteredField]]] = {}
        self._settings: dict[str, dict[str, Optional[Sanitizer]]] = {}
        self._notice_list = notices
        self._local_notices: list[Notice] = []

    # ---------- registration ----------

    def add_settings_section(
        self,
        section_id: str,
        title: str,
        callback: Optional[IntroCallback],
        page: str,
    ) -> None:
        self._sections.setdefault(page, {})[section_id] = RegisteredSection(
            id=section_id, title=title, callback=callback
        )

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        callback: RenderCallback,
        page: str,
        section: str = "default",
        args: Optional[dict[str, Any]] = None,
    ) -> None:
        self._fields.setdefault(page, {}).setdefault(section, {})[field_id] = (
            RegisteredField(id=field_id, title=title, callback=callback, args=args or {})
        )

    def sections(self, page: str) -> list[RegisteredSection]:
        return list(self._sections.get(page, {}).values())

    def fields(self, page: str, section: str) -> list[RegisteredField]:
        return list(self._fields.get(page, {}).get(section, {}).values())

    def do_settings_sections(self, page: str) -> str:
        rendered = []
        for section in self.sections(page):
            intro = ""
            if section.callback is not None:
                intro = section.callback({"id": section.id, "title": section.title}) or ""
            rows = [
                {"id": f.id, "title": f.title, "html": f.callback(f.args) or ""}
                for f in self.fields(page, section.id)
            ]
            rendered.append(
                {"id": section.id, "title": section.title, "intro": intro, "rows": rows}
            )
        return render(TEMPLATE_SECTIONS, sections=rendered)

    # ---------- persistence ----------

    def register_setting(
        self,
        option_group: str,
        option_name: str,
        sanitize_callback: Optional[Sanitizer] = None,
    ) -> None:
        self._settings.setdefault(option_group, {})[option_name] = sanitize_callback
        logger.debug(f"Registered setting {option_name} in group {option_group}")

    def registered_groups(self) -> list[str]:
        return list(self._settings)

    def sanitize_option(self, option_name: str, value: Any) -> Any:
        for settings in self._settings.values():
            sanitizer = settings.get(option_name)
            if sanitizer is not None:
                return sanitizer(value)
        return value

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._store.get(name, default)

    def update_option(self, name: str, value: Any) -> None:
        self._store.set(name, value)

    def delete_option(self, name: str) -> bool:
        return self._store.delete(name)

    def settings_fields(self, option_group: str) -> str:
        return render(
            TEMPLATE_HIDDEN_FIELDS,
            fields=[
                (OPTION_PAGE_FIELD, option_group),
                (ACTION_FIELD, "update"),
                (NONCE_FIELD, self._nonces.create(nonce_action(option_group))),
            ],
        )

    def process_submission(self, form: Mapping[str, Any]) -> str:
        """Validate and persist a submitted settings form.

        Args:
            form: Submitted data already folded by :func:`parse_form`

        Returns:
            The option group that was saved

        Raises:
            NonceError: If the option group is unknown or the nonce is invalid
        """
        option_group = form.get(OPTION_PAGE_FIELD) or ""
        if option_group not in self._settings:
            raise NonceError(f"Unknown option page: {option_group!r}")

        if not self._nonces.verify(nonce_action(option_group), form.get(NONCE_FIELD, "")):
            raise NonceError(f"Invalid nonce for option page: {option_group}")

        for option_name in self._settings[option_group]:
            value = form.get(option_name)
            if not isinstance(value, dict):
                value = {}
            self.update_option(option_name, self.sanitize_option(option_name, value))

        logger.info(f"Settings saved for option group: {option_group}")
        self.add_settings_error(
            "general", "settings_updated", _("Settings saved."), NoticeType.UPDATED
        )
        return option_group

    # ---------- notices ----------

    def _notices(self) -> list[Notice]:
        if self._notice_list is None:
            return self._local_notices
        return self._notice_list()

    def add_settings_error(
        self,
        setting: str,
        code: str,
        message: str,
        type: NoticeType | str = NoticeType.ERROR,
    ) -> None:
        self._notices().append(
            Notice(setting=setting, code=code, message=message, type=NoticeType(type))
        )

    def get_settings_errors(self, clear: bool = False) -> list[Notice]:
        pending = self._notices()
        notices = list(pending)
        if clear:
            pending.clear()
        return notices

    def settings_errors(self) -> str:
        notices = self.get_settings_errors(clear=True)
        if not notices:
            return ""
        return render(TEMPLATE_NOTICES, notices=notices)
