"""Internationalization (i18n) support using gettext."""

import gettext as gettext_module
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DOMAIN = "settingsform"
LOCALE_DIR = Path(__file__).parent / "locales"

_translation: gettext_module.NullTranslations | None = None
_ui_language = "en"


def initialize(ui_language: str = "en") -> None:
    """Select the language used for form labels and admin notices.

    Args:
        ui_language: Language code, e.g. "en" or "de"
    """
    global _translation, _ui_language

    _ui_language = ui_language
    _translation = None

    logger.info(f"Translation initialized: UI={ui_language}")


def _get_translation() -> gettext_module.NullTranslations:
    global _translation
    if _translation is None:
        _translation = _load_translation(_ui_language)
    return _translation


def gettext(message: str) -> str:
    """Translate a UI message.

    Args:
        message: Message to translate

    Returns:
        Translated message, or the message itself when no catalog matches
    """
    return _get_translation().gettext(message)


def _load_translation(language: str | None) -> gettext_module.NullTranslations:
    if not language:
        return gettext_module.NullTranslations()

    translation = gettext_module.translation(
        domain=DOMAIN,
        localedir=str(LOCALE_DIR),
        languages=[language],
        fallback=True,
    )
    logger.debug(f"Loaded translation for language: {language}")
    return translation
