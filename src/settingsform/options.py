"""Read and delete stored settings for an option group."""

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .consts import OPTION_NAME_SUFFIX

if TYPE_CHECKING:
    from .host import PersistenceAPI

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+", re.IGNORECASE)


def option_group_from_source(name: str | Path) -> str:
    """Derive an option group id from a settings source file name.

    Examples:
        >>> option_group_from_source("config/my-plugin.settings.toml")
        'mypluginsettings'
    """
    return _NON_ALNUM.sub("", Path(name).stem)


def option_name(option_group: str) -> str:
    return f"{option_group}{OPTION_NAME_SUFFIX}"


def element_id(option_group: str, section_id: str, field_id: str) -> str:
    return f"{option_group}_{section_id}_{field_id}"


def get_settings(api: "PersistenceAPI", option_group: str) -> dict[str, Any]:
    """Fetch the whole stored value map of an option group, or ``{}``."""
    options = api.get_option(option_name(option_group))
    if not isinstance(options, dict):
        return {}
    return options


def get_setting(
    api: "PersistenceAPI", option_group: str, section_id: str, field_id: str
) -> Any:
    """Fetch one stored setting, ``False`` when it was never saved."""
    options = get_settings(api, option_group)
    return options.get(element_id(option_group, section_id, field_id), False)


def delete_settings(api: "PersistenceAPI", option_group: str) -> None:
    api.delete_option(option_name(option_group))
    logger.info(f"Deleted stored settings for option group: {option_group}")
