"""Settings document loading and normalization."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .consts import HOOK_REGISTER_SETTINGS
from .errors import SchemaError
from .hooks import HookBus
from .schema import SettingsDocument
from .utils import read_source

logger = logging.getLogger(__name__)


def normalize(raw: Any) -> dict[str, Any]:
    """Bring either accepted source shape into ``{"sections": ..., "tabs": ...}``.

    A mapping with a ``sections`` key is the tabbed shape; any other value is
    taken to be the legacy bare list of sections.
    """
    if isinstance(raw, Mapping) and "sections" in raw:
        tabs = raw.get("tabs")
        return {
            "sections": raw["sections"],
            "tabs": list(tabs) if tabs else [],
        }

    return {"sections": raw, "tabs": []}


def load(
    source: Any, hooks: HookBus | None = None, option_group: str = ""
) -> SettingsDocument:
    """Build the final settings document from a source and hook extensions.

    Args:
        source: A ``{sections, tabs}`` mapping, a bare list of sections, or a
            path to a ``.toml``/``.json`` file holding either shape
        hooks: Hook bus whose ``register_settings`` filters may append or
            modify sections; each filter is called as
            ``fn(document, option_group)`` and returns the document
        option_group: Group the document is being loaded for

    Returns:
        Validated SettingsDocument

    Raises:
        SchemaError: If the document is not well-formed
    """
    if isinstance(source, (str, Path)):
        logger.debug(f"Reading settings source: {source}")
        source = read_source(source)

    if isinstance(source, SettingsDocument):
        source = source.to_source()

    document = normalize(source if source is not None else [])
    if hooks is not None:
        document = hooks.apply_filters(HOOK_REGISTER_SETTINGS, document, option_group)

    if not isinstance(document, Mapping):
        raise SchemaError("Settings document must be a mapping with 'sections'")

    sections = document.get("sections")
    if not isinstance(sections, (list, tuple)):
        raise SchemaError("Settings sections must be a list")

    try:
        result = SettingsDocument.model_validate(
            {"sections": list(sections), "tabs": document.get("tabs") or []}
        )
    except ValidationError as e:
        error_lines = ["Settings document validation failed:"]
        for error in e.errors():
            loc = " -> ".join(str(item) for item in error["loc"])
            error_lines.append(f"  - {loc}: {error['msg']}")
        raise SchemaError("\n".join(error_lines)) from e

    logger.debug(
        f"Loaded settings document: {len(result.sections)} sections, "
        f"{len(result.tabs)} tabs"
    )
    return result
