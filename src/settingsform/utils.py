"""Utility functions for settingsform"""

import json
import logging
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .consts import SOURCE_SUFFIXES
from .errors import SchemaError

logger = logging.getLogger(__name__)

FALSY_FORM_VALUES = ("", "0")


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_checked(value: Any) -> bool:
    """Tell whether a stored form value should render as checked.

    Submitted forms carry strings, so ``"0"`` and ``""`` count as unchecked
    alongside the usual Python falsy values.
    """
    if isinstance(value, str):
        return value not in FALSY_FORM_VALUES
    return bool(value)


def same_choice(choice_key: Any, value: Any) -> bool:
    """Compare a choice key with a stored value the way submitted data compares."""
    if value is None or isinstance(value, (list, tuple, dict)):
        return False
    if isinstance(value, bool):
        value = int(value)
    return str(choice_key) == str(value)


def read_source(path: Path | str) -> Any:
    """Read a raw settings document from a TOML or JSON file.

    Args:
        path: Path to a ``.toml`` or ``.json`` file

    Returns:
        The decoded document as plain Python data

    Raises:
        SchemaError: If the file is missing, has an unsupported suffix or
            cannot be decoded
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SOURCE_SUFFIXES:
        raise SchemaError(f"Unsupported settings file type: {path.suffix}")
    if not path.is_file():
        raise SchemaError(f"Settings file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read settings file {path}: {e}") from e

    try:
        if suffix == ".toml":
            return tomlkit.loads(content).unwrap()
        return json.loads(content)
    except (TOMLKitError, ValueError) as e:
        raise SchemaError(f"Invalid settings file {path}: {e}") from e
