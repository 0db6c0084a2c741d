"""Shared Jinja2 environment for form markup."""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .i18n import gettext as _

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )
    env.globals["_"] = _
    return env


def render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)
