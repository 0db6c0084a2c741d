"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import DATABASE_PATH, DEFAULT_FORM_ACTION
from .errors import ConfigException
from .options import option_group_from_source

logger = logging.getLogger(__name__)


class WebConfig(BaseModel):
    """Web host configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=5000, ge=1, le=65535)
    debug: bool = Field(default=False)
    secret_key: str = Field(default="change-me", min_length=1)


class PageConfig(BaseModel):
    """One settings page backed by a settings document file."""

    source: str
    option_group: str = ""
    title: str = ""

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Page source cannot be empty")
        return v.strip()

    def get_option_group(self) -> str:
        return self.option_group or option_group_from_source(self.source)


class Config(BaseSettings):
    """Application configuration."""

    language: str = Field(default="en")
    database_path: str = Field(default=DATABASE_PATH)
    log_file: str = Field(default="")
    form_action: str = Field(default=DEFAULT_FORM_ACTION)

    web: WebConfig = Field(default_factory=WebConfig)
    pages: List[PageConfig] = Field(default_factory=list)

    model_config = SettingsConfigDict(
        env_prefix="SETTINGSFORM_",
        env_nested_delimiter="__",
    )

    @field_validator("pages", mode="before")
    @classmethod
    def coerce_indexed_dict_to_list(cls, v):
        if v is None:
            return []
        if isinstance(v, dict):
            try:
                items = sorted(v.items(), key=lambda kv: int(kv[0]))
            except ValueError:
                return list(v.values())
            return [value for _key, value in items]
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="SETTINGSFORM_",
                env_nested_delimiter="__",
            )

        try:
            config = _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e

        config.resolve_sources(path.parent)
        return config

    def resolve_sources(self, base_dir: Path) -> None:
        """Make relative page sources relative to the configuration file."""
        for page in self.pages:
            source = Path(page.source)
            if not source.is_absolute():
                page.source = str(base_dir / source)
