"""BagRulesSettings: one frozen object for CLI flags, env vars and TOML.

Precedence, highest first: CLI flags (init kwargs), ``BAGRULES_*``
environment variables, the discovered ``bagrules.toml``, field defaults.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from bagrules.config.discovery import find_config
from bagrules.config.models import QueryConfig

# TOML file for the settings object under construction.
_toml_file: ContextVar[Path | None] = ContextVar("_toml_file", default=None)


class BagRulesSettings(BaseSettings):
    """Resolved settings for one CLI run.

    Attributes:
        config_path: The TOML file in effect, or None if none was found.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="BAGRULES_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    query: QueryConfig = Field(default_factory=QueryConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        toml_file = _toml_file.get()
        if toml_file is not None:
            sources += (TomlConfigSettingsSource(settings_cls, toml_file=toml_file),)
        return sources

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> BagRulesSettings:
        """Build settings for a CLI run.

        An explicit *config_path* is used only if it names a file; without
        one, ``bagrules.toml`` is discovered from *start_dir* (default: cwd).

        Raises:
            click.ClickException: if the TOML file cannot be parsed.
        """
        if config_path:
            toml_file = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_file = find_config(start_dir)

        token = _toml_file.set(toml_file)
        try:
            return cls(config_path=toml_file, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_file}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _toml_file.reset(token)
