"""StoreSettings — every knob of one storectl invocation.

Values are merged in this order, first wins:

1. keyword arguments (the CLI flags);
2. ``STORECTL_*`` environment variables, ``__`` between nesting levels;
3. the store's ``storectl.toml``;
4. the section defaults in :mod:`storectl.config.models`.
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
    TomlConfigSettingsSource,
)

from storectl.config.discovery import find_config
from storectl.config.models import (
    CacheConfig,
    CartConfig,
    EventsConfig,
    PluginsConfig,
    StoreSection,
)

# pydantic-settings builds its sources inside the constructor, so the file
# chosen by from_cli() reaches settings_customise_sources() through here.
_toml_file: ContextVar[Path | None] = ContextVar("storectl_toml_file", default=None)


class StoreSettings(BaseSettings):
    """Settings for one CLI run against one store.

    ``store_root`` is the directory holding ``storectl.toml`` (or the
    working directory when there is none); ``config_path`` is the file
    actually read.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STORECTL_",
        "env_nested_delimiter": "__",
    }

    store_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    sync: bool = False

    store: StoreSection = Field(default_factory=StoreSection)
    cart: CartConfig = Field(default_factory=CartConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = _toml_file.get()
        if toml_file is None:
            return init_settings, env_settings
        return init_settings, env_settings, TomlConfigSettingsSource(settings_cls, toml_file)

    @property
    def cache_dir(self) -> Path:
        """Cache directory cleared on hook changes, resolved against the store root."""
        path = Path(self.cache.dir)
        return path if path.is_absolute() else self.store_root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        store_root: Path | None = None,
        **cli_flags: Any,
    ) -> StoreSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored. Without
        one, ``storectl.toml`` is looked up from *store_root* (or the
        working directory) upwards, and its directory becomes the store
        root unless *store_root* was given.

        Raises click.ClickException when the file is not valid TOML.
        """
        if config_path:
            toml_file = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_file = find_config(store_root)

        if store_root is None:
            store_root = toml_file.parent if toml_file else Path.cwd()

        token = _toml_file.set(toml_file)
        try:
            return cls(store_root=store_root, config_path=toml_file, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_file}: {exc}") from exc
        finally:
            _toml_file.reset(token)
