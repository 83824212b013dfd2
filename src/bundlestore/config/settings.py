"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — values passed by the embedding application
  2. Env vars     — ``BUNDLESTORE_*`` prefix
  3. TOML file    — ``bundlestore.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`bundlestore.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from bundlestore.config.discovery import find_config, read_toml
from bundlestore.config.models import AssociationsConfig, DatabaseConfig

STORE_DIRNAME = ".bundlestore"
DB_FILENAME = "bundlestore.db"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``bundlestore.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class StoreSettings(BaseSettings):
    """Unified settings for a bundlestore instance.

    Merges init kwargs, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        root: Store directory (parent of ``bundlestore.toml``, or CWD if
            no config found). The default SQLite file lives beneath it.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BUNDLESTORE_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    associations: AssociationsConfig = Field(default_factory=AssociationsConfig)

    @property
    def db_path(self) -> Path:
        """Default SQLite file location, used when ``database.url`` is unset."""
        return self.root / STORE_DIRNAME / DB_FILENAME

    @property
    def db_url(self) -> str:
        """The SQLAlchemy URL the store connects to."""
        if self.database.url:
            return self.database.url
        return f"sqlite:///{self.db_path}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        root: Path | None = None,
        **overrides: Any,
    ) -> StoreSettings:
        """Construct settings for a store.

        Discovers ``bundlestore.toml`` via walk-up (or explicit
        *config_path*), resolves *root* from the config file's parent
        directory, and merges *overrides* as highest-priority values.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
