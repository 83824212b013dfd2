"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bundlestore.toml only contains
overrides. A fresh store needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    url: str | None = None  # None -> SQLite file under {root}/.bundlestore/
    echo: bool = False
    wal: bool = True


class AssociationsConfig(BaseModel):
    """[associations] section."""

    model_config = {"frozen": True}

    # Reject a second edge for an existing (domain, trust bundle) pair.
    unique_pairs: bool = False


class StoreConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    associations: AssociationsConfig = Field(default_factory=AssociationsConfig)
