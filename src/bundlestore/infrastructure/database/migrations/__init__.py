"""Alembic migration infrastructure for bundlestore.

Provides programmatic Alembic configuration — no alembic.ini needed.
The migration scripts live alongside this module.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def build_config(db_url: str) -> Config:
    """Build an Alembic Config pointing at our migration scripts."""
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(__file__).parent))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def current_revision(engine: Engine) -> str | None:
    """Return the revision a database is stamped at, or None if unversioned."""
    from alembic.runtime.migration import MigrationContext

    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def stamp_head(engine: Engine) -> None:
    """Stamp a database as at the current head revision.

    Called when a store is first created so fresh databases start at the
    correct Alembic version without running migrations.
    """
    from alembic import command

    cfg = build_config(engine.url.render_as_string(hide_password=False))
    with engine.begin() as conn:
        cfg.attributes["connection"] = conn
        command.stamp(cfg, "head")


def upgrade_head(engine: Engine) -> None:
    """Apply all pending migrations to the database behind *engine*."""
    from alembic import command

    cfg = build_config(engine.url.render_as_string(hide_password=False))
    with engine.begin() as conn:
        cfg.attributes["connection"] = conn
        command.upgrade(cfg, "head")
