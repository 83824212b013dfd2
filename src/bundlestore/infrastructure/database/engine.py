"""Database engine setup.

SQLite is the default persistence backend: foreign keys are switched on
for every connection so the junction table's references are enforced,
and file databases run in WAL mode. Other backends are reached by
setting ``database.url``.

SQLAlchemy Core (not ORM) is used: records are plain dataclasses and
every repository call receives its connection explicitly, so there is
no session or identity map to manage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from bundlestore.infrastructure.database.migrations import current_revision, stamp_head
from bundlestore.infrastructure.database.schema import metadata

if TYPE_CHECKING:
    from bundlestore.config.settings import StoreSettings

logger = logging.getLogger(__name__)


def create_db_engine(url: str, *, echo: bool = False, wal: bool = True) -> Engine:
    """Create an engine; on SQLite, enable foreign keys (and WAL for files)."""
    engine = create_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":
        database = make_url(url).database
        use_wal = wal and database not in (None, "", ":memory:")

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            if use_wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(settings: StoreSettings) -> Engine:
    """Initialize the database described by *settings*.

    For the default SQLite file, creates ``{root}/.bundlestore/`` first.
    Then creates all tables from :data:`schema.metadata` and, for an
    unversioned database, stamps it at the Alembic head revision.

    Idempotent — safe to call on an existing store.

    Returns the engine ready for use.
    """
    if settings.database.url is None:
        settings.db_path.parent.mkdir(parents=True, exist_ok=True)

    # SQL echo is a logging concern; see configure_logging(echo_sql=...).
    engine = create_db_engine(settings.db_url, wal=settings.database.wal)
    metadata.create_all(engine)
    if current_revision(engine) is None:
        stamp_head(engine)
    logger.debug("Initialized database at %s", engine.url)
    return engine
