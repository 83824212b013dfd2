"""Store — owner of the database engine and its transaction boundaries.

The Store is the single dependency injected into every service. There is
no ambient session: a service opens a transaction, receives the
``Connection``, and hands that connection to each repository it uses.

- **Writes**: :meth:`Store.transaction` wraps ``engine.begin()``
  (commit on success, rollback on exception).
- **Reads**: :meth:`Store.connect` yields a plain connection.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from bundlestore.config.logging import configure_logging
from bundlestore.infrastructure.database.engine import init_database

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from bundlestore.config.settings import StoreSettings

logger = logging.getLogger(__name__)


class Store:
    """Database access point constructed once from :class:`StoreSettings`.

    Construction is the composition root: it applies the logging settings
    (``verbose``, ``log_json``, ``database.echo``) before opening the engine.
    """

    def __init__(self, settings: StoreSettings) -> None:
        self._settings = settings
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            echo_sql=settings.database.echo,
        )
        self._engine: Engine = init_database(settings)

    @property
    def root(self) -> Path:
        """The store root directory."""
        return self._settings.root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> StoreSettings:
        """The resolved settings for this store."""
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside a transaction.

        Commits when the block exits normally and rolls back when it
        raises; the exception is re-raised unchanged.

        Usage::

            with store.transaction() as conn:
                TrustBundleDomainReltnRepository(conn).save(reltn)
        """
        with self._engine.begin() as conn:
            yield conn

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Yield a connection for read-only work."""
        with self._engine.connect() as conn:
            yield conn

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()
        logger.debug("Closed store at %s", self.root)
