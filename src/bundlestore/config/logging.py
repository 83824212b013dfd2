"""structlog setup applied by :class:`~bundlestore.infrastructure.store.Store`.

Every ``bundlestore.*`` module logs through ``logging.getLogger(__name__)``;
the stdlib records are rendered by structlog's ``ProcessorFormatter`` on
stderr, either as console lines or as JSON objects (``log_json``).

SQL echo is routed through the same handler: ``echo_sql`` raises the
``sqlalchemy.engine`` logger to INFO instead of letting SQLAlchemy attach
its own stdout handler.
"""

from __future__ import annotations

import logging
import sys

import structlog

STORE_LOGGER = "bundlestore"

# Libraries that stay at WARNING unless explicitly asked for.
_QUIET_LOGGERS = ("alembic", "sqlalchemy")


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    echo_sql: bool = False,
) -> None:
    """Install the stderr handler and set logger levels.

    Safe to call repeatedly: the root handler is replaced, not stacked.

    Args:
        verbose: ``bundlestore`` loggers emit DEBUG; otherwise WARNING+.
        log_json: Render one JSON object per line.
        echo_sql: Log every SQL statement via ``sqlalchemy.engine``.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(STORE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if echo_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)
