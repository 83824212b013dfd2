"""Persistence-layer exceptions.

Repositories let the database enforce required columns, uniqueness and
foreign keys, then translate the driver's ``IntegrityError`` into one of
the typed errors below. The original exception is kept as ``__cause__``.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


class PersistenceError(Exception):
    """Base class for errors surfaced by the persistence layer."""


class ConstraintViolationError(PersistenceError):
    """A NOT NULL or UNIQUE constraint rejected the write."""


class ReferentialIntegrityError(PersistenceError):
    """A foreign key referenced a row that does not exist."""


def translate_integrity_error(exc: IntegrityError) -> PersistenceError:
    """Map a driver integrity failure onto the store's error hierarchy."""
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    if "FOREIGN KEY" in detail.upper():
        return ReferentialIntegrityError(detail)
    return ConstraintViolationError(detail)
