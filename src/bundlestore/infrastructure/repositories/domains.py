"""Domain persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError

from bundlestore.infrastructure.database.errors import translate_integrity_error
from bundlestore.infrastructure.database.schema import domains
from bundlestore.infrastructure.repositories._rows import (
    domain_from_row,
    domain_values,
    now_utc,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from bundlestore.domain.records import Domain


class DomainRepository:
    """CRUD for the ``domains`` table on a caller-owned connection."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, domain: Domain) -> Domain:
        """Insert *domain*, assigning its generated ``id`` and timestamps.

        Raises:
            ConstraintViolationError: If the domain name is already taken,
                ignoring case.
        """
        stamp = now_utc()
        if domain.create_time is None:
            domain.create_time = stamp
        domain.update_time = stamp

        try:
            result = self._conn.execute(insert(domains).values(**domain_values(domain)))
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc

        domain.id = int(result.inserted_primary_key[0])
        return domain

    def get(self, domain_id: int) -> Domain | None:
        stmt = select(domains).where(domains.c.id == domain_id)
        row = self._conn.execute(stmt).mappings().first()
        return domain_from_row(row) if row is not None else None

    def get_by_name(self, domain_name: str) -> Domain | None:
        """Case-insensitive lookup by domain name."""
        stmt = select(domains).where(func.lower(domains.c.domain_name) == domain_name.lower())
        row = self._conn.execute(stmt).mappings().first()
        return domain_from_row(row) if row is not None else None

    def list_all(self) -> list[Domain]:
        rows = self._conn.execute(select(domains).order_by(domains.c.id)).mappings().all()
        return [domain_from_row(row) for row in rows]

    def delete(self, domain_id: int) -> bool:
        """Delete a domain. Its association rows cascade with it."""
        result = self._conn.execute(delete(domains).where(domains.c.id == domain_id))
        return result.rowcount > 0
