"""TrustBundle persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError

from bundlestore.infrastructure.database.errors import translate_integrity_error
from bundlestore.infrastructure.database.schema import trust_bundles
from bundlestore.infrastructure.repositories._rows import (
    bundle_from_row,
    bundle_values,
    now_utc,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from bundlestore.domain.records import TrustBundle


class TrustBundleRepository:
    """CRUD for the ``trust_bundles`` table on a caller-owned connection."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, bundle: TrustBundle) -> TrustBundle:
        """Insert *bundle*, assigning its generated ``id``.

        Raises:
            ConstraintViolationError: If the bundle name is already taken,
                ignoring case.
        """
        if bundle.create_time is None:
            bundle.create_time = now_utc()

        try:
            result = self._conn.execute(insert(trust_bundles).values(**bundle_values(bundle)))
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc

        bundle.id = int(result.inserted_primary_key[0])
        return bundle

    def get(self, bundle_id: int) -> TrustBundle | None:
        stmt = select(trust_bundles).where(trust_bundles.c.id == bundle_id)
        row = self._conn.execute(stmt).mappings().first()
        return bundle_from_row(row) if row is not None else None

    def get_by_name(self, bundle_name: str) -> TrustBundle | None:
        """Case-insensitive lookup by bundle name."""
        stmt = select(trust_bundles).where(
            func.lower(trust_bundles.c.bundle_name) == bundle_name.lower()
        )
        row = self._conn.execute(stmt).mappings().first()
        return bundle_from_row(row) if row is not None else None

    def list_all(self) -> list[TrustBundle]:
        stmt = select(trust_bundles).order_by(trust_bundles.c.id)
        rows = self._conn.execute(stmt).mappings().all()
        return [bundle_from_row(row) for row in rows]

    def delete(self, bundle_id: int) -> bool:
        """Delete a bundle. Its association rows cascade with it."""
        result = self._conn.execute(delete(trust_bundles).where(trust_bundles.c.id == bundle_id))
        return result.rowcount > 0
