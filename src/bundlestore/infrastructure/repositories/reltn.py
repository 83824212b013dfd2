"""Persistence for TrustBundleDomainReltn, the Domain <-> TrustBundle edge.

Loads are eager: every read is a single SELECT joining the association
row to its domain and its trust bundle, so returned records carry both
endpoints fully populated. Unknown identifiers yield ``None`` (or an
empty list), never an exception.

Writes let the database enforce the rules: a missing endpoint trips the
NOT NULL constraint, an endpoint that was never stored trips the foreign
key. Both surface as :mod:`bundlestore.infrastructure.database.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from bundlestore.domain.records import UNSAVED_ID, TrustBundleDomainReltn
from bundlestore.infrastructure.database.errors import translate_integrity_error
from bundlestore.infrastructure.database.schema import (
    domains,
    trust_bundles,
    trustbundledomainreltn,
)
from bundlestore.infrastructure.repositories._rows import (
    bundle_from_row,
    domain_from_row,
    strip_prefix,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Connection, Select

_reltn = trustbundledomainreltn

_DOMAIN_PREFIX = "domain__"
_BUNDLE_PREFIX = "bundle__"


def _endpoint_id(endpoint: Any) -> int | None:
    return None if endpoint is None else endpoint.id


def _eager_select() -> Select[Any]:
    """Association rows joined to both endpoints, columns labelled by side."""
    columns = [
        _reltn.c.id.label("reltn_id"),
        *(col.label(f"{_DOMAIN_PREFIX}{col.name}") for col in domains.c),
        *(col.label(f"{_BUNDLE_PREFIX}{col.name}") for col in trust_bundles.c),
    ]
    joined = _reltn.join(domains, _reltn.c.domain_id == domains.c.id).join(
        trust_bundles, _reltn.c.trust_bundle_id == trust_bundles.c.id
    )
    return select(*columns).select_from(joined).order_by(_reltn.c.id)


def _from_row(row: Mapping[str, Any]) -> TrustBundleDomainReltn:
    return TrustBundleDomainReltn(
        id=int(row["reltn_id"]),
        domain=domain_from_row(strip_prefix(row, _DOMAIN_PREFIX)),
        trust_bundle=bundle_from_row(strip_prefix(row, _BUNDLE_PREFIX)),
    )


class TrustBundleDomainReltnRepository:
    """Reads and writes ``trustbundledomainreltn`` on a caller-owned connection."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def save(self, reltn: TrustBundleDomainReltn) -> TrustBundleDomainReltn:
        """Insert or update *reltn* and return it.

        A record with ``id == 0`` is inserted and receives the generated
        identifier. A record with an ``id`` has its endpoints rewritten;
        if no row has that ``id`` yet, it is inserted under it.

        Raises:
            ConstraintViolationError: If ``domain`` or ``trust_bundle`` is unset.
            ReferentialIntegrityError: If an endpoint does not exist in the store.
        """
        values = {
            "domain_id": _endpoint_id(reltn.domain),
            "trust_bundle_id": _endpoint_id(reltn.trust_bundle),
        }
        try:
            if reltn.id == UNSAVED_ID:
                result = self._conn.execute(insert(_reltn).values(**values))
                reltn.id = int(result.inserted_primary_key[0])
            else:
                result = self._conn.execute(
                    update(_reltn).where(_reltn.c.id == reltn.id).values(**values)
                )
                if result.rowcount == 0:
                    self._conn.execute(insert(_reltn).values(id=reltn.id, **values))
        except IntegrityError as exc:
            raise translate_integrity_error(exc) from exc
        return reltn

    def get(self, reltn_id: int) -> TrustBundleDomainReltn | None:
        """Load one association with both endpoints, or None if unknown."""
        stmt = _eager_select().where(_reltn.c.id == reltn_id)
        row = self._conn.execute(stmt).mappings().first()
        return _from_row(row) if row is not None else None

    def find(self, domain_id: int, trust_bundle_id: int) -> list[TrustBundleDomainReltn]:
        """All associations between one domain and one bundle."""
        stmt = _eager_select().where(
            _reltn.c.domain_id == domain_id,
            _reltn.c.trust_bundle_id == trust_bundle_id,
        )
        return [_from_row(row) for row in self._conn.execute(stmt).mappings().all()]

    def list_by_domain(self, domain_id: int) -> list[TrustBundleDomainReltn]:
        stmt = _eager_select().where(_reltn.c.domain_id == domain_id)
        return [_from_row(row) for row in self._conn.execute(stmt).mappings().all()]

    def list_by_trust_bundle(self, trust_bundle_id: int) -> list[TrustBundleDomainReltn]:
        stmt = _eager_select().where(_reltn.c.trust_bundle_id == trust_bundle_id)
        return [_from_row(row) for row in self._conn.execute(stmt).mappings().all()]

    def delete(self, reltn_id: int) -> bool:
        result = self._conn.execute(delete(_reltn).where(_reltn.c.id == reltn_id))
        return result.rowcount > 0

    def delete_pair(self, domain_id: int, trust_bundle_id: int) -> int:
        """Remove every edge between one domain and one bundle. Returns count."""
        result = self._conn.execute(
            delete(_reltn).where(
                _reltn.c.domain_id == domain_id,
                _reltn.c.trust_bundle_id == trust_bundle_id,
            )
        )
        return result.rowcount

    def delete_by_domain(self, domain_id: int) -> int:
        result = self._conn.execute(delete(_reltn).where(_reltn.c.domain_id == domain_id))
        return result.rowcount

    def delete_by_trust_bundle(self, trust_bundle_id: int) -> int:
        result = self._conn.execute(
            delete(_reltn).where(_reltn.c.trust_bundle_id == trust_bundle_id)
        )
        return result.rowcount
