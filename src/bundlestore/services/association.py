"""AssociationService — attach trust bundles to domains and detach them.

Each public method runs in its own transaction and returns a
:class:`ServiceResult`. Lookups of the endpoints happen inside the same
transaction as the write, so a missing domain or bundle is reported as
``DOMAIN_NOT_FOUND`` / ``BUNDLE_NOT_FOUND`` rather than as a raw
foreign-key failure. Persistence errors that still reach this layer are
converted to ``CONSTRAINT_VIOLATION`` / ``REFERENTIAL_INTEGRITY``.
"""

from __future__ import annotations

import logging
from typing import Any

from bundlestore.domain.records import Domain, TrustBundle, TrustBundleDomainReltn
from bundlestore.infrastructure.database.errors import (
    ConstraintViolationError,
    PersistenceError,
    ReferentialIntegrityError,
)
from bundlestore.infrastructure.repositories import (
    DomainRepository,
    TrustBundleDomainReltnRepository,
    TrustBundleRepository,
)
from bundlestore.services.base import BaseService
from bundlestore.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _iso(value: Any) -> str | None:
    return value.isoformat() if value is not None else None


def domain_to_dict(domain: Domain) -> dict[str, Any]:
    """JSON-safe view of a domain."""
    return {
        "id": domain.id,
        "domain_name": domain.domain_name,
        "postmaster_address": domain.postmaster_address,
        "status": str(domain.status),
        "create_time": _iso(domain.create_time),
        "update_time": _iso(domain.update_time),
    }


def bundle_to_dict(bundle: TrustBundle) -> dict[str, Any]:
    """JSON-safe view of a trust bundle (certificate bytes are summarized)."""
    return {
        "id": bundle.id,
        "bundle_name": bundle.bundle_name,
        "bundle_url": bundle.bundle_url,
        "refresh_interval": bundle.refresh_interval,
        "checksum": bundle.checksum,
        "has_signing_certificate": bundle.signing_certificate_data is not None,
        "create_time": _iso(bundle.create_time),
        "last_refresh_attempt": _iso(bundle.last_refresh_attempt),
        "last_successful_refresh": _iso(bundle.last_successful_refresh),
    }


def reltn_to_dict(reltn: TrustBundleDomainReltn) -> dict[str, Any]:
    return {
        "id": reltn.id,
        "domain": domain_to_dict(reltn.domain) if reltn.domain is not None else None,
        "trust_bundle": (
            bundle_to_dict(reltn.trust_bundle) if reltn.trust_bundle is not None else None
        ),
    }


def _persistence_failure(op: str, exc: PersistenceError) -> ServiceResult:
    code = (
        "REFERENTIAL_INTEGRITY"
        if isinstance(exc, ReferentialIntegrityError)
        else "CONSTRAINT_VIOLATION"
    )
    return ServiceResult(ok=False, op=op, error=ServiceError(code=code, message=str(exc)))


def _domain_not_found(op: str, domain_id: int) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="DOMAIN_NOT_FOUND",
            message=f"No domain found with ID: {domain_id}",
            detail={"domain_id": domain_id},
        ),
    )


def _bundle_not_found(op: str, trust_bundle_id: int) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="BUNDLE_NOT_FOUND",
            message=f"No trust bundle found with ID: {trust_bundle_id}",
            detail={"trust_bundle_id": trust_bundle_id},
        ),
    )


class AssociationService(BaseService):
    """Manages the Domain <-> TrustBundle association records."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def associate(self, domain_id: int, trust_bundle_id: int) -> ServiceResult:
        """Create one association edge between a domain and a bundle.

        When ``associations.unique_pairs`` is enabled, a second edge for
        the same pair is rejected with ``DUPLICATE_ASSOCIATION``.
        """
        op = "associate"

        try:
            with self._store.transaction() as conn:
                domain = DomainRepository(conn).get(domain_id)
                if domain is None:
                    return _domain_not_found(op, domain_id)

                bundle = TrustBundleRepository(conn).get(trust_bundle_id)
                if bundle is None:
                    return _bundle_not_found(op, trust_bundle_id)

                reltns = TrustBundleDomainReltnRepository(conn)
                if self._store.settings.associations.unique_pairs:
                    existing = reltns.find(domain_id, trust_bundle_id)
                    if existing:
                        return ServiceResult(
                            ok=False,
                            op=op,
                            error=ServiceError(
                                code="DUPLICATE_ASSOCIATION",
                                message=(
                                    f"Trust bundle {bundle.bundle_name!r} is already "
                                    f"associated with domain {domain.domain_name!r}"
                                ),
                                detail={"id": existing[0].id},
                            ),
                        )

                reltn = reltns.save(TrustBundleDomainReltn(domain=domain, trust_bundle=bundle))
        except PersistenceError as exc:
            logger.warning("Association %s -> %s failed: %s", domain_id, trust_bundle_id, exc)
            return _persistence_failure(op, exc)

        logger.debug(
            "Associated trust bundle %s with domain %s (reltn %s)",
            trust_bundle_id,
            domain_id,
            reltn.id,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": reltn.id,
                "domain_id": domain_id,
                "trust_bundle_id": trust_bundle_id,
            },
        )

    def disassociate(self, domain_id: int, trust_bundle_id: int) -> ServiceResult:
        """Remove the association edge(s) between a domain and a bundle."""
        op = "disassociate"

        try:
            with self._store.transaction() as conn:
                removed = TrustBundleDomainReltnRepository(conn).delete_pair(
                    domain_id, trust_bundle_id
                )
        except PersistenceError as exc:
            logger.warning("Disassociation %s -> %s failed: %s", domain_id, trust_bundle_id, exc)
            return _persistence_failure(op, exc)

        if removed == 0:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_FOUND",
                    message=(
                        f"Trust bundle {trust_bundle_id} is not associated "
                        f"with domain {domain_id}"
                    ),
                    detail={"domain_id": domain_id, "trust_bundle_id": trust_bundle_id},
                ),
            )

        logger.debug("Removed %d association(s) %s -> %s", removed, domain_id, trust_bundle_id)
        return ServiceResult(ok=True, op=op, data={"removed": removed})

    def disassociate_all_from_domain(self, domain_id: int) -> ServiceResult:
        """Detach every trust bundle from a domain."""
        op = "disassociate_all_from_domain"

        try:
            with self._store.transaction() as conn:
                if DomainRepository(conn).get(domain_id) is None:
                    return _domain_not_found(op, domain_id)
                removed = TrustBundleDomainReltnRepository(conn).delete_by_domain(domain_id)
        except PersistenceError as exc:
            logger.warning("Detaching bundles from domain %s failed: %s", domain_id, exc)
            return _persistence_failure(op, exc)

        return ServiceResult(ok=True, op=op, data={"domain_id": domain_id, "removed": removed})

    def disassociate_all_from_bundle(self, trust_bundle_id: int) -> ServiceResult:
        """Detach a trust bundle from every domain."""
        op = "disassociate_all_from_bundle"

        try:
            with self._store.transaction() as conn:
                if TrustBundleRepository(conn).get(trust_bundle_id) is None:
                    return _bundle_not_found(op, trust_bundle_id)
                removed = TrustBundleDomainReltnRepository(conn).delete_by_trust_bundle(
                    trust_bundle_id
                )
        except PersistenceError as exc:
            logger.warning("Detaching bundle %s from domains failed: %s", trust_bundle_id, exc)
            return _persistence_failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"trust_bundle_id": trust_bundle_id, "removed": removed},
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_association(self, reltn_id: int) -> ServiceResult:
        op = "get_association"

        with self._store.connect() as conn:
            reltn = TrustBundleDomainReltnRepository(conn).get(reltn_id)

        if reltn is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"No association found with ID: {reltn_id}",
                ),
            )
        return ServiceResult(ok=True, op=op, data=reltn_to_dict(reltn))

    def bundles_for_domain(self, domain_id: int) -> ServiceResult:
        """List the trust bundles associated with a domain."""
        op = "bundles_for_domain"

        with self._store.connect() as conn:
            if DomainRepository(conn).get(domain_id) is None:
                return _domain_not_found(op, domain_id)
            reltns = TrustBundleDomainReltnRepository(conn).list_by_domain(domain_id)

        items = [bundle_to_dict(r.trust_bundle) for r in reltns if r.trust_bundle is not None]
        return ServiceResult(
            ok=True,
            op=op,
            data={"domain_id": domain_id, "items": items},
            meta={"count": len(items)},
        )

    def domains_for_bundle(self, trust_bundle_id: int) -> ServiceResult:
        """List the domains a trust bundle is associated with."""
        op = "domains_for_bundle"

        with self._store.connect() as conn:
            if TrustBundleRepository(conn).get(trust_bundle_id) is None:
                return _bundle_not_found(op, trust_bundle_id)
            reltns = TrustBundleDomainReltnRepository(conn).list_by_trust_bundle(
                trust_bundle_id
            )

        items = [domain_to_dict(r.domain) for r in reltns if r.domain is not None]
        return ServiceResult(
            ok=True,
            op=op,
            data={"trust_bundle_id": trust_bundle_id, "items": items},
            meta={"count": len(items)},
        )
