"""Persisted records: Domain, TrustBundle, and the association between them.

These are passive records. They hold no business logic and perform no
validation; required-field and referential checks belong to the
persistence layer (:mod:`bundlestore.infrastructure.repositories`).

An ``id`` of ``0`` means "not yet persisted". Repositories assign the
generated identifier on insert.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bundlestore.domain.types import DomainStatus

UNSAVED_ID = 0


@dataclass
class Domain:
    """An addressing/administrative domain that may trust bundles."""

    domain_name: str
    postmaster_address: str | None = None
    status: DomainStatus = DomainStatus.NEW
    id: int = UNSAVED_ID
    create_time: datetime | None = None
    update_time: datetime | None = None


@dataclass
class TrustBundle:
    """A named collection of trust anchors fetched from ``bundle_url``."""

    bundle_name: str
    bundle_url: str
    refresh_interval: int = 0  # hours; 0 disables scheduled refresh
    checksum: str = ""
    signing_certificate_data: bytes | None = None
    id: int = UNSAVED_ID
    create_time: datetime | None = None
    last_refresh_attempt: datetime | None = None
    last_successful_refresh: datetime | None = None


@dataclass
class TrustBundleDomainReltn:
    """One edge of the Domain <-> TrustBundle many-to-many association.

    Both endpoints are plain references. When a record is loaded from the
    store, ``domain`` and ``trust_bundle`` are fully populated objects,
    never lazy handles. The record does not own either endpoint.

    Persisting a record with either endpoint unset fails in the
    persistence layer with a constraint error.
    """

    domain: Domain | None = None
    trust_bundle: TrustBundle | None = None
    id: int = UNSAVED_ID

    @property
    def is_persisted(self) -> bool:
        """Whether the store has assigned an identifier yet."""
        return self.id != UNSAVED_ID
