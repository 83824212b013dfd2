"""Row <-> record conversion shared by the repositories."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from bundlestore.domain.records import Domain, TrustBundle
from bundlestore.domain.types import DomainStatus


def now_utc() -> datetime:
    return datetime.now(UTC)


def to_iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def from_iso(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def strip_prefix(row: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    """Select the ``prefix``-labelled columns of a joined row, unprefixed."""
    return {
        key[len(prefix) :]: value for key, value in row.items() if key.startswith(prefix)
    }


def domain_from_row(row: Mapping[str, Any]) -> Domain:
    return Domain(
        id=int(row["id"]),
        domain_name=str(row["domain_name"]),
        postmaster_address=row["postmaster_address"],
        status=DomainStatus(row["status"]),
        create_time=from_iso(row["create_time"]),
        update_time=from_iso(row["update_time"]),
    )


def domain_values(domain: Domain) -> dict[str, Any]:
    return {
        "domain_name": domain.domain_name,
        "postmaster_address": domain.postmaster_address,
        "status": str(domain.status),
        "create_time": to_iso(domain.create_time),
        "update_time": to_iso(domain.update_time),
    }


def bundle_from_row(row: Mapping[str, Any]) -> TrustBundle:
    return TrustBundle(
        id=int(row["id"]),
        bundle_name=str(row["bundle_name"]),
        bundle_url=str(row["bundle_url"]),
        refresh_interval=int(row["refresh_interval"] or 0),
        checksum=row["checksum"] or "",
        signing_certificate_data=row["signing_certificate_data"],
        create_time=from_iso(row["create_time"]),
        last_refresh_attempt=from_iso(row["last_refresh_attempt"]),
        last_successful_refresh=from_iso(row["last_successful_refresh"]),
    )


def bundle_values(bundle: TrustBundle) -> dict[str, Any]:
    return {
        "bundle_name": bundle.bundle_name,
        "bundle_url": bundle.bundle_url,
        "refresh_interval": bundle.refresh_interval,
        "checksum": bundle.checksum,
        "signing_certificate_data": bundle.signing_certificate_data,
        "create_time": to_iso(bundle.create_time),
        "last_refresh_attempt": to_iso(bundle.last_refresh_attempt),
        "last_successful_refresh": to_iso(bundle.last_successful_refresh),
    }
