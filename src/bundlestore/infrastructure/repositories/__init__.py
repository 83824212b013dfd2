"""Repositories for domains, trust bundles, and their associations.

Each repository wraps a caller-owned ``Connection``; commit and rollback
are the caller's responsibility.
"""

from bundlestore.infrastructure.repositories.domains import DomainRepository
from bundlestore.infrastructure.repositories.reltn import TrustBundleDomainReltnRepository
from bundlestore.infrastructure.repositories.trust_bundles import TrustBundleRepository

__all__ = [
    "DomainRepository",
    "TrustBundleDomainReltnRepository",
    "TrustBundleRepository",
]
