"""SQLAlchemy Core table definitions for the bundlestore database.

``trustbundledomainreltn`` is the junction table of the Domain <->
TrustBundle many-to-many association. Its primary key is a 64-bit
surrogate generated by the database; both foreign keys are required.
Pair uniqueness is deliberately not a table constraint (see
``AssociationsConfig.unique_pairs``).
"""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    Table,
    Text,
    func,
)

metadata = MetaData()

# BIGINT does not alias ROWID on SQLite, so auto-generation needs INTEGER there.
Identifier = BigInteger().with_variant(Integer(), "sqlite")

domains = Table(
    "domains",
    metadata,
    Column("id", Identifier, primary_key=True, autoincrement=True),
    Column("domain_name", Text, nullable=False),
    Column("postmaster_address", Text),
    Column("status", Text, nullable=False, default="new", server_default="new"),
    Column("create_time", Text),  # ISO-8601, UTC
    Column("update_time", Text),  # ISO-8601, UTC
)

trust_bundles = Table(
    "trust_bundles",
    metadata,
    Column("id", Identifier, primary_key=True, autoincrement=True),
    Column("bundle_name", Text, nullable=False),
    Column("bundle_url", Text, nullable=False),
    Column("refresh_interval", Integer, default=0, server_default="0"),
    Column("checksum", Text, default="", server_default=""),
    Column("signing_certificate_data", LargeBinary),
    Column("create_time", Text),
    Column("last_refresh_attempt", Text),
    Column("last_successful_refresh", Text),
)

trustbundledomainreltn = Table(
    "trustbundledomainreltn",
    metadata,
    Column("id", Identifier, primary_key=True, autoincrement=True, nullable=False),
    Column(
        "trust_bundle_id",
        Identifier,
        ForeignKey("trust_bundles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "domain_id",
        Identifier,
        ForeignKey("domains.id", ondelete="CASCADE"),
        nullable=False,
    ),
)

# ---------------------------------------------------------------------------
# Indexes for frequently filtered columns
# ---------------------------------------------------------------------------

Index("ix_trustbundledomainreltn_domain", trustbundledomainreltn.c.domain_id)
Index("ix_trustbundledomainreltn_bundle", trustbundledomainreltn.c.trust_bundle_id)

# Names are unique regardless of case; lookups compare lower() as well.
Index("uq_domains_name_lower", func.lower(domains.c.domain_name), unique=True)
Index("uq_trust_bundles_name_lower", func.lower(trust_bundles.c.bundle_name), unique=True)
