"""Baseline schema — domains, trust bundles, and their association table.

Revision ID: 001_baseline
Revises: None
Create Date: 2026-10-19

Fresh stores get stamped at this revision without running it; stores
created before versioning was introduced get it applied on upgrade.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "001_baseline"
down_revision: str | None = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None

_ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def upgrade() -> None:
    op.create_table(
        "domains",
        sa.Column("id", _ID, primary_key=True, autoincrement=True),
        sa.Column("domain_name", sa.Text, nullable=False),
        sa.Column("postmaster_address", sa.Text),
        sa.Column("status", sa.Text, nullable=False, server_default="new"),
        sa.Column("create_time", sa.Text),
        sa.Column("update_time", sa.Text),
    )

    op.create_table(
        "trust_bundles",
        sa.Column("id", _ID, primary_key=True, autoincrement=True),
        sa.Column("bundle_name", sa.Text, nullable=False),
        sa.Column("bundle_url", sa.Text, nullable=False),
        sa.Column("refresh_interval", sa.Integer, server_default="0"),
        sa.Column("checksum", sa.Text, server_default=""),
        sa.Column("signing_certificate_data", sa.LargeBinary),
        sa.Column("create_time", sa.Text),
        sa.Column("last_refresh_attempt", sa.Text),
        sa.Column("last_successful_refresh", sa.Text),
    )

    op.create_table(
        "trustbundledomainreltn",
        sa.Column("id", _ID, primary_key=True, autoincrement=True, nullable=False),
        sa.Column(
            "trust_bundle_id",
            _ID,
            sa.ForeignKey("trust_bundles.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "domain_id",
            _ID,
            sa.ForeignKey("domains.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )

    op.create_index(
        "uq_domains_name_lower", "domains", [sa.text("lower(domain_name)")], unique=True
    )
    op.create_index(
        "uq_trust_bundles_name_lower",
        "trust_bundles",
        [sa.text("lower(bundle_name)")],
        unique=True,
    )
    op.create_index(
        "ix_trustbundledomainreltn_domain", "trustbundledomainreltn", ["domain_id"]
    )
    op.create_index(
        "ix_trustbundledomainreltn_bundle", "trustbundledomainreltn", ["trust_bundle_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_trustbundledomainreltn_bundle", table_name="trustbundledomainreltn")
    op.drop_index("ix_trustbundledomainreltn_domain", table_name="trustbundledomainreltn")
    op.drop_table("trustbundledomainreltn")
    op.drop_index("uq_trust_bundles_name_lower", table_name="trust_bundles")
    op.drop_index("uq_domains_name_lower", table_name="domains")
    op.drop_table("trust_bundles")
    op.drop_table("domains")
