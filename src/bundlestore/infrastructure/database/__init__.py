"""Database engine, schema, and persistence errors via SQLAlchemy Core."""

from bundlestore.infrastructure.database.engine import create_db_engine, init_database
from bundlestore.infrastructure.database.errors import (
    ConstraintViolationError,
    PersistenceError,
    ReferentialIntegrityError,
    translate_integrity_error,
)
from bundlestore.infrastructure.database.schema import (
    domains,
    metadata,
    trust_bundles,
    trustbundledomainreltn,
)

__all__ = [
    "ConstraintViolationError",
    "PersistenceError",
    "ReferentialIntegrityError",
    "create_db_engine",
    "domains",
    "init_database",
    "metadata",
    "translate_integrity_error",
    "trust_bundles",
    "trustbundledomainreltn",
]
