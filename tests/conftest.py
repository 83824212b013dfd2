"""Shared pytest fixtures and test helpers for bundlestore tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from bundlestore.config.settings import StoreSettings
from bundlestore.domain.records import Domain, TrustBundle
from bundlestore.infrastructure.repositories import DomainRepository, TrustBundleRepository
from bundlestore.infrastructure.store import Store


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo the handler and level changes Store construction applies."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    levels = {
        name: logging.getLogger(name).level
        for name in ("", "bundlestore", "alembic", "sqlalchemy", "sqlalchemy.engine")
    }
    yield
    root.handlers = handlers
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host BUNDLESTORE_* variables out of every test."""
    monkeypatch.delenv("BUNDLESTORE_CONFIG", raising=False)
    monkeypatch.delenv("BUNDLESTORE_DATABASE__URL", raising=False)
    monkeypatch.delenv("BUNDLESTORE_ASSOCIATIONS__UNIQUE_PAIRS", raising=False)
    monkeypatch.delenv("BUNDLESTORE_VERBOSE", raising=False)
    monkeypatch.delenv("BUNDLESTORE_LOG_JSON", raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> StoreSettings:
    """Settings rooted at a temp directory (default SQLite file)."""
    return StoreSettings.load(root=tmp_path)


@pytest.fixture
def store(settings: StoreSettings) -> Iterator[Store]:
    """Fully initialized store on a temp directory."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def db_engine(store: Store) -> Engine:
    """Initialized engine with all tables created."""
    return store.engine


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def add_domain(store: Store, name: str, **kwargs: object) -> Domain:
    """Persist a domain and return it with its generated id."""
    with store.transaction() as conn:
        return DomainRepository(conn).add(Domain(domain_name=name, **kwargs))  # type: ignore[arg-type]


def add_bundle(store: Store, name: str, **kwargs: object) -> TrustBundle:
    """Persist a trust bundle and return it with its generated id."""
    url = kwargs.pop("bundle_url", f"https://bundles.example.org/{name}.p7b")
    with store.transaction() as conn:
        return TrustBundleRepository(conn).add(
            TrustBundle(bundle_name=name, bundle_url=str(url), **kwargs)  # type: ignore[arg-type]
        )
