"""Tests for Store — engine ownership and transaction boundaries."""

from pathlib import Path

import pytest
from sqlalchemy import func, insert, select, text

from bundlestore.config.settings import StoreSettings
from bundlestore.infrastructure.database.schema import domains
from bundlestore.infrastructure.store import Store


class TestStoreInit:
    def test_creates_database(self, store: Store) -> None:
        assert (store.root / ".bundlestore" / "bundlestore.db").exists()

    def test_exposes_settings(self, store: Store, settings: StoreSettings) -> None:
        assert store.settings is settings
        assert store.root == settings.root

    def test_existing_db_reused(self, tmp_path: Path) -> None:
        settings = StoreSettings.load(root=tmp_path)
        s1 = Store(settings)
        s2 = Store(settings)
        with s1.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        with s2.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        s1.close()
        s2.close()


class TestTransaction:
    def test_commits_on_success(self, store: Store) -> None:
        with store.transaction() as conn:
            conn.execute(insert(domains).values(domain_name="example.com", status="new"))
        with store.connect() as conn:
            assert conn.execute(select(func.count()).select_from(domains)).scalar_one() == 1

    def test_rolls_back_on_error(self, store: Store) -> None:
        with pytest.raises(RuntimeError, match="boom"):
            with store.transaction() as conn:
                conn.execute(insert(domains).values(domain_name="example.com", status="new"))
                raise RuntimeError("boom")
        with store.connect() as conn:
            assert conn.execute(select(func.count()).select_from(domains)).scalar_one() == 0
