"""Tests for Pydantic config models."""

import pytest

from bundlestore.config.models import AssociationsConfig, DatabaseConfig, StoreConfig


class TestDefaults:
    def test_database_defaults(self) -> None:
        cfg = DatabaseConfig()
        assert cfg.url is None
        assert cfg.echo is False
        assert cfg.wal is True

    def test_unique_pairs_off_by_default(self) -> None:
        assert AssociationsConfig().unique_pairs is False

    def test_root_composes_sections(self) -> None:
        cfg = StoreConfig()
        assert isinstance(cfg.database, DatabaseConfig)
        assert isinstance(cfg.associations, AssociationsConfig)


class TestValidation:
    def test_model_validate_sparse(self) -> None:
        cfg = StoreConfig.model_validate({"associations": {"unique_pairs": True}})
        assert cfg.associations.unique_pairs is True
        assert cfg.database.url is None

    def test_frozen(self) -> None:
        cfg = DatabaseConfig()
        with pytest.raises(Exception):
            cfg.echo = True  # type: ignore[misc]
