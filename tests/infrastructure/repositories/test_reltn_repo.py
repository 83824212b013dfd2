"""Tests for TrustBundleDomainReltnRepository — eager loads and constraints."""

import pytest

from bundlestore.domain.records import Domain, TrustBundle, TrustBundleDomainReltn
from bundlestore.infrastructure.database.errors import (
    ConstraintViolationError,
    ReferentialIntegrityError,
)
from bundlestore.infrastructure.repositories import TrustBundleDomainReltnRepository
from bundlestore.infrastructure.store import Store
from tests.conftest import add_bundle, add_domain


def _save(
    store: Store, domain: Domain | None, bundle: TrustBundle | None
) -> TrustBundleDomainReltn:
    with store.transaction() as conn:
        return TrustBundleDomainReltnRepository(conn).save(
            TrustBundleDomainReltn(domain=domain, trust_bundle=bundle)
        )


class TestSave:
    def test_assigns_generated_id(self, store: Store) -> None:
        reltn = _save(store, add_domain(store, "example.com"), add_bundle(store, "AcmeBundle"))
        assert reltn.id > 0
        assert reltn.is_persisted

    def test_ids_are_unique(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        bundle = add_bundle(store, "AcmeBundle")
        ids = {_save(store, domain, bundle).id for _ in range(3)}
        assert len(ids) == 3

    def test_missing_domain_is_constraint_violation(self, store: Store) -> None:
        bundle = add_bundle(store, "AcmeBundle")
        with pytest.raises(ConstraintViolationError):
            _save(store, None, bundle)

    def test_missing_bundle_is_constraint_violation(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        with pytest.raises(ConstraintViolationError):
            _save(store, domain, None)

    def test_unsaved_endpoint_is_referential_error(self, store: Store) -> None:
        bundle = add_bundle(store, "AcmeBundle")
        with pytest.raises(ReferentialIntegrityError):
            _save(store, Domain(domain_name="never-stored.example"), bundle)

    def test_failed_save_leaves_no_row(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        with pytest.raises(ConstraintViolationError):
            _save(store, domain, None)
        with store.connect() as conn:
            assert TrustBundleDomainReltnRepository(conn).list_by_domain(domain.id) == []

    def test_update_rewrites_endpoints(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        first = add_bundle(store, "First")
        second = add_bundle(store, "Second")
        reltn = _save(store, domain, first)

        reltn.trust_bundle = second
        with store.transaction() as conn:
            TrustBundleDomainReltnRepository(conn).save(reltn)

        with store.connect() as conn:
            loaded = TrustBundleDomainReltnRepository(conn).get(reltn.id)
        assert loaded is not None
        assert loaded.trust_bundle is not None
        assert loaded.trust_bundle.bundle_name == "Second"

    def test_explicit_id_is_inserted(self, store: Store) -> None:
        reltn = TrustBundleDomainReltn(
            domain=add_domain(store, "example.com"),
            trust_bundle=add_bundle(store, "AcmeBundle"),
            id=1001,
        )
        with store.transaction() as conn:
            TrustBundleDomainReltnRepository(conn).save(reltn)
        with store.connect() as conn:
            assert TrustBundleDomainReltnRepository(conn).get(1001) is not None


class TestGet:
    def test_round_trip_example(self, store: Store) -> None:
        """example.com + AcmeBundle persisted and reloaded by id."""
        domain = add_domain(store, "example.com")
        bundle = add_bundle(store, "AcmeBundle")
        reltn = _save(store, domain, bundle)

        with store.connect() as conn:
            loaded = TrustBundleDomainReltnRepository(conn).get(reltn.id)

        assert loaded is not None
        assert loaded.id == reltn.id
        assert loaded.domain == domain
        assert loaded.trust_bundle == bundle

    def test_endpoints_fully_populated(self, store: Store) -> None:
        domain = add_domain(store, "example.com", postmaster_address="postmaster@example.com")
        bundle = add_bundle(store, "AcmeBundle", refresh_interval=24, checksum="abc")
        reltn = _save(store, domain, bundle)

        with store.connect() as conn:
            loaded = TrustBundleDomainReltnRepository(conn).get(reltn.id)

        assert loaded is not None and loaded.domain is not None
        assert loaded.trust_bundle is not None
        assert isinstance(loaded.domain, Domain)
        assert isinstance(loaded.trust_bundle, TrustBundle)
        assert loaded.domain.postmaster_address == "postmaster@example.com"
        assert loaded.trust_bundle.refresh_interval == 24
        assert loaded.trust_bundle.checksum == "abc"

    def test_loaded_record_outlives_connection(self, store: Store) -> None:
        reltn = _save(store, add_domain(store, "example.com"), add_bundle(store, "AcmeBundle"))
        with store.connect() as conn:
            loaded = TrustBundleDomainReltnRepository(conn).get(reltn.id)
        store.close()
        assert loaded is not None and loaded.domain is not None
        assert loaded.domain.domain_name == "example.com"

    def test_unknown_id_returns_none(self, store: Store) -> None:
        with store.connect() as conn:
            assert TrustBundleDomainReltnRepository(conn).get(12345) is None


class TestFanOut:
    def test_one_domain_many_bundles(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        for name in ("A", "B", "C"):
            _save(store, domain, add_bundle(store, name))

        with store.connect() as conn:
            reltns = TrustBundleDomainReltnRepository(conn).list_by_domain(domain.id)

        assert [r.trust_bundle.bundle_name for r in reltns if r.trust_bundle] == ["A", "B", "C"]
        assert all(r.domain == domain for r in reltns)

    def test_one_bundle_many_domains(self, store: Store) -> None:
        bundle = add_bundle(store, "AcmeBundle")
        for name in ("a.example", "b.example"):
            _save(store, add_domain(store, name), bundle)

        with store.connect() as conn:
            reltns = TrustBundleDomainReltnRepository(conn).list_by_trust_bundle(bundle.id)

        assert [r.domain.domain_name for r in reltns if r.domain] == ["a.example", "b.example"]

    def test_duplicate_pair_allowed_at_table_level(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        bundle = add_bundle(store, "AcmeBundle")
        _save(store, domain, bundle)
        _save(store, domain, bundle)
        with store.connect() as conn:
            assert len(TrustBundleDomainReltnRepository(conn).find(domain.id, bundle.id)) == 2


class TestDelete:
    def test_delete_by_id(self, store: Store) -> None:
        reltn = _save(store, add_domain(store, "example.com"), add_bundle(store, "AcmeBundle"))
        with store.transaction() as conn:
            repo = TrustBundleDomainReltnRepository(conn)
            assert repo.delete(reltn.id) is True
            assert repo.delete(reltn.id) is False
            assert repo.get(reltn.id) is None

    def test_delete_pair(self, store: Store) -> None:
        domain = add_domain(store, "example.com")
        keep = add_bundle(store, "Keep")
        drop = add_bundle(store, "Drop")
        _save(store, domain, keep)
        _save(store, domain, drop)
        with store.transaction() as conn:
            repo = TrustBundleDomainReltnRepository(conn)
            assert repo.delete_pair(domain.id, drop.id) == 1
            remaining = repo.list_by_domain(domain.id)
        assert [r.trust_bundle.id for r in remaining if r.trust_bundle] == [keep.id]

    def test_delete_by_domain_and_bundle(self, store: Store) -> None:
        d1 = add_domain(store, "a.example")
        d2 = add_domain(store, "b.example")
        bundle = add_bundle(store, "AcmeBundle")
        _save(store, d1, bundle)
        _save(store, d2, bundle)
        with store.transaction() as conn:
            repo = TrustBundleDomainReltnRepository(conn)
            assert repo.delete_by_domain(d1.id) == 1
            assert repo.delete_by_trust_bundle(bundle.id) == 1
            assert repo.list_by_trust_bundle(bundle.id) == []
