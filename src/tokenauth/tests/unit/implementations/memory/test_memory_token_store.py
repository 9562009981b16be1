# ABOUTME: Unit tests for the in-memory document token store
# ABOUTME: Tests per-principal collections, digest uniqueness, ordering and isolation of returned models

import threading
from datetime import datetime, timedelta, UTC

import pytest

from tokenauth.exceptions import StorageError, ValidationException
from tokenauth.implementations.memory import InMemoryPrincipalRepository, InMemoryTokenStore
from tokenauth.interfaces.storage import AbstractTokenRepository
from tokenauth.models.auth import SimplePrincipal

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def attributes(digest_char: str, last_used_at: datetime = T0, **extra) -> dict:
    return {"digest": digest_char * 64, "last_used_at": last_used_at, **extra}


class TestInMemoryTokenRepository:
    @pytest.mark.unit
    def test_for_owner_scopes_store(self, memory_repository):
        store = memory_repository.for_owner("user-1")

        assert isinstance(memory_repository, AbstractTokenRepository)
        assert isinstance(store, InMemoryTokenStore)
        assert store.principal_id == "user-1"
        assert store.count() == 0

    @pytest.mark.unit
    def test_digest_exists_spans_principals(self, memory_repository):
        memory_repository.for_owner("user-1").create(attributes("a"))

        assert memory_repository.digest_exists("a" * 64)
        assert not memory_repository.digest_exists("b" * 64)

    @pytest.mark.unit
    def test_clear_removes_everything(self, memory_repository):
        memory_repository.for_owner("user-1").create(attributes("a"))
        memory_repository.clear()

        assert not memory_repository.digest_exists("a" * 64)


class TestInMemoryTokenStore:
    @pytest.mark.unit
    def test_create_assigns_id_and_keeps_attributes(self, memory_repository):
        token = memory_repository.for_owner("user-1").create(
            attributes("a", expires_in=60, ip_address="10.0.0.1", user_agent="ua")
        )

        assert token.id
        assert token.principal_id == "user-1"
        assert token.expires_in == 60
        assert token.ip_address == "10.0.0.1"
        assert token.user_agent == "ua"
        assert token.created_at is not None

    @pytest.mark.unit
    def test_duplicate_digest_rejected_across_principals(self, memory_repository):
        memory_repository.for_owner("user-1").create(attributes("a"))

        with pytest.raises(StorageError) as exc_info:
            memory_repository.for_owner("user-2").create(attributes("a"))

        assert exc_info.value.code == "DUPLICATE_DIGEST"
        assert memory_repository.for_owner("user-2").count() == 0

    @pytest.mark.unit
    def test_find_by_digest_is_scoped(self, memory_repository):
        memory_repository.for_owner("user-1").create(attributes("a"))

        assert memory_repository.for_owner("user-1").find_by_digest("a" * 64) is not None
        assert memory_repository.for_owner("user-2").find_by_digest("a" * 64) is None
        assert memory_repository.for_owner("user-1").find_by_digest("f" * 64) is None

    @pytest.mark.unit
    def test_list_orders_most_recent_first(self, memory_repository):
        store = memory_repository.for_owner("user-1")
        store.create(attributes("a", T0))
        store.create(attributes("b", T0 + timedelta(minutes=2)))
        store.create(attributes("c", T0 + timedelta(minutes=1)))

        ordered = store.list_ordered_by_last_used_descending()

        assert [token.digest[0] for token in ordered] == ["b", "c", "a"]

    @pytest.mark.unit
    def test_update_last_used_writes_document(self, memory_repository):
        store = memory_repository.for_owner("user-1")
        token = store.create(attributes("a"))

        updated = store.update_last_used(token, T0 + timedelta(hours=1))

        assert updated.last_used_at == T0 + timedelta(hours=1)
        assert token.last_used_at == T0
        assert store.find_by_digest("a" * 64).last_used_at == T0 + timedelta(hours=1)

    @pytest.mark.unit
    def test_returned_models_are_detached(self, memory_repository):
        store = memory_repository.for_owner("user-1")
        token = store.create(attributes("a"))

        token.last_used_at = T0 + timedelta(days=1)

        assert store.find_by_digest("a" * 64).last_used_at == T0

    @pytest.mark.unit
    def test_delete_is_idempotent(self, memory_repository):
        store = memory_repository.for_owner("user-1")
        token = store.create(attributes("a"))
        store.create(attributes("b"))

        store.delete(token)
        store.delete(token)

        assert store.count() == 1
        assert not memory_repository.digest_exists("a" * 64)

    @pytest.mark.unit
    def test_concurrent_creates(self, memory_repository):
        store = memory_repository.for_owner("user-1")
        digests = [f"{i:064x}" for i in range(50)]

        threads = [
            threading.Thread(target=store.create, args=({"digest": digest, "last_used_at": T0},))
            for digest in digests
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.count() == 50


class TestInMemoryPrincipalRepository:
    @pytest.mark.unit
    def test_find_by_lookup_key(self, principals, alice):
        assert principals.find_by_lookup_key("alice@example.com") is alice
        assert principals.find_by_lookup_key("nobody@example.com") is None

    @pytest.mark.unit
    def test_duplicate_lookup_key_rejected(self, principals):
        with pytest.raises(ValidationException) as exc_info:
            principals.add(SimplePrincipal(id="user-eve", lookup_key="alice@example.com"))

        assert exc_info.value.code == "DUPLICATE_LOOKUP_KEY"

    @pytest.mark.unit
    def test_re_adding_same_principal_replaces(self, alice):
        repository = InMemoryPrincipalRepository([alice])
        renamed = SimplePrincipal(id=alice.id, lookup_key=alice.lookup_key, metadata={"plan": "pro"})

        repository.add(renamed)

        assert repository.find_by_lookup_key(alice.lookup_key) is renamed

    @pytest.mark.unit
    def test_remove(self, principals, alice):
        principals.remove(alice.lookup_key)
        principals.remove(alice.lookup_key)

        assert principals.find_by_lookup_key(alice.lookup_key) is None
