"""Unit tests for SqlKeyedCollection against an in-memory database."""

from unittest.mock import create_autospec

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from forum.domain.aggregates import Forum
from forum.domain.value_objects import EntityId
from forum.infrastructure.keyed_collection import SqlKeyedCollection
from forum.infrastructure.models import StoreEntryModel, StoreNamespace
from forum.infrastructure.serialization import ForumCodec
from forum.ports.exceptions import StoreAccessError
from forum.ports.repositories import IKeyedCollection


def forum(seed: int, name: str = "General") -> Forum:
    return Forum(EntityId(value=bytes([seed]) * 29), name, "Talk")


class TestSqlKeyedCollection:
    """Tests for the collection contract."""

    def test_satisfies_protocol(self, store):
        """Should implement IKeyedCollection."""
        assert isinstance(store.forums, IKeyedCollection)

    def test_get_missing_returns_none(self, store, store_probe):
        """Absent keys read as None."""
        key = EntityId.generate()

        assert store.forums.get(key) is None
        store_probe.entry_not_found.assert_called_once_with("FORUMS", str(key))

    def test_insert_then_get(self, store):
        """Stored values should be retrievable unchanged."""
        value = forum(1)
        store.forums.insert(value.id, value)

        assert store.forums.get(value.id) == value
        assert store.forums.contains_key(value.id)

    def test_insert_overwrites(self, store, store_probe):
        """insert() replaces an existing entry."""
        value = forum(1)
        store.forums.insert(value.id, value)
        store.forums.insert(value.id, forum(1, name="Renamed"))

        assert store.forums.get(value.id).name == "Renamed"
        assert len(store.forums) == 1
        store_probe.entry_inserted.assert_called_with(
            "FORUMS", str(value.id), replaced=True
        )

    def test_remove(self, store):
        """remove() reports whether something was deleted."""
        value = forum(1)
        store.forums.insert(value.id, value)

        assert store.forums.remove(value.id) is True
        assert store.forums.remove(value.id) is False
        assert not store.forums.contains_key(value.id)

    def test_items_in_key_order(self, store):
        """items() enumerates by key bytes, not insertion order."""
        for seed in (3, 1, 2):
            value = forum(seed)
            store.forums.insert(value.id, value)

        keys = [key.value[0] for key, _ in store.forums.items()]
        assert keys == [1, 2, 3]

    def test_is_empty_and_len(self, store):
        """Size queries should reflect contents."""
        assert store.forums.is_empty()
        assert len(store.forums) == 0

        value = forum(1)
        store.forums.insert(value.id, value)

        assert not store.forums.is_empty()
        assert len(store.forums) == 1

    def test_namespaces_are_independent(self, store):
        """The same key in another namespace is a different entry."""
        value = forum(1)
        store.forums.insert(value.id, value)

        assert not store.threads.contains_key(value.id)
        assert store.threads.is_empty()

    def test_corrupt_payload_raises_store_access_error(self, store, store_probe):
        """Undecodable payloads should surface as StoreAccessError."""
        key = EntityId.generate()
        store._session.add(
            StoreEntryModel(
                namespace=int(StoreNamespace.FORUMS), key=key.value, payload={"x": 1}
            )
        )
        store._session.flush()

        with pytest.raises(StoreAccessError):
            store.forums.get(key)
        store_probe.store_access_failed.assert_called_once()

    def test_database_error_wrapped(self, store_probe):
        """SQLAlchemy errors should become StoreAccessError."""
        session = create_autospec(Session, instance=True)
        session.get.side_effect = OperationalError(
            "SELECT", {}, Exception("disk I/O error")
        )
        collection = SqlKeyedCollection(
            session, StoreNamespace.FORUMS, ForumCodec(), store_probe
        )

        with pytest.raises(StoreAccessError, match="forums get failed"):
            collection.get(EntityId.generate())
        store_probe.store_access_failed.assert_called_once()
