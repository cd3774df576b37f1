"""Unit test fixtures with an in-memory store and mocked probes."""

from collections.abc import Iterator
from unittest.mock import create_autospec

import pytest

from forum.application.mutation_guard import MutationGuards
from forum.application.observability import MutationGuardProbe
from forum.domain.value_objects import EntityId
from forum.infrastructure.observability import StoreProbe
from forum.infrastructure.store import ForumStore
from infrastructure.observability import StoreConnectionProbe
from infrastructure.settings import IN_MEMORY_PATH, StoreSettings


class SequentialIdentifierGenerator:
    """Hands out a fixed list of identifiers in order."""

    def __init__(self, *ids: EntityId):
        self._ids = list(ids)

    def generate(self) -> EntityId:
        return self._ids.pop(0)


def make_id(seed: int) -> EntityId:
    """Build a deterministic 29-byte identifier."""
    return EntityId(value=bytes([seed]) * 29)


@pytest.fixture
def ids():
    """Factory for deterministic identifiers."""
    return make_id


@pytest.fixture
def sequential_ids():
    """Factory for a generator returning the given identifiers in order."""
    return SequentialIdentifierGenerator


@pytest.fixture
def store_settings() -> StoreSettings:
    """Provide settings for a throwaway in-memory store."""
    return StoreSettings(path=IN_MEMORY_PATH)


@pytest.fixture
def store_probe():
    """Create mock store probe."""
    return create_autospec(StoreProbe, instance=True)


@pytest.fixture
def store(store_settings, store_probe) -> Iterator[ForumStore]:
    """Provide an open in-memory store, closed after the test."""
    forum_store = ForumStore.open(
        store_settings,
        probe=store_probe,
        connection_probe=create_autospec(StoreConnectionProbe, instance=True),
    )
    yield forum_store
    forum_store.close()


@pytest.fixture
def guard_probe():
    """Create mock guard probe."""
    return create_autospec(MutationGuardProbe, instance=True)


@pytest.fixture
def guards(guard_probe) -> MutationGuards:
    """Provide a fresh guard registry."""
    return MutationGuards(probe=guard_probe)
