"""Store protocols (ports) for the forum bounded context.

The persistent store is four independent keyed collections. These protocols
define the collection contract and the store that owns the collections,
without tying the application layer to a database.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, TypeVar, runtime_checkable

from forum.domain.aggregates import Forum, Message, Thread, User
from forum.domain.value_objects import EntityId

V = TypeVar("V")


@runtime_checkable
class IKeyedCollection(Protocol[V]):
    """A durable map from EntityId to a value.

    insert() overwrites an existing entry. Callers that must not overwrite
    check contains_key() first. A read-modify-write sequence on one key is
    only atomic inside a store transaction.
    """

    def get(self, key: EntityId) -> V | None:
        """Retrieve the value stored under key.

        Args:
            key: The entry key

        Returns:
            The stored value, or None if the key is absent
        """
        ...

    def insert(self, key: EntityId, value: V) -> None:
        """Store value under key, replacing any existing entry.

        Args:
            key: The entry key
            value: The value to store

        Raises:
            StoreAccessError: If the database write fails
        """
        ...

    def remove(self, key: EntityId) -> bool:
        """Delete the entry stored under key.

        Returns:
            True if an entry was removed, False if the key was absent
        """
        ...

    def contains_key(self, key: EntityId) -> bool:
        """Check whether an entry exists under key."""
        ...

    def items(self) -> list[tuple[EntityId, V]]:
        """Enumerate all entries ordered by key bytes."""
        ...

    def is_empty(self) -> bool:
        """Check whether the collection has no entries."""
        ...

    def __len__(self) -> int:
        """Count the entries in the collection."""
        ...


@runtime_checkable
class IForumStore(Protocol):
    """The single owner of all forum state.

    Constructed once at process start and passed to every service.
    """

    @property
    def forums(self) -> IKeyedCollection[Forum]:
        """Forums keyed by forum id."""
        ...

    @property
    def threads(self) -> IKeyedCollection[Thread]:
        """Threads keyed by thread id."""
        ...

    @property
    def messages(self) -> IKeyedCollection[list[Message]]:
        """Message sequences keyed by thread id, in posting order."""
        ...

    @property
    def users(self) -> IKeyedCollection[User]:
        """User profiles keyed by caller identity."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """Open a unit of work.

        All writes made inside the block are committed together when it
        exits normally and discarded when it raises.
        """
        ...

    def close(self) -> None:
        """Release the database resources held by the store."""
        ...
