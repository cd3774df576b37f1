"""SQLAlchemy implementation of IKeyedCollection.

Each collection is a namespace of the shared store_entries table. Writes
are flushed immediately so later reads in the same unit of work see them;
committing or discarding them is the job of ForumStore.transaction().
"""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum.domain.value_objects import EntityId
from forum.infrastructure.models import StoreEntryModel, StoreNamespace
from forum.infrastructure.observability import DefaultStoreProbe, StoreProbe
from forum.infrastructure.serialization import EntryCodec
from forum.ports.exceptions import StoreAccessError

V = TypeVar("V")


class SqlKeyedCollection(Generic[V]):
    """Keyed collection stored in one namespace of the store_entries table.

    Values are converted with the namespace codec on every read and write,
    so callers always receive fresh immutable aggregates.
    """

    def __init__(
        self,
        session: Session,
        namespace: StoreNamespace,
        codec: EntryCodec[V],
        probe: StoreProbe | None = None,
    ) -> None:
        """Initialize the collection.

        Args:
            session: Session shared by all collections of the store
            namespace: Fixed namespace number of this collection
            codec: Converts values to and from JSON payloads
            probe: Optional domain probe for observability
        """
        self._session = session
        self._namespace = namespace
        self._codec = codec
        self._probe = probe or DefaultStoreProbe()

    @property
    def namespace(self) -> StoreNamespace:
        """Namespace number of this collection."""
        return self._namespace

    def get(self, key: EntityId) -> V | None:
        """Retrieve the value stored under key.

        Args:
            key: The entry key

        Returns:
            The stored value, or None if the key is absent

        Raises:
            StoreAccessError: If the database read fails or the payload is corrupt
        """
        model = self._load(key, action="get")

        if model is None:
            self._probe.entry_not_found(self._namespace.name, str(key))
            return None

        self._probe.entry_retrieved(self._namespace.name, str(key))
        return self._decode(model.payload)

    def insert(self, key: EntityId, value: V) -> None:
        """Store value under key, replacing any existing entry.

        Args:
            key: The entry key
            value: The value to store

        Raises:
            StoreAccessError: If the database write fails
        """
        payload = self._codec.encode(value)
        model = self._load(key, action="insert")
        replaced = model is not None

        try:
            if model is not None:
                model.payload = payload
            else:
                self._session.add(
                    StoreEntryModel(
                        namespace=int(self._namespace),
                        key=key.value,
                        payload=payload,
                    )
                )
            self._session.flush()
        except SQLAlchemyError as e:
            raise self._access_failed("insert", e) from e

        self._probe.entry_inserted(self._namespace.name, str(key), replaced=replaced)

    def remove(self, key: EntityId) -> bool:
        """Delete the entry stored under key.

        Returns:
            True if an entry was removed, False if the key was absent

        Raises:
            StoreAccessError: If the database write fails
        """
        model = self._load(key, action="remove")
        if model is None:
            return False

        try:
            self._session.delete(model)
            self._session.flush()
        except SQLAlchemyError as e:
            raise self._access_failed("remove", e) from e

        self._probe.entry_removed(self._namespace.name, str(key))
        return True

    def contains_key(self, key: EntityId) -> bool:
        """Check whether an entry exists under key."""
        return self._load(key, action="contains_key") is not None

    def items(self) -> list[tuple[EntityId, V]]:
        """Enumerate all entries ordered by key bytes."""
        stmt = (
            select(StoreEntryModel)
            .where(StoreEntryModel.namespace == int(self._namespace))
            .order_by(StoreEntryModel.key)
        )
        try:
            models = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            raise self._access_failed("items", e) from e

        return [
            (EntityId(value=model.key), self._decode(model.payload))
            for model in models
        ]

    def is_empty(self) -> bool:
        """Check whether the collection has no entries."""
        stmt = (
            select(StoreEntryModel.key)
            .where(StoreEntryModel.namespace == int(self._namespace))
            .limit(1)
        )
        try:
            return self._session.scalar(stmt) is None
        except SQLAlchemyError as e:
            raise self._access_failed("is_empty", e) from e

    def __len__(self) -> int:
        """Count the entries in the collection."""
        stmt = (
            select(func.count())
            .select_from(StoreEntryModel)
            .where(StoreEntryModel.namespace == int(self._namespace))
        )
        try:
            return self._session.scalar(stmt) or 0
        except SQLAlchemyError as e:
            raise self._access_failed("len", e) from e

    def _load(self, key: EntityId, action: str) -> StoreEntryModel | None:
        try:
            return self._session.get(
                StoreEntryModel, (int(self._namespace), key.value)
            )
        except SQLAlchemyError as e:
            raise self._access_failed(action, e) from e

    def _decode(self, payload: object) -> V:
        try:
            return self._codec.decode(payload)
        except (TypeError, ValueError) as e:
            raise self._access_failed("decode", e) from e

    def _access_failed(self, action: str, error: Exception) -> StoreAccessError:
        self._probe.store_access_failed(self._namespace.name, action, str(error))
        return StoreAccessError(
            f"{self._namespace.name.lower()} {action} failed: {error}"
        )
