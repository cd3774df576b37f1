"""SQLite-backed forum store.

ForumStore owns the database engine, one session, and the four keyed
collections that share it. It is built once at process start and handed
to every application service; nothing else holds forum state.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from forum.domain.aggregates import Forum, Message, Thread, User
from forum.infrastructure.keyed_collection import SqlKeyedCollection
from forum.infrastructure.models import StoreEntryModel, StoreNamespace
from forum.infrastructure.observability import DefaultStoreProbe, StoreProbe
from forum.infrastructure.serialization import (
    ForumCodec,
    MessageCodec,
    SequenceCodec,
    ThreadCodec,
    UserCodec,
)
from forum.ports.exceptions import StoreAccessError
from forum.ports.repositories import IForumStore
from infrastructure.database import Base, create_session_factory, create_store_engine
from infrastructure.observability import (
    DefaultStoreConnectionProbe,
    StoreConnectionProbe,
)
from infrastructure.settings import StoreSettings


class ForumStore(IForumStore):
    """The four keyed collections of the forum, backed by one database.

    Writes made through any collection inside transaction() are committed
    together, so an operation either applies all of its writes or none.
    """

    def __init__(
        self,
        engine: Engine,
        probe: StoreProbe | None = None,
        connection_probe: StoreConnectionProbe | None = None,
    ) -> None:
        """Initialize the store over an engine whose schema already exists.

        Use ForumStore.open() to build the engine and schema from settings.

        Args:
            engine: Engine for the store database
            probe: Optional domain probe for collection operations
            connection_probe: Optional probe for store lifecycle events
        """
        self._engine = engine
        self._probe = probe or DefaultStoreProbe()
        self._connection_probe = connection_probe or DefaultStoreConnectionProbe()
        self._session = create_session_factory(engine)()

        self._forums: SqlKeyedCollection[Forum] = SqlKeyedCollection(
            self._session, StoreNamespace.FORUMS, ForumCodec(), self._probe
        )
        self._threads: SqlKeyedCollection[Thread] = SqlKeyedCollection(
            self._session, StoreNamespace.THREADS, ThreadCodec(), self._probe
        )
        self._messages: SqlKeyedCollection[list[Message]] = SqlKeyedCollection(
            self._session,
            StoreNamespace.MESSAGES,
            SequenceCodec(MessageCodec()),
            self._probe,
        )
        self._users: SqlKeyedCollection[User] = SqlKeyedCollection(
            self._session, StoreNamespace.USERS, UserCodec(), self._probe
        )

    @classmethod
    def open(
        cls,
        settings: StoreSettings,
        probe: StoreProbe | None = None,
        connection_probe: StoreConnectionProbe | None = None,
    ) -> ForumStore:
        """Open (creating if needed) the store database described by settings.

        Args:
            settings: Store settings
            probe: Optional domain probe for collection operations
            connection_probe: Optional probe for store lifecycle events

        Returns:
            A ready-to-use ForumStore

        Raises:
            StoreAccessError: If the database cannot be opened or initialized
        """
        connection_probe = connection_probe or DefaultStoreConnectionProbe()
        engine = create_store_engine(settings)

        try:
            Base.metadata.create_all(engine, tables=[StoreEntryModel.__table__])
        except SQLAlchemyError as e:
            connection_probe.store_open_failed(url=settings.url, error=e)
            engine.dispose()
            raise StoreAccessError(f"Cannot open store at {settings.url}: {e}") from e

        connection_probe.schema_ensured(tables=[StoreEntryModel.__tablename__])
        connection_probe.store_opened(url=settings.url, in_memory=settings.is_in_memory)
        return cls(engine, probe=probe, connection_probe=connection_probe)

    @property
    def forums(self) -> SqlKeyedCollection[Forum]:
        """Forums keyed by forum id (namespace 0)."""
        return self._forums

    @property
    def threads(self) -> SqlKeyedCollection[Thread]:
        """Threads keyed by thread id (namespace 1)."""
        return self._threads

    @property
    def messages(self) -> SqlKeyedCollection[list[Message]]:
        """Message sequences keyed by thread id (namespace 2)."""
        return self._messages

    @property
    def users(self) -> SqlKeyedCollection[User]:
        """User profiles keyed by caller identity (namespace 3)."""
        return self._users

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Create a unit of work over all four collections.

        Usage:
            with store.transaction():
                store.threads.insert(thread.id, thread)
                # Commits on success, rolls back on exception

        Raises:
            StoreAccessError: If the commit itself fails
        """
        try:
            yield
            self._session.commit()
        except SQLAlchemyError as e:
            self._rollback(e)
            raise StoreAccessError(f"Transaction failed: {e}") from e
        except Exception as e:
            self._rollback(e)
            raise

    def close(self) -> None:
        """Close the session and dispose of the engine."""
        self._session.close()
        self._engine.dispose()
        self._connection_probe.store_closed()

    def _rollback(self, error: Exception) -> None:
        self._session.rollback()
        self._probe.transaction_rolled_back(error=str(error))
