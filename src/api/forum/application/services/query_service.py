"""Read-only query service over the forum store."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from forum.application.errors import operation_error
from forum.application.observability import (
    DefaultQueryServiceProbe,
    QueryServiceProbe,
)
from forum.domain.aggregates import Forum, Message, Thread, User
from forum.domain.value_objects import EntityId, ErrorType, OperationError
from forum.ports.repositories import IForumStore

T = TypeVar("T")


class ForumQueryService:
    """Application service for reading forum state.

    Queries take no mutation guard. Each one runs in its own store
    transaction and returns either the requested data or an
    OperationError; store failures are reported as UNEXPECTED.
    """

    def __init__(
        self,
        store: IForumStore,
        probe: QueryServiceProbe | None = None,
    ):
        """Initialize the service.

        Args:
            store: The forum store.
            probe: Optional domain probe for observability.
        """
        self._store = store
        self._probe = probe or DefaultQueryServiceProbe()

    def get_forums(self) -> list[tuple[EntityId, Forum]] | OperationError:
        """All (forum id, forum) pairs in key order."""
        return self._list("forums", lambda: self._store.forums.items())

    def get_threads(self) -> list[tuple[EntityId, Thread]] | OperationError:
        """All (thread id, thread) pairs in key order."""
        return self._list("threads", lambda: self._store.threads.items())

    def get_users(self) -> list[tuple[EntityId, User]] | OperationError:
        """All (caller identity, user) pairs in key order."""
        return self._list("users", lambda: self._store.users.items())

    def get_messages(self) -> list[tuple[EntityId, list[Message]]] | OperationError:
        """Every (thread id, message sequence) pair, ordered by thread id."""
        return self._list("messages", lambda: self._store.messages.items())

    def get_thread(self, thread_id: EntityId) -> Thread | OperationError:
        """Look up one thread.

        Returns:
            The Thread, or OperationError(NOT_FOUND) if there is none
        """
        thread = self._run("get_thread", lambda: self._store.threads.get(thread_id))
        if isinstance(thread, OperationError):
            return thread
        if thread is None:
            self._probe.entity_not_found(collection="threads", entity_id=str(thread_id))
            return OperationError(
                error_type=ErrorType.NOT_FOUND, message="Thread does not exist"
            )

        self._probe.entity_retrieved(collection="threads", entity_id=str(thread_id))
        return thread

    def get_thread_messages(
        self, thread_id: EntityId
    ) -> list[Message] | OperationError:
        """Messages of one thread in posting order.

        A thread without messages and a thread that does not exist give the
        same NOT_FOUND answer.
        """
        thread_messages = self._run(
            "get_thread_messages", lambda: self._store.messages.get(thread_id)
        )
        if isinstance(thread_messages, OperationError):
            return thread_messages
        if thread_messages is None:
            self._probe.entity_not_found(
                collection="messages", entity_id=str(thread_id)
            )
            return OperationError(
                error_type=ErrorType.NOT_FOUND, message="No messages in thread"
            )

        self._probe.entity_retrieved(collection="messages", entity_id=str(thread_id))
        return thread_messages

    def get_user(self, user_id: EntityId) -> User | OperationError:
        """Look up one user profile by identity."""
        user = self._run("get_user", lambda: self._store.users.get(user_id))
        if isinstance(user, OperationError):
            return user
        if user is None:
            self._probe.entity_not_found(collection="users", entity_id=str(user_id))
            return OperationError(
                error_type=ErrorType.NOT_FOUND,
                message=f"User with id={user_id} not found",
            )

        self._probe.entity_retrieved(collection="users", entity_id=str(user_id))
        return user

    def _list(
        self, collection: str, read: Callable[[], list[tuple[EntityId, T]]]
    ) -> list[tuple[EntityId, T]] | OperationError:
        entries = self._run(f"get_{collection}", read)
        if isinstance(entries, OperationError):
            return entries

        self._probe.collection_listed(collection=collection, count=len(entries))
        return entries

    def _run(self, query: str, read: Callable[[], T]) -> T | OperationError:
        try:
            with self._store.transaction():
                return read()
        except Exception as e:
            self._probe.query_failed(query=query, error=str(e))
            return operation_error(e)
