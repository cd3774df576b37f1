"""Forum application service.

Creates forums and the threads inside them.
"""

from __future__ import annotations

from collections.abc import Callable

from forum.application.errors import operation_error
from forum.application.identifiers import RandomIdentifierGenerator
from forum.application.mutation_guard import MutationGuards, MutationKind
from forum.application.observability import (
    DefaultForumServiceProbe,
    ForumServiceProbe,
)
from forum.application.validation import ReferentialIntegrityValidator
from forum.domain.aggregates import Forum, Thread
from forum.domain.value_objects import EntityId, OperationError, OperationResult
from forum.ports.exceptions import (
    ConflictError,
    IdentifierCollisionError,
    ReferencedEntityMissingError,
)
from forum.ports.identifiers import IdentifierGenerator
from forum.ports.repositories import IForumStore


class ForumService:
    """Application service for forum and thread creation.

    Every call is guarded, runs in one store transaction and reports its
    outcome as a value; no exception escapes.
    """

    def __init__(
        self,
        store: IForumStore,
        guards: MutationGuards,
        id_generator: IdentifierGenerator | None = None,
        probe: ForumServiceProbe | None = None,
    ):
        """Initialize ForumService with dependencies.

        Args:
            store: The forum store
            guards: Process-wide mutation guard registry
            id_generator: Source of new identifiers (random by default)
            probe: Optional domain probe for observability
        """
        self._store = store
        self._guards = guards
        self._id_generator = id_generator or RandomIdentifierGenerator()
        self._validator = ReferentialIntegrityValidator(store)
        self._probe = probe or DefaultForumServiceProbe()

    def create_forum(
        self, name: str, description: str
    ) -> OperationResult | OperationError:
        """Create a new forum.

        Args:
            name: Forum name
            description: Forum description

        Returns:
            OperationResult carrying the new forum id, or OperationError
            (CONFLICT on identifier collision, UNEXPECTED on store failure)
        """
        with self._guards.guard(MutationKind.CREATING_FORUM):
            try:
                with self._store.transaction():
                    forum_id = self._new_id("forums", self._store.forums.contains_key)
                    forum = Forum(id=forum_id, name=name, description=description)
                    self._store.forums.insert(forum_id, forum)
            except ConflictError as e:
                return operation_error(e)
            except Exception as e:
                self._probe.operation_failed(operation="create_forum", error=str(e))
                return operation_error(e, "Error creating forum")

        self._probe.forum_created(forum_id=str(forum.id), name=name)
        return OperationResult(
            message=f"Forum created - {forum.id}", entity_id=str(forum.id)
        )

    def create_thread(
        self, name: str, description: str, forum_id: EntityId
    ) -> OperationResult | OperationError:
        """Create a new thread inside an existing forum.

        Args:
            name: Thread name
            description: Thread description
            forum_id: Forum the thread belongs to

        Returns:
            OperationResult carrying the new thread id, or OperationError
            (VALIDATION if the forum does not exist)
        """
        with self._guards.guard(MutationKind.CREATING_THREAD):
            try:
                with self._store.transaction():
                    self._validator.ensure_forum_exists(forum_id)
                    thread_id = self._new_id(
                        "threads", self._store.threads.contains_key
                    )
                    thread = Thread(
                        id=thread_id,
                        name=name,
                        description=description,
                        forum_id=forum_id,
                    )
                    self._store.threads.insert(thread_id, thread)
            except ReferencedEntityMissingError as e:
                self._probe.thread_rejected(forum_id=str(forum_id), reason=str(e))
                return operation_error(e)
            except ConflictError as e:
                return operation_error(e)
            except Exception as e:
                self._probe.operation_failed(operation="create_thread", error=str(e))
                return operation_error(e, "Error creating thread")

        self._probe.thread_created(
            thread_id=str(thread.id), forum_id=str(forum_id), name=name
        )
        return OperationResult(
            message=f"Thread created - {thread.id}", entity_id=str(thread.id)
        )

    def _new_id(
        self, collection: str, is_taken: Callable[[EntityId], bool]
    ) -> EntityId:
        """Generate an identifier, aborting if it is already in use."""
        new_id = self._id_generator.generate()
        if is_taken(new_id):
            self._probe.identifier_collision(
                collection=collection, entity_id=str(new_id)
            )
            raise IdentifierCollisionError(
                f"Generated identifier {new_id} already exists"
            )
        return new_id
