"""Message application service.

Appends messages to a thread's message sequence.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from forum.application.errors import operation_error
from forum.application.identifiers import RandomIdentifierGenerator
from forum.application.mutation_guard import MutationGuards, MutationKind
from forum.application.observability import (
    DefaultMessageServiceProbe,
    MessageServiceProbe,
)
from forum.application.validation import ReferentialIntegrityValidator
from forum.domain.aggregates import Message
from forum.domain.value_objects import EntityId, OperationError, OperationResult
from forum.ports.exceptions import (
    ConflictError,
    ForumValidationError,
    IdentifierCollisionError,
)
from forum.ports.identifiers import IdentifierGenerator
from forum.ports.repositories import IForumStore


def utc_epoch_seconds() -> int:
    """Current time as whole seconds since the Unix epoch."""
    return int(datetime.now(UTC).timestamp())


class MessageService:
    """Application service for posting messages.

    The author of a message is always the caller identity; it is never
    taken from the request payload.
    """

    def __init__(
        self,
        store: IForumStore,
        guards: MutationGuards,
        id_generator: IdentifierGenerator | None = None,
        clock: Callable[[], int] = utc_epoch_seconds,
        probe: MessageServiceProbe | None = None,
    ):
        """Initialize MessageService with dependencies.

        Args:
            store: The forum store
            guards: Process-wide mutation guard registry
            id_generator: Source of new identifiers (random by default)
            clock: Returns the current time in epoch seconds
            probe: Optional domain probe for observability
        """
        self._store = store
        self._guards = guards
        self._id_generator = id_generator or RandomIdentifierGenerator()
        self._clock = clock
        self._validator = ReferentialIntegrityValidator(store)
        self._probe = probe or DefaultMessageServiceProbe()

    def create_message(
        self,
        caller: EntityId,
        content: str,
        image_url: str,
        thread_id: EntityId,
    ) -> OperationResult | OperationError:
        """Append a message to the end of a thread.

        The fetch, append and write back of the thread's sequence happen in
        one transaction, so the sequence is never left half-updated.

        Args:
            caller: Identity of the author
            content: Message text
            image_url: Attached image, must start with ipfs://
            thread_id: Thread to post in

        Returns:
            OperationResult with the new message id, or OperationError
            (VALIDATION for a bad image url or an unknown thread)
        """
        with self._guards.guard(MutationKind.CREATING_MESSAGE):
            try:
                with self._store.transaction():
                    self._validator.ensure_ipfs_image_url(image_url)
                    self._validator.ensure_thread_exists(thread_id)

                    thread_messages = self._store.messages.get(thread_id) or []
                    message_id = self._id_generator.generate()
                    if self._is_issued(message_id):
                        self._probe.identifier_collision(
                            thread_id=str(thread_id), message_id=str(message_id)
                        )
                        raise IdentifierCollisionError(
                            f"Generated identifier {message_id} already exists"
                        )

                    message = Message(
                        id=message_id,
                        content=content,
                        timestamp=self._clock(),
                        image_url=image_url,
                        user_id=caller,
                        thread_id=thread_id,
                    )
                    self._store.messages.insert(
                        thread_id, [*thread_messages, message]
                    )
            except ForumValidationError as e:
                self._probe.message_rejected(thread_id=str(thread_id), reason=str(e))
                return operation_error(e)
            except ConflictError as e:
                return operation_error(e)
            except Exception as e:
                self._probe.message_creation_failed(
                    thread_id=str(thread_id), error=str(e)
                )
                return operation_error(e)

        self._probe.message_created(
            message_id=str(message.id),
            thread_id=str(thread_id),
            user_id=str(caller),
            position=len(thread_messages),
        )
        return OperationResult(message="Message created", entity_id=str(message.id))

    def _is_issued(self, message_id: EntityId) -> bool:
        """Whether any thread already holds a message with this id."""
        return any(
            message.id == message_id
            for _, thread_messages in self._store.messages.items()
            for message in thread_messages
        )
