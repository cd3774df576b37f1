"""Referential-integrity checks run before any write.

Each check either returns quietly or raises the domain exception that the
calling service turns into an OperationError. Checks read through the
store collections, so inside a transaction they see that transaction's
own writes.
"""

from __future__ import annotations

from forum.domain.aggregates import User
from forum.domain.value_objects import IPFS_URL_PREFIX, EntityId
from forum.ports.exceptions import (
    EntityNotFoundError,
    InvalidImageUrlError,
    ReferencedEntityMissingError,
)
from forum.ports.repositories import IForumStore


class ReferentialIntegrityValidator:
    """Validates foreign keys and field formats against the store."""

    def __init__(self, store: IForumStore):
        self._store = store

    def ensure_forum_exists(self, forum_id: EntityId) -> None:
        """Raise ReferencedEntityMissingError unless forum_id names a forum."""
        if not self._store.forums.contains_key(forum_id):
            raise ReferencedEntityMissingError("Forum does not exist")

    def ensure_thread_exists(self, thread_id: EntityId) -> None:
        """Raise ReferencedEntityMissingError unless thread_id names a thread."""
        if not self._store.threads.contains_key(thread_id):
            raise ReferencedEntityMissingError("Thread does not exist")

    def ensure_user_registered(self, caller: EntityId) -> User:
        """Return the caller's profile.

        Raises:
            EntityNotFoundError: If the caller has not registered
        """
        user = self._store.users.get(caller)
        if user is None:
            raise EntityNotFoundError("User does not exist")
        return user

    @staticmethod
    def ensure_ipfs_image_url(image_url: str) -> None:
        """Raise InvalidImageUrlError unless image_url starts with ipfs://."""
        if not image_url.startswith(IPFS_URL_PREFIX):
            raise InvalidImageUrlError(f"Image url must start with {IPFS_URL_PREFIX}")
