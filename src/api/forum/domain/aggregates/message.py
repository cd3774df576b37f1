"""Message aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from forum.domain.value_objects import MAX_TIMESTAMP, EntityId


@dataclass(frozen=True)
class Message:
    """A single post in a thread, authored by one user.

    Business rules:
    - timestamp is whole seconds since the epoch and fits in 64 unsigned bits
    - user_id is the identity of the caller that posted the message
    - messages of a thread are kept in the order they were posted, which may
      differ from timestamp order under clock skew
    """

    id: EntityId
    content: str
    timestamp: int
    image_url: str
    user_id: EntityId
    thread_id: EntityId

    def __post_init__(self) -> None:
        if not 0 <= self.timestamp <= MAX_TIMESTAMP:
            raise ValueError(
                f"timestamp must be an unsigned 64-bit value, got {self.timestamp}"
            )
