"""Aggregate codecs for store persistence.

Each namespace of the store holds one kind of value. A codec converts that
value to a JSON-compatible payload for the payload column and reconstructs
it on read. Identifiers are stored in their textual form so payloads stay
readable when inspecting the database.
"""

from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar

from forum.domain.aggregates import Forum, Message, Thread, User
from forum.domain.value_objects import EntityId, Role

V = TypeVar("V")


class EntryCodec(Protocol[V]):
    """Converts stored values to and from JSON payloads."""

    def encode(self, value: V) -> Any:
        """Convert a value to a JSON-serializable payload."""
        ...

    def decode(self, payload: Any) -> V:
        """Reconstruct a value from its payload.

        Raises:
            ValueError: If the payload is malformed
        """
        ...


class ForumCodec:
    """Codec for Forum aggregates."""

    def encode(self, value: Forum) -> dict[str, Any]:
        return {
            "id": str(value.id),
            "name": value.name,
            "description": value.description,
        }

    def decode(self, payload: dict[str, Any]) -> Forum:
        try:
            return Forum(
                id=EntityId.from_string(payload["id"]),
                name=payload["name"],
                description=payload["description"],
            )
        except KeyError as e:
            raise ValueError(f"Forum payload missing field: {e}") from e


class ThreadCodec:
    """Codec for Thread aggregates."""

    def encode(self, value: Thread) -> dict[str, Any]:
        return {
            "id": str(value.id),
            "name": value.name,
            "description": value.description,
            "forum_id": str(value.forum_id),
        }

    def decode(self, payload: dict[str, Any]) -> Thread:
        try:
            return Thread(
                id=EntityId.from_string(payload["id"]),
                name=payload["name"],
                description=payload["description"],
                forum_id=EntityId.from_string(payload["forum_id"]),
            )
        except KeyError as e:
            raise ValueError(f"Thread payload missing field: {e}") from e


class MessageCodec:
    """Codec for a single Message aggregate."""

    def encode(self, value: Message) -> dict[str, Any]:
        return {
            "id": str(value.id),
            "content": value.content,
            "timestamp": value.timestamp,
            "image_url": value.image_url,
            "user_id": str(value.user_id),
            "thread_id": str(value.thread_id),
        }

    def decode(self, payload: dict[str, Any]) -> Message:
        try:
            return Message(
                id=EntityId.from_string(payload["id"]),
                content=payload["content"],
                timestamp=int(payload["timestamp"]),
                image_url=payload["image_url"],
                user_id=EntityId.from_string(payload["user_id"]),
                thread_id=EntityId.from_string(payload["thread_id"]),
            )
        except KeyError as e:
            raise ValueError(f"Message payload missing field: {e}") from e


class SequenceCodec(Generic[V]):
    """Codec for an ordered list of values, preserving element order."""

    def __init__(self, element_codec: EntryCodec[V]):
        self._element_codec = element_codec

    def encode(self, value: list[V]) -> list[Any]:
        return [self._element_codec.encode(element) for element in value]

    def decode(self, payload: list[Any]) -> list[V]:
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list payload, got {type(payload).__name__}")
        return [self._element_codec.decode(element) for element in payload]


class UserCodec:
    """Codec for User aggregates."""

    def encode(self, value: User) -> dict[str, Any]:
        return {
            "id": str(value.id),
            "name": value.name,
            "avatar": value.avatar,
            "role": value.role.value,
        }

    def decode(self, payload: dict[str, Any]) -> User:
        try:
            return User(
                id=EntityId.from_string(payload["id"]),
                name=payload["name"],
                avatar=payload["avatar"],
                role=Role(payload["role"]),
            )
        except KeyError as e:
            raise ValueError(f"User payload missing field: {e}") from e
