"""Thread aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from forum.domain.value_objects import EntityId


@dataclass(frozen=True)
class Thread:
    """Discussion topic belonging to exactly one forum.

    forum_id must name an existing Forum when the thread is created; the
    application layer validates this before the thread is stored.
    """

    id: EntityId
    name: str
    description: str
    forum_id: EntityId

    def __str__(self) -> str:
        """Return string representation."""
        return f"Thread({self.name})"
