"""Forum aggregate."""

from __future__ import annotations

from dataclasses import dataclass

from forum.domain.value_objects import EntityId


@dataclass(frozen=True)
class Forum:
    """Top-level discussion category.

    Forums are created explicitly and never change afterwards.
    """

    id: EntityId
    name: str
    description: str

    def __str__(self) -> str:
        """Return string representation."""
        return f"Forum({self.name})"
