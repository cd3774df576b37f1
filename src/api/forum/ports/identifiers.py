"""Identifier generation port for the forum bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from forum.domain.value_objects import EntityId


@runtime_checkable
class IdentifierGenerator(Protocol):
    """Source of fresh primary keys for new forums, threads and messages."""

    def generate(self) -> EntityId:
        """Produce a new identifier.

        Uniqueness is probabilistic. Callers must check the target
        collection before inserting under the returned key.
        """
        ...

