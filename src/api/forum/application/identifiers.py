"""Default identifier generator backed by the operating system CSPRNG."""

from __future__ import annotations

from forum.domain.value_objects import EntityId
from forum.ports.identifiers import IdentifierGenerator


class RandomIdentifierGenerator(IdentifierGenerator):
    """Generates 29-byte identifiers from the CSPRNG.

    Stateless; one instance can be shared by every service.
    """

    def generate(self) -> EntityId:
        """Produce a new random identifier."""
        return EntityId.generate()
