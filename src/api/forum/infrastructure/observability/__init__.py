"""Domain-Oriented Observability for forum infrastructure.

Probes for store operations following Domain-Oriented Observability patterns.
"""

from forum.infrastructure.observability.store_probe import (
    DefaultStoreProbe,
    StoreProbe,
)

__all__ = [
    "DefaultStoreProbe",
    "StoreProbe",
]
