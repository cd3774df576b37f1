"""Infrastructure for the forum bounded context.

SQLAlchemy-backed implementations of the store ports.
"""

from forum.infrastructure.keyed_collection import SqlKeyedCollection
from forum.infrastructure.models import StoreEntryModel, StoreNamespace
from forum.infrastructure.store import ForumStore

__all__ = [
    "ForumStore",
    "SqlKeyedCollection",
    "StoreEntryModel",
    "StoreNamespace",
]
