"""Ports (interfaces) for the forum bounded context.

Ports define the contracts for the store and identifier generation without
specifying implementation details. This keeps the domain and application
layers independent of SQLAlchemy.
"""

from forum.ports.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ForumValidationError,
    IdentifierCollisionError,
    InvalidImageUrlError,
    ReferencedEntityMissingError,
    StoreAccessError,
    UserAlreadyRegisteredError,
)
from forum.ports.identifiers import IdentifierGenerator
from forum.ports.repositories import IForumStore, IKeyedCollection

__all__ = [
    "ConflictError",
    "EntityNotFoundError",
    "ForumValidationError",
    "IForumStore",
    "IKeyedCollection",
    "IdentifierCollisionError",
    "IdentifierGenerator",
    "InvalidImageUrlError",
    "ReferencedEntityMissingError",
    "StoreAccessError",
    "UserAlreadyRegisteredError",
]
