"""Domain exceptions for the forum bounded context.

These exceptions represent domain-level errors raised while validating or
persisting entities. Application services catch them and turn them into
structured OperationError values; none of them escapes a service call.
"""


class EntityNotFoundError(Exception):
    """Raised when an entity addressed by id does not exist.

    Used for lookups and for operations on the caller's own profile
    (changing the avatar of an unregistered identity).
    """

    pass


class ForumValidationError(Exception):
    """Base class for rejected input.

    Raised before any write happens, so the store is left untouched.
    """

    pass


class ReferencedEntityMissingError(ForumValidationError):
    """Raised when a foreign key names an entity that does not exist.

    Covers a thread pointing at an unknown forum and a message pointing at
    an unknown thread.
    """

    pass


class InvalidImageUrlError(ForumValidationError):
    """Raised when a message image URL does not point into IPFS."""

    pass


class ConflictError(Exception):
    """Base class for writes that would clash with existing state."""

    pass


class IdentifierCollisionError(ConflictError):
    """Raised when a freshly generated identifier is already in use.

    The operation is aborted rather than retried with another identifier;
    existing entries are never overwritten.
    """

    pass


class UserAlreadyRegisteredError(ConflictError):
    """Raised when the caller identity already has a user profile."""

    pass


class StoreAccessError(Exception):
    """Raised when the underlying database fails during a store operation.

    Wraps driver and ORM errors so the application layer does not depend
    on SQLAlchemy.
    """

    pass
