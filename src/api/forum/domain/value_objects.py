"""Value objects for the forum domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers, roles and operation outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from shared_kernel.identifiers import (
    MAX_OPAQUE_ID_LENGTH,
    decode_opaque_id,
    encode_opaque_id,
    random_opaque_id,
)

IPFS_URL_PREFIX = "ipfs://"

MAX_TIMESTAMP = 2**64 - 1


@dataclass(frozen=True, order=True)
class EntityId:
    """Opaque identifier for forums, threads, messages and users.

    Forums, threads and messages get a freshly generated 29-byte value.
    Users are keyed by the caller identity supplied by the host, which uses
    the same representation. Ordering follows the raw bytes, which is the
    order the store enumerates keys in.
    """

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) > MAX_OPAQUE_ID_LENGTH:
            raise ValueError(
                f"EntityId is {len(self.value)} bytes, "
                f"at most {MAX_OPAQUE_ID_LENGTH} allowed"
            )

    def __str__(self) -> str:
        """Return the checksummed textual form."""
        return encode_opaque_id(self.value)

    def __repr__(self) -> str:
        return f"EntityId({self})"

    @classmethod
    def generate(cls) -> EntityId:
        """Generate a new random EntityId."""
        return cls(value=random_opaque_id())

    @classmethod
    def from_bytes(cls, raw: bytes) -> EntityId:
        """Wrap raw identity bytes, such as a caller identity from the host."""
        return cls(value=bytes(raw))

    @classmethod
    def from_string(cls, value: str) -> EntityId:
        """Create EntityId from its textual form.

        Args:
            value: Dash-grouped base32 text

        Returns:
            EntityId instance

        Raises:
            ValueError: If value is not a valid identifier text
        """
        try:
            raw = decode_opaque_id(value)
        except ValueError as e:
            raise ValueError(f"Invalid EntityId: {value}") from e

        return cls(value=raw)


class Role(StrEnum):
    """Role of a registered user.

    The first user to register becomes the admin; everyone else is a
    regular user.
    """

    REGULAR_USER = "regular_user"
    ADMIN = "admin"


class ErrorType(StrEnum):
    """Category of a failed operation."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation_error"
    CONFLICT = "conflict"
    UNEXPECTED = "unexpected"


class OperationResult(BaseModel):
    """Outcome of a successful update operation.

    Attributes:
        message: Human-readable confirmation (e.g. "Forum created - <id>")
        entity_id: Textual id of the created or updated entity, if any
    """

    model_config = ConfigDict(frozen=True)

    message: str
    entity_id: str | None = None


class OperationError(BaseModel):
    """Structured error returned instead of raising.

    Attributes:
        error_type: Category of error (not found, validation, conflict, unexpected)
        message: Short human-readable error message
    """

    model_config = ConfigDict(frozen=True)

    error_type: ErrorType
    message: str
