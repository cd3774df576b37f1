"""User aggregate."""

from __future__ import annotations

from dataclasses import dataclass, replace

from forum.domain.value_objects import EntityId, Role


@dataclass(frozen=True)
class User:
    """User profile bound to a caller identity.

    There is exactly one User per identity and its id is that identity.
    Only the avatar may change after registration.
    """

    id: EntityId
    name: str
    avatar: str
    role: Role

    @classmethod
    def register(
        cls, caller: EntityId, name: str, avatar: str, is_first: bool
    ) -> User:
        """Factory method for a newly registered user.

        Args:
            caller: Identity of the registering caller (becomes the user id)
            name: Display name
            avatar: Avatar URI
            is_first: Whether no user has registered before; the first
                registrant becomes admin

        Returns:
            A new User aggregate
        """
        role = Role.ADMIN if is_first else Role.REGULAR_USER
        return cls(id=caller, name=name, avatar=avatar, role=role)

    def with_avatar(self, avatar: str) -> User:
        """Return a copy of this user with only the avatar replaced."""
        return replace(self, avatar=avatar)

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.name})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
