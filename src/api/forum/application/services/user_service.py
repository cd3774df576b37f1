"""User application service.

Registers caller identities and lets them change their avatar.
"""

from __future__ import annotations

from forum.application.errors import operation_error
from forum.application.mutation_guard import MutationGuards, MutationKind
from forum.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from forum.application.validation import ReferentialIntegrityValidator
from forum.domain.aggregates import User
from forum.domain.value_objects import EntityId, OperationError, OperationResult
from forum.ports.exceptions import (
    EntityNotFoundError,
    UserAlreadyRegisteredError,
)
from forum.ports.repositories import IForumStore


class UserService:
    """Application service for user profiles.

    A profile is keyed by the caller identity, so no identifier is
    generated here and no collision can occur.
    """

    def __init__(
        self,
        store: IForumStore,
        guards: MutationGuards,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            store: The forum store
            guards: Process-wide mutation guard registry
            probe: Optional domain probe for observability
        """
        self._store = store
        self._guards = guards
        self._validator = ReferentialIntegrityValidator(store)
        self._probe = probe or DefaultUserServiceProbe()

    def register(
        self, caller: EntityId, name: str, avatar: str
    ) -> OperationResult | OperationError:
        """Create the caller's profile.

        The first identity ever to register becomes admin.

        Args:
            caller: Identity of the registering caller
            name: Display name
            avatar: Avatar URI

        Returns:
            OperationResult with the caller id, or OperationError
            (CONFLICT if the caller is already registered)
        """
        with self._guards.guard(MutationKind.REGISTERING_USER):
            try:
                with self._store.transaction():
                    if self._store.users.contains_key(caller):
                        raise UserAlreadyRegisteredError("User already exists")

                    user = User.register(
                        caller=caller,
                        name=name,
                        avatar=avatar,
                        is_first=self._store.users.is_empty(),
                    )
                    self._store.users.insert(caller, user)
            except UserAlreadyRegisteredError as e:
                self._probe.registration_rejected(user_id=str(caller), reason=str(e))
                return operation_error(e)
            except Exception as e:
                self._probe.user_operation_failed(
                    operation="register", user_id=str(caller), error=str(e)
                )
                return operation_error(e)

        self._probe.user_registered(user_id=str(user.id), role=user.role.value)
        return OperationResult(
            message=f"User created - {user.id}", entity_id=str(user.id)
        )

    def change_avatar(
        self, caller: EntityId, avatar: str
    ) -> OperationResult | OperationError:
        """Replace the avatar of the caller's profile.

        Name, id and role are left as they are.

        Returns:
            OperationResult, or OperationError (NOT_FOUND if the caller
            has not registered)
        """
        with self._guards.guard(MutationKind.CHANGING_AVATAR):
            try:
                with self._store.transaction():
                    user = self._validator.ensure_user_registered(caller)
                    self._store.users.insert(caller, user.with_avatar(avatar))
            except EntityNotFoundError as e:
                self._probe.avatar_change_rejected(
                    user_id=str(caller), reason=str(e)
                )
                return operation_error(e)
            except Exception as e:
                self._probe.user_operation_failed(
                    operation="change_avatar", user_id=str(caller), error=str(e)
                )
                return operation_error(e)

        self._probe.avatar_changed(user_id=str(caller))
        return OperationResult(message="Avatar updated", entity_id=str(caller))
