"""Protocol for user profile observability.

Defines the interface for domain probes that capture application-level
domain events for registration and avatar changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user service operations."""

    def user_registered(self, user_id: str, role: str) -> None:
        """Record that a caller registered a profile."""
        ...

    def registration_rejected(self, user_id: str, reason: str) -> None:
        """Record that a registration was refused."""
        ...

    def avatar_changed(self, user_id: str) -> None:
        """Record that a user replaced their avatar."""
        ...

    def avatar_change_rejected(self, user_id: str, reason: str) -> None:
        """Record that an avatar change was refused."""
        ...

    def user_operation_failed(self, operation: str, user_id: str, error: str) -> None:
        """Record that a user operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_registered(self, user_id: str, role: str) -> None:
        """Record that a caller registered a profile."""
        self._logger.info(
            "user_registered",
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def registration_rejected(self, user_id: str, reason: str) -> None:
        """Record that a registration was refused."""
        self._logger.warning(
            "registration_rejected",
            user_id=user_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def avatar_changed(self, user_id: str) -> None:
        """Record that a user replaced their avatar."""
        self._logger.info(
            "avatar_changed",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def avatar_change_rejected(self, user_id: str, reason: str) -> None:
        """Record that an avatar change was refused."""
        self._logger.warning(
            "avatar_change_rejected",
            user_id=user_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def user_operation_failed(self, operation: str, user_id: str, error: str) -> None:
        """Record that a user operation failed unexpectedly."""
        self._logger.error(
            "user_operation_failed",
            operation=operation,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
