"""Protocol for forum and thread creation observability.

Defines the interface for domain probes that capture application-level
domain events for the forum service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ForumServiceProbe(Protocol):
    """Domain probe for forum service operations."""

    def forum_created(self, forum_id: str, name: str) -> None:
        """Record that a forum was created."""
        ...

    def thread_created(self, thread_id: str, forum_id: str, name: str) -> None:
        """Record that a thread was created in a forum."""
        ...

    def thread_rejected(self, forum_id: str, reason: str) -> None:
        """Record that a thread was refused (unknown forum)."""
        ...

    def identifier_collision(self, collection: str, entity_id: str) -> None:
        """Record that a generated identifier was already taken."""
        ...

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that an operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> ForumServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultForumServiceProbe:
    """Default implementation of ForumServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultForumServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultForumServiceProbe(logger=self._logger, context=context)

    def forum_created(self, forum_id: str, name: str) -> None:
        """Record that a forum was created."""
        self._logger.info(
            "forum_created",
            forum_id=forum_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def thread_created(self, thread_id: str, forum_id: str, name: str) -> None:
        """Record that a thread was created in a forum."""
        self._logger.info(
            "thread_created",
            thread_id=thread_id,
            forum_id=forum_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def thread_rejected(self, forum_id: str, reason: str) -> None:
        """Record that a thread was refused (unknown forum)."""
        self._logger.warning(
            "thread_rejected",
            forum_id=forum_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def identifier_collision(self, collection: str, entity_id: str) -> None:
        """Record that a generated identifier was already taken."""
        self._logger.error(
            "identifier_collision",
            collection=collection,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that an operation failed unexpectedly."""
        self._logger.error(
            "forum_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
