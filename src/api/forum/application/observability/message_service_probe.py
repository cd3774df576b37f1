"""Protocol for message posting observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class MessageServiceProbe(Protocol):
    """Domain probe for message service operations."""

    def message_created(
        self, message_id: str, thread_id: str, user_id: str, position: int
    ) -> None:
        """Record that a message was appended to a thread."""
        ...

    def message_rejected(self, thread_id: str, reason: str) -> None:
        """Record that a message was refused (bad image URL or unknown thread)."""
        ...

    def identifier_collision(self, thread_id: str, message_id: str) -> None:
        """Record that a generated message id was already issued to a message."""
        ...

    def message_creation_failed(self, thread_id: str, error: str) -> None:
        """Record that posting failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> MessageServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMessageServiceProbe:
    """Default implementation of MessageServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultMessageServiceProbe:
        return DefaultMessageServiceProbe(logger=self._logger, context=context)

    def message_created(
        self, message_id: str, thread_id: str, user_id: str, position: int
    ) -> None:
        self._logger.info(
            "message_created",
            message_id=message_id,
            thread_id=thread_id,
            user_id=user_id,
            position=position,
            **self._get_context_kwargs(),
        )

    def message_rejected(self, thread_id: str, reason: str) -> None:
        self._logger.warning(
            "message_rejected",
            thread_id=thread_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def identifier_collision(self, thread_id: str, message_id: str) -> None:
        self._logger.error(
            "message_identifier_collision",
            thread_id=thread_id,
            message_id=message_id,
            **self._get_context_kwargs(),
        )

    def message_creation_failed(self, thread_id: str, error: str) -> None:
        self._logger.error(
            "message_creation_failed",
            thread_id=thread_id,
            error=error,
            **self._get_context_kwargs(),
        )
