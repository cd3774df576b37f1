"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class StoreConnectionProbe(Protocol):
    """Domain probe for persistent store connection observability.

    This probe captures domain-significant events related to opening and
    closing the database behind the store without exposing logging
    implementation details.
    """

    def store_opened(self, url: str, in_memory: bool) -> None:
        """Record that the store database was opened."""
        ...

    def store_open_failed(self, url: str, error: Exception) -> None:
        """Record that the store database could not be opened."""
        ...

    def schema_ensured(self, tables: list[str]) -> None:
        """Record that the store tables exist."""
        ...

    def store_closed(self) -> None:
        """Record that the store database was closed."""
        ...

    def with_context(self, context: ObservationContext) -> StoreConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreConnectionProbe:
    """Default implementation of StoreConnectionProbe using structlog.

    Supports observation context for including call-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultStoreConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreConnectionProbe(logger=self._logger, context=context)

    def store_opened(self, url: str, in_memory: bool) -> None:
        """Record that the store database was opened."""
        self._logger.info(
            "store_opened",
            url=url,
            in_memory=in_memory,
            **self._get_context_kwargs(),
        )

    def store_open_failed(self, url: str, error: Exception) -> None:
        """Record that the store database could not be opened."""
        self._logger.error(
            "store_open_failed",
            url=url,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def schema_ensured(self, tables: list[str]) -> None:
        """Record that the store tables exist."""
        self._logger.debug(
            "store_schema_ensured",
            tables=tables,
            **self._get_context_kwargs(),
        )

    def store_closed(self) -> None:
        """Record that the store database was closed."""
        self._logger.info(
            "store_closed",
            **self._get_context_kwargs(),
        )
