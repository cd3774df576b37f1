"""Domain probe for keyed store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to reads and writes of the keyed
collections and the transactions around them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class StoreProbe(Protocol):
    """Domain probe for keyed store operations.

    Records domain events during store reads and writes.
    """

    def entry_inserted(self, namespace: str, key: str, replaced: bool) -> None:
        """Record that an entry was written."""
        ...

    def entry_removed(self, namespace: str, key: str) -> None:
        """Record that an entry was deleted."""
        ...

    def entry_retrieved(self, namespace: str, key: str) -> None:
        """Record that an entry was read."""
        ...

    def entry_not_found(self, namespace: str, key: str) -> None:
        """Record that a lookup found no entry."""
        ...

    def store_access_failed(self, namespace: str, action: str, error: str) -> None:
        """Record that the database failed during a collection operation."""
        ...

    def transaction_rolled_back(self, error: str) -> None:
        """Record that a unit of work was discarded."""
        ...

    def with_context(self, context: ObservationContext) -> StoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreProbe:
    """Default implementation of StoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreProbe(logger=self._logger, context=context)

    def entry_inserted(self, namespace: str, key: str, replaced: bool) -> None:
        """Record that an entry was written."""
        self._logger.info(
            "store_entry_inserted",
            namespace=namespace,
            key=key,
            replaced=replaced,
            **self._get_context_kwargs(),
        )

    def entry_removed(self, namespace: str, key: str) -> None:
        """Record that an entry was deleted."""
        self._logger.info(
            "store_entry_removed",
            namespace=namespace,
            key=key,
            **self._get_context_kwargs(),
        )

    def entry_retrieved(self, namespace: str, key: str) -> None:
        """Record that an entry was read."""
        self._logger.debug(
            "store_entry_retrieved",
            namespace=namespace,
            key=key,
            **self._get_context_kwargs(),
        )

    def entry_not_found(self, namespace: str, key: str) -> None:
        """Record that a lookup found no entry."""
        self._logger.debug(
            "store_entry_not_found",
            namespace=namespace,
            key=key,
            **self._get_context_kwargs(),
        )

    def store_access_failed(self, namespace: str, action: str, error: str) -> None:
        """Record that the database failed during a collection operation."""
        self._logger.error(
            "store_access_failed",
            namespace=namespace,
            action=action,
            error=error,
            **self._get_context_kwargs(),
        )

    def transaction_rolled_back(self, error: str) -> None:
        """Record that a unit of work was discarded."""
        self._logger.warning(
            "store_transaction_rolled_back",
            error=error,
            **self._get_context_kwargs(),
        )
