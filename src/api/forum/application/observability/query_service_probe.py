"""Domain probes for the forum read surface.

Following Domain Oriented Observability pattern.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class QueryServiceProbe(Protocol):
    """Domain probe for query service operations."""

    def collection_listed(self, collection: str, count: int) -> None:
        """Record that a whole collection was enumerated."""
        ...

    def entity_retrieved(self, collection: str, entity_id: str) -> None:
        """Record that a single entry was read."""
        ...

    def entity_not_found(self, collection: str, entity_id: str) -> None:
        """Record that a lookup found nothing."""
        ...

    def query_failed(self, query: str, error: str) -> None:
        """Record that a query failed during store access."""
        ...

    def with_context(self, context: ObservationContext) -> QueryServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultQueryServiceProbe:
    """Default implementation using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultQueryServiceProbe:
        return DefaultQueryServiceProbe(logger=self._logger, context=context)

    def collection_listed(self, collection: str, count: int) -> None:
        self._logger.debug(
            "collection_listed",
            collection=collection,
            count=count,
            **self._get_context_kwargs(),
        )

    def entity_retrieved(self, collection: str, entity_id: str) -> None:
        self._logger.debug(
            "entity_retrieved",
            collection=collection,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def entity_not_found(self, collection: str, entity_id: str) -> None:
        self._logger.debug(
            "entity_not_found",
            collection=collection,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def query_failed(self, query: str, error: str) -> None:
        self._logger.error(
            "query_failed",
            query=query,
            error=error,
            **self._get_context_kwargs(),
        )
