"""Protocol for mutation guard observability.

Defines the interface for domain probes that capture when update
operations enter and leave their in-flight state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class MutationGuardProbe(Protocol):
    """Domain probe for mutation guard transitions."""

    def mutation_started(self, kind: str) -> None:
        """Record that a mutation of this kind entered its guarded block."""
        ...

    def mutation_finished(self, kind: str, raised: bool) -> None:
        """Record that a mutation left its guarded block and its flag was cleared."""
        ...

    def mutation_overlap_detected(self, kind: str, depth: int) -> None:
        """Record that a mutation started while another of its kind was in flight."""
        ...

    def with_context(self, context: ObservationContext) -> MutationGuardProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMutationGuardProbe:
    """Default implementation of MutationGuardProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMutationGuardProbe:
        """Create a new probe with observation context bound."""
        return DefaultMutationGuardProbe(logger=self._logger, context=context)

    def mutation_started(self, kind: str) -> None:
        self._logger.debug(
            "mutation_started",
            kind=kind,
            **self._get_context_kwargs(),
        )

    def mutation_finished(self, kind: str, raised: bool) -> None:
        self._logger.debug(
            "mutation_finished",
            kind=kind,
            raised=raised,
            **self._get_context_kwargs(),
        )

    def mutation_overlap_detected(self, kind: str, depth: int) -> None:
        # Calls are serialized by the host, so this indicates re-entrancy
        self._logger.warning(
            "mutation_overlap_detected",
            kind=kind,
            depth=depth,
            **self._get_context_kwargs(),
        )
