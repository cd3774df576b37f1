"""In-flight mutation guards.

Every update operation marks itself as in flight for its whole duration.
The marks are diagnostic state: they do not block or queue a second call,
because the host already serializes calls. What they guarantee is that a
mark never stays set after the operation that set it has returned, whatever
the outcome.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum

from forum.application.observability import (
    DefaultMutationGuardProbe,
    MutationGuardProbe,
)


class MutationKind(StrEnum):
    """Kinds of update operations, one guard flag each."""

    CREATING_FORUM = "creatingForum"
    CREATING_THREAD = "creatingThread"
    CREATING_MESSAGE = "creatingMessage"
    REGISTERING_USER = "registeringUser"
    CHANGING_AVATAR = "changingAvatar"


class MutationGuards:
    """Process-wide registry of in-flight flags.

    Created once at startup and shared by every update service. A flag
    reads True while at least one guarded block of its kind is executing.
    Nested entry of the same kind is tracked by depth so the flag only
    clears when the outermost block exits.
    """

    def __init__(self, probe: MutationGuardProbe | None = None) -> None:
        self._probe = probe or DefaultMutationGuardProbe()
        self._depth: dict[MutationKind, int] = {kind: 0 for kind in MutationKind}

    def is_in_flight(self, kind: MutationKind) -> bool:
        """Whether a mutation of this kind is currently executing."""
        return self._depth[kind] > 0

    def snapshot(self) -> dict[MutationKind, bool]:
        """Current value of every flag."""
        return {kind: depth > 0 for kind, depth in self._depth.items()}

    @contextmanager
    def guard(self, kind: MutationKind) -> Iterator[None]:
        """Mark a mutation of this kind as in flight for the enclosed block.

        The flag is cleared on every exit path: normal return, early return
        and exceptions.

        Usage:
            with guards.guard(MutationKind.CREATING_FORUM):
                ...
        """
        if self._depth[kind] > 0:
            self._probe.mutation_overlap_detected(
                kind=kind.value, depth=self._depth[kind]
            )

        self._probe.mutation_started(kind=kind.value)
        self._depth[kind] += 1
        raised = True
        try:
            yield
            raised = False
        finally:
            self._depth[kind] -= 1
            self._probe.mutation_finished(kind=kind.value, raised=raised)
