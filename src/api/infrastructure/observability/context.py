"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures call-scoped metadata that should be included with all
    instrumentation events, so that every log line emitted while serving
    one operation can be correlated.

    Attributes:
        request_id: Identifier of the call being served, assigned by the host.
        caller_id: Textual identity of the caller (if known).
        operation: Name of the operation being served (e.g. "createThread").
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", operation="register")
        probe = DefaultUserServiceProbe().with_context(context)
    """

    request_id: str | None = None
    caller_id: str | None = None
    operation: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.caller_id is not None:
            result["caller_id"] = self.caller_id
        if self.operation is not None:
            result["operation"] = self.operation
        result.update(self.extra)
        return result

    def with_operation(self, operation: str) -> ObservationContext:
        """Create a new context with the operation name set."""
        return ObservationContext(
            request_id=self.request_id,
            caller_id=self.caller_id,
            operation=operation,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            caller_id=self.caller_id,
            operation=self.operation,
            extra={**self.extra, **kwargs},
        )
