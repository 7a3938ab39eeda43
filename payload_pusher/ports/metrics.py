"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["LatencyObservationDto", "MetricsPort"]


@dataclass(slots=True, frozen=True)
class LatencyObservationDto:
    """Immutable snapshot of a single push.

    Attributes:
        route: Path component of the target URL ("" when unresolved).
        method: HTTP method of the push.
        status_code: Response status, or 500 when no response was received.
        elapsed_ms: Wall-clock duration of the push in whole milliseconds.
    """

    route: str
    method: str
    status_code: int
    elapsed_ms: int


class MetricsPort(Protocol):
    """Interface for recording push latency.

    Implementations must be async-safe and non-blocking.
    Pushers call observe() exactly once per push.
    """

    def observe(self, observation: LatencyObservationDto, /) -> None:
        """Record a finished push.

        Args:
            observation: The push to record.
        """
        ...
