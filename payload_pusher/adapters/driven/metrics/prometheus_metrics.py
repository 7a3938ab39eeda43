"""Prometheus histogram sink for push latency."""

from __future__ import annotations

from prometheus_client import REGISTRY as global_registry
from prometheus_client import CollectorRegistry, Histogram

from payload_pusher.ports.metrics import LatencyObservationDto, MetricsPort

__all__ = ["PrometheusMetrics", "DEFAULT_BUCKETS_MS"]

DEFAULT_BUCKETS_MS = (5, 10, 25, 50, 100, 250, 500, 1_000, 2_500, 5_000, 10_000, 30_000)


class PrometheusMetrics(MetricsPort):
    """Record push latency in a histogram labelled by route, method and status.

    Reuses an already registered histogram of the same name, so several
    pushers in one process share a single collector.
    """

    def __init__(
        self,
        *,
        registry: CollectorRegistry | None = None,
        name: str = "push_request_duration_ms",
        buckets: tuple[float, ...] = DEFAULT_BUCKETS_MS,
    ) -> None:
        """Initialize the histogram.

        Args:
            registry: Registry to register with; the global one by default.
            name: Metric name.
            buckets: Histogram buckets in milliseconds.
        """
        registry = registry or global_registry
        existing = registry._names_to_collectors.get(name)  # type: ignore[attr-defined]
        if existing is not None:
            self.histogram = existing
        else:
            self.histogram = Histogram(
                name,
                "Duration of HTTP pushes in milliseconds",
                ["route", "method", "status"],
                buckets=buckets,
                registry=registry,
            )

    def observe(self, observation: LatencyObservationDto) -> None:
        """Record a finished push.

        Args:
            observation: Push with latency and status info.
        """
        self.histogram.labels(
            route=observation.route,
            method=observation.method,
            status=str(observation.status_code),
        ).observe(observation.elapsed_ms)
