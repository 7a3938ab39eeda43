"""Composition root: wire configuration and metrics into a pusher."""

import logging

from payload_pusher.adapters.driven.config.settings import load_settings
from payload_pusher.adapters.driven.http.pusher import HttpPusher
from payload_pusher.ports.metrics import MetricsPort
from payload_pusher.ports.settings import PushConfig

__all__ = ["build_pusher"]

logger = logging.getLogger(__name__)


def build_pusher(
    config: PushConfig | None = None,
    metrics: MetricsPort | None = None,
) -> HttpPusher:
    """Build an HTTP pusher.

    Args:
        config: Push configuration; loaded from the environment when omitted.
        metrics: Optional latency sink.

    Returns:
        A pusher ready to be used with ``async with``.

    Raises:
        RuntimeError: If required env vars are missing or invalid.
        ValueError: If configuration is invalid.
    """
    if config is None:
        config = load_settings().to_config()

    logger.debug(
        f"Building pusher for {config.method} {config.target_url} "
        f"(metrics={'on' if metrics is not None else 'off'})"
    )
    return HttpPusher(config, metrics=metrics)
