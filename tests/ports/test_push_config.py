"""Tests for the push configuration port."""

import math

import pytest

from payload_pusher.ports.settings import PushConfig

__all__ = []


@pytest.mark.parametrize("timeout_sec", [0, -1, math.nan])
def test_push_config_rejects_non_positive_timeout(timeout_sec: float) -> None:
    """A push without a real deadline could hang; such configs are refused."""
    with pytest.raises(ValueError, match="timeout_sec must be positive"):
        PushConfig(target_url="http://localhost:8000/slow", timeout_sec=timeout_sec)


def test_push_config_accepts_small_timeout() -> None:
    """Any positive timeout is a valid deadline."""
    assert PushConfig(target_url="http://localhost/e", timeout_sec=0.001).timeout_sec == 0.001


def test_push_config_headers_are_a_snapshot() -> None:
    """Mutating the caller's mapping after construction leaves the config untouched."""
    tags = ["a", "b"]
    headers = {"X-Tag": tags, "Accept": "text/plain"}
    config = PushConfig(target_url="http://localhost/e", headers=headers)

    headers["Accept"] = "application/json"
    headers["X-Extra"] = "1"
    tags.append("c")

    assert dict(config.headers) == {"X-Tag": ("a", "b"), "Accept": "text/plain"}


def test_push_config_headers_are_read_only() -> None:
    """Headers cannot be changed through the config."""
    config = PushConfig(target_url="http://localhost/e", headers={"Accept": "text/plain"})

    with pytest.raises(TypeError):
        config.headers["Accept"] = "application/json"  # type: ignore[index]
