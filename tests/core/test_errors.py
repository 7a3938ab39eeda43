"""Tests for push error taxonomy."""

import pytest

from payload_pusher.core.errors import (
    AddressUnparseableError,
    DeadlineExceededError,
    PushError,
    ReadFailedError,
    RemoteRejectedError,
    RequestBuildError,
    SendFailedError,
)

__all__ = []


@pytest.mark.parametrize(
    "error_cls",
    [
        AddressUnparseableError,
        RequestBuildError,
        SendFailedError,
        DeadlineExceededError,
        ReadFailedError,
        RemoteRejectedError,
    ],
)
def test_errors_share_base_and_context(error_cls: type[PushError]) -> None:
    """Every error should be a PushError carrying method and target."""
    error = error_cls("POST", "http://x/e")

    assert isinstance(error, PushError)
    assert error.method == "POST"
    assert error.target == "http://x/e"
    assert "POST http://x/e" in str(error)


def test_error_message_includes_cause() -> None:
    """The underlying cause should appear in the message."""
    error = SendFailedError("GET", "http://x/e", cause=ConnectionResetError("reset by peer"))

    assert str(error) == "GET http://x/e request failed: ConnectionResetError('reset by peer')"


def test_deadline_exceeded_is_send_failure() -> None:
    """Deadline errors are a kind of send failure."""
    assert issubclass(DeadlineExceededError, SendFailedError)


def test_remote_rejected_message() -> None:
    """Rejections should embed method, target and status code."""
    error = RemoteRejectedError("POST", "http://example/echo", status_code=503)

    assert str(error) == "POST http://example/echo returned status-code 503"
    assert error.status_code == 503
