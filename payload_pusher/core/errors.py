"""Error taxonomy for failed pushes."""

from __future__ import annotations

__all__ = [
    "AddressUnparseableError",
    "DeadlineExceededError",
    "PushError",
    "ReadFailedError",
    "RemoteRejectedError",
    "RequestBuildError",
    "SendFailedError",
]


class PushError(Exception):
    """Base class for every push failure.

    Carries enough context to diagnose the failure without re-deriving it.

    Attributes:
        method: HTTP method of the failed push.
        target: Target URL of the failed push.
        status_code: Response status when one was received, else None.
        cause: Underlying exception, if any.
    """

    reason = "push failed"

    def __init__(
        self,
        method: str,
        target: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.method = method
        self.target = target
        self.status_code = status_code
        self.cause = cause
        super().__init__(self._describe())

    def _describe(self) -> str:
        message = f"{self.method} {self.target} {self.reason}"
        if self.cause is not None:
            message = f"{message}: {self.cause!r}"
        return message


class AddressUnparseableError(PushError):
    """Target URL cannot be parsed or is not an absolute URL."""

    reason = "target is not parseable"


class RequestBuildError(PushError):
    """Request could not be constructed (invalid method, malformed URL)."""

    reason = "new request failed"


class SendFailedError(PushError):
    """Network or transport failure (DNS, connect, reset)."""

    reason = "request failed"


class DeadlineExceededError(SendFailedError):
    """The per-push deadline elapsed before the call completed."""

    reason = "deadline exceeded"


class ReadFailedError(PushError):
    """Response body could not be fully consumed."""

    reason = "read response failed"


class RemoteRejectedError(PushError):
    """Remote endpoint answered with a status code >= 300."""

    def _describe(self) -> str:
        return f"{self.method} {self.target} returned status-code {self.status_code}"
