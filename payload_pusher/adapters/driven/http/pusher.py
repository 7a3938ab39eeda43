"""HTTP pusher adapter with deadline and metrics integration."""

import asyncio
import logging
import time
from types import TracebackType

import aiohttp
from aiohttp import BasicAuth, ClientTimeout
from yarl import URL

from payload_pusher.adapters.driven.http.headers import HTTP_TOKEN_RE, build_headers
from payload_pusher.core.errors import (
    AddressUnparseableError,
    DeadlineExceededError,
    PushError,
    ReadFailedError,
    RemoteRejectedError,
    RequestBuildError,
    SendFailedError,
)
from payload_pusher.ports.metrics import LatencyObservationDto, MetricsPort
from payload_pusher.ports.pusher import PayloadType
from payload_pusher.ports.settings import PushConfig

__all__ = ["HttpPusher"]

logger = logging.getLogger(__name__)

FIRST_FAILING_HTTP_CODE = 300
# Recorded as the status label when no response was received
NO_RESPONSE_STATUS = 500


class HttpPusher:
    """Push a payload to one HTTP endpoint and return the response body.

    Features:
    - One owned aiohttp session, created once and shared by concurrent pushes.
    - Per-push deadline, basic auth and multi-value headers from PushConfig.
    - Status >= 300 is treated as a failure.
    - One latency observation per push when a metrics sink is configured.

    Exactly one request is issued per push: no retries, no redirects.
    """

    def __init__(self, config: PushConfig, metrics: MetricsPort | None = None) -> None:
        """Initialize HTTP pusher.

        Args:
            config: Target, method, credentials, headers and timeout.
            metrics: Optional sink that receives one latency observation per push.
        """
        self.config = config
        self.metrics = metrics
        self.session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()
        self._closed = False

    async def __aenter__(self) -> "HttpPusher":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        await self._get_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session)."""
        await self.close()

    async def close(self) -> None:
        """Close the session. The pusher cannot be used afterwards."""
        self._closed = True
        if self.session:
            await self.session.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Return the shared session, creating it on first use.

        Raises:
            RuntimeError: If the pusher has been closed.
        """
        if self._closed:
            raise RuntimeError("Pusher is closed; create a new one")
        if self.session is None:
            async with self._session_lock:
                if self.session is None:
                    self.session = aiohttp.ClientSession()
        return self.session

    async def push(self, payload: PayloadType = b"") -> bytes:
        """Send payload to the configured endpoint and return the response body.

        Args:
            payload: Request body; bytes or a readable byte stream, may be empty.

        Returns:
            The fully buffered response body.

        Raises:
            AddressUnparseableError: Target URL is malformed.
            RequestBuildError: Method or request is invalid.
            DeadlineExceededError: The configured timeout elapsed.
            SendFailedError: Network or transport failure.
            ReadFailedError: The response body could not be read.
            RemoteRejectedError: The endpoint answered with status >= 300.
            RuntimeError: If the pusher has been closed.
        """
        started = time.perf_counter()
        route = ""
        status = NO_RESPONSE_STATUS
        try:
            url = self._resolve_target()
            route = url.path
            status, body = await self._send(url, payload)
        finally:
            self._observe(route, status, started)

        if status >= FIRST_FAILING_HTTP_CODE:
            logger.error(
                f"{self.config.method} {self.config.target_url} returned status-code {status}",
                extra=self._log_context(status_code=status),
            )
            logger.error(body.decode("utf-8", errors="replace"), extra=self._log_context())
            raise RemoteRejectedError(
                self.config.method, self.config.target_url, status_code=status
            )

        return body

    def _resolve_target(self) -> URL:
        """Parse the target URL; malformed targets abort the push."""
        try:
            url = URL(self.config.target_url)
        except (TypeError, ValueError) as e:
            raise self._fail(AddressUnparseableError, e) from e
        if not url.is_absolute():
            raise self._fail(AddressUnparseableError, ValueError("URL is not absolute"))
        return url

    async def _send(self, url: URL, payload: PayloadType) -> tuple[int, bytes]:
        """Issue the request and buffer the whole response body.

        Returns:
            Tuple of (status code, body).
        """
        method = self.config.method
        if not HTTP_TOKEN_RE.fullmatch(method):
            raise self._fail(RequestBuildError, ValueError(f"invalid HTTP method {method!r}"))

        session = await self._get_session()
        try:
            # Leaving the context releases the connection and cancels the deadline
            async with session.request(
                method,
                url,
                data=payload,
                headers=build_headers(self.config.headers),
                auth=self._auth(),
                timeout=ClientTimeout(total=self.config.timeout_sec),
                allow_redirects=False,
            ) as resp:
                try:
                    body = await resp.read()
                except asyncio.TimeoutError:
                    raise
                except (aiohttp.ClientError, OSError) as e:
                    raise self._fail(ReadFailedError, e, status_code=resp.status) from e
                return resp.status, body
        except PushError:
            raise
        except asyncio.TimeoutError as e:
            raise self._fail(DeadlineExceededError, e) from e
        except (aiohttp.InvalidURL, ValueError) as e:
            raise self._fail(RequestBuildError, e) from e
        except (aiohttp.ClientError, OSError) as e:
            raise self._fail(SendFailedError, e) from e

    def _auth(self) -> BasicAuth | None:
        """Return basic auth only when both username and password are set."""
        if self.config.username and self.config.password:
            return BasicAuth(self.config.username, self.config.password)
        return None

    def _fail(
        self,
        error_cls: type[PushError],
        cause: BaseException,
        status_code: int | None = None,
    ) -> PushError:
        """Log a classified failure and build the error to raise."""
        error = error_cls(
            self.config.method,
            self.config.target_url,
            status_code=status_code,
            cause=cause,
        )
        logger.error(str(error), extra=self._log_context(error=repr(cause)))
        return error

    def _log_context(self, **fields: object) -> dict[str, object]:
        return {"method": self.config.method, "target": self.config.target_url, **fields}

    def _observe(self, route: str, status: int, started: float) -> None:
        """Record one latency observation if a metrics sink is configured."""
        if self.metrics is None:
            return
        elapsed_ms = int((time.perf_counter() - started) * 1_000)
        self.metrics.observe(
            LatencyObservationDto(
                route=route,
                method=self.config.method,
                status_code=status,
                elapsed_ms=elapsed_ms,
            )
        )
