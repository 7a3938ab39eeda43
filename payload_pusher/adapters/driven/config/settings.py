"""Configuration loading from environment variables."""

import json
import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

from payload_pusher.adapters.driven.http.headers import HTTP_TOKEN_RE
from payload_pusher.ports.settings import PushConfig

__all__ = ["Settings", "load_settings"]

load_dotenv()

logger = logging.getLogger(__name__)
_http_url_adapter = TypeAdapter(HttpUrl)


class Settings(BaseModel):
    """Runtime configuration for the pusher.

    Attributes:
        target_url: HTTP endpoint that receives payloads.
        method: HTTP method used for every push.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        headers: Header name mapped to one value or a list of values.
        timeout_sec: Deadline for a single push in seconds (must be positive).
    """

    target_url: str = Field(..., description="HTTP endpoint that receives payloads.")
    method: str = Field(default="POST", description="HTTP method used for every push.")
    username: str | None = Field(default=None, description="Basic-auth username.")
    password: str | None = Field(default=None, description="Basic-auth password.")
    headers: dict[str, str | list[str]] = Field(
        default_factory=dict,
        description="Headers to send; a list sends several values for one name.",
    )
    timeout_sec: float = Field(default=10.0, gt=0, description="Per-push timeout in seconds.")

    @field_validator("target_url")
    @classmethod
    def validate_target_url(cls, v: str) -> str:
        """Validate that target is a valid HTTP(S) URL.

        Args:
            v: Target URL to validate.

        Returns:
            The validated URL, unchanged.

        Raises:
            ValueError: If URL is invalid or not http(s).
        """
        try:
            url = _http_url_adapter.validate_python(v)
            if url.scheme not in ("http", "https"):
                raise ValueError("Only http:// and https:// endpoints allowed")
        except Exception as e:
            raise ValueError(f"Invalid target URL: {e}") from e
        return v

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Validate that method is a non-empty HTTP token and upper-case it.

        Raises:
            ValueError: If method is empty or contains illegal characters.
        """
        if not HTTP_TOKEN_RE.fullmatch(v):
            raise ValueError(f"Invalid HTTP method: {v!r}")
        return v.upper()

    def to_config(self) -> PushConfig:
        """Wrap settings into the port consumed by pushers.

        Returns:
            Immutable push configuration.
        """
        return PushConfig(
            target_url=self.target_url,
            method=self.method,
            username=self.username,
            password=self.password,
            headers=dict(self.headers),
            timeout_sec=self.timeout_sec,
        )


def _parse_headers(raw: str | None) -> dict[str, str | list[str]]:
    """Decode the PUSH_HEADERS JSON object.

    Raises:
        RuntimeError: If the value is not a JSON object.
    """
    if not raw:
        return {}
    try:
        headers = json.loads(raw)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"PUSH_HEADERS must be a JSON object (got: {raw})") from e
    if not isinstance(headers, dict):
        raise RuntimeError(f"PUSH_HEADERS must be a JSON object (got: {raw})")
    return headers


def load_settings() -> Settings:
    """Load and validate settings from environment.

    Required environment variables:
    - PUSH_TARGET_URL: Valid HTTP(S) URL of the endpoint.

    Optional:
    - PUSH_METHOD: HTTP method (default POST).
    - PUSH_USERNAME / PUSH_PASSWORD: Basic-auth credentials.
    - PUSH_HEADERS: JSON object, values are strings or lists of strings.
    - PUSH_TIMEOUT_SECONDS: Positive number (default 10).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If required env vars missing or invalid.
        ValueError: If configuration is invalid.
    """
    try:
        target_url = os.environ["PUSH_TARGET_URL"]
    except KeyError as e:
        raise RuntimeError(f"Missing required environment variable: {e.args[0]}") from e

    timeout_raw = os.getenv("PUSH_TIMEOUT_SECONDS", "10")
    try:
        timeout_sec = float(timeout_raw)
        if timeout_sec <= 0:
            raise ValueError("Must be positive")
    except ValueError as e:
        raise RuntimeError(
            f"PUSH_TIMEOUT_SECONDS must be a positive number (got: {timeout_raw})"
        ) from e

    settings = Settings(
        target_url=target_url,
        method=os.getenv("PUSH_METHOD", "POST"),
        username=os.getenv("PUSH_USERNAME") or None,
        password=os.getenv("PUSH_PASSWORD") or None,
        headers=_parse_headers(os.getenv("PUSH_HEADERS")),
        timeout_sec=timeout_sec,
    )

    logger.info(
        f"Pusher configured: {settings.method} {settings.target_url}, "
        f"timeout={settings.timeout_sec}s, "
        f"headers={sorted(settings.headers)}, "
        f"auth={'basic' if settings.username and settings.password else '<disabled>'}"
    )

    return settings
