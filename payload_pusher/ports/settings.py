"""Push configuration port definition (DTO)."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["HeaderValues", "PushConfig"]

HeaderValues = str | Sequence[str]


@dataclass(frozen=True)
class PushConfig:
    """Reusable configuration for an HTTP pusher.

    Decouples the pusher from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        target_url: Endpoint that receives the payload.
        method: HTTP method used for every push (e.g. "POST").
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        headers: Header name mapped to one value or a sequence of values.
            Stored as a read-only copy.
        timeout_sec: Deadline for a single push, in seconds (must be positive).
    """

    target_url: str
    method: str = "POST"
    username: str | None = None
    password: str | None = None
    headers: Mapping[str, HeaderValues] = field(default_factory=dict)
    timeout_sec: float = 10.0

    def __post_init__(self) -> None:
        """Validate the timeout and freeze the headers.

        Raises:
            ValueError: If timeout_sec is not positive.
        """
        if not self.timeout_sec > 0:
            raise ValueError(f"timeout_sec must be positive (got: {self.timeout_sec})")
        frozen = {
            name: values if isinstance(values, str) else tuple(values)
            for name, values in self.headers.items()
        }
        object.__setattr__(self, "headers", MappingProxyType(frozen))
