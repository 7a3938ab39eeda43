"""Pusher port definition (interface)."""

from __future__ import annotations

from collections.abc import AsyncIterable
from typing import BinaryIO, Protocol, Union

__all__ = ["PayloadType", "PusherPort"]

PayloadType = Union[bytes, bytearray, BinaryIO, AsyncIterable[bytes]]


class PusherPort(Protocol):
    """Interface for delivering one payload to one destination.

    Callers depend on this protocol only, so an HTTP pusher can be swapped
    for another transport (a message queue, a test double) unchanged.
    """

    async def push(self, payload: PayloadType = b"", /) -> bytes:
        """Deliver a payload and return the destination's reply.

        Args:
            payload: Bytes or a readable byte stream; may be empty.

        Returns:
            The fully buffered reply body.

        Raises:
            PushError: If the payload could not be delivered.
        """
        ...
