"""Header application for outbound pushes."""

import re
from collections.abc import Mapping

from multidict import CIMultiDict

from payload_pusher.ports.settings import HeaderValues

__all__ = ["HTTP_TOKEN_RE", "build_headers"]

# RFC 9110 token, the grammar of an HTTP method
HTTP_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def build_headers(headers: Mapping[str, HeaderValues]) -> CIMultiDict[str]:
    """Flatten configured headers into a multi-value header set.

    A single value sets the header. For several values the first one
    replaces any default and the rest are appended, so every value is sent.

    Args:
        headers: Header name mapped to one value or a sequence of values.

    Returns:
        Case-insensitive multi-dict ready to hand to aiohttp.
    """
    result: CIMultiDict[str] = CIMultiDict()
    for name, values in headers.items():
        if isinstance(values, str):
            result[name] = values
            continue
        for i, value in enumerate(values):
            if i > 0:
                result.add(name, value)
            else:
                result[name] = value
    return result
