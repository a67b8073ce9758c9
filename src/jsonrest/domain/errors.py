from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonrest.application.response import Response


class RestError(Exception):
    """Base class for every failure raised by jsonrest itself.

    Transport failures are not wrapped: they surface as the transport
    library's own exceptions.
    """


class InvalidURLError(RestError, ValueError):
    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class UnmarshalableTypeError(RestError, TypeError):
    """Payload cannot be represented as JSON."""


class DecodeError(RestError, json.JSONDecodeError):
    """Body is not valid JSON, or does not fit the requested result target.

    Also a ``json.JSONDecodeError``, so either kind of handler catches it.
    """

    def __init__(self, msg: str, doc: str = "", pos: int = 0) -> None:
        ValueError.__init__(self, msg)
        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.lineno = doc.count("\n", 0, pos) + 1
        self.colno = pos - doc.rfind("\n", 0, pos)


class UnexpectedStatusError(RestError):
    """Status differs from ``Options.expected_status``.

    The populated response stays reachable through ``response``.
    """

    def __init__(self, response: Response, expected: int) -> None:
        super().__init__(f"unexpected status: expected {expected}, got {response.status()}")
        self.response = response
        self.expected = expected
        self.actual = response.status()
