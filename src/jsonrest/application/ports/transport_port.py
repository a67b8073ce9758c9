from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class TransportResponse:
    def __init__(
        self,
        status_code: int,
        content: bytes,
        url: str,
        headers: Mapping[str, str],
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.url = url
        self.headers = dict(headers)


class TransportPort(Protocol):
    """Executes one prepared HTTP exchange (the HTTP client itself stays opaque)."""

    supported_schemes: frozenset[str]

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: bytes | None = None,
        timeout: float | None = None,
    ) -> TransportResponse: ...
    def set_cookies(self, cookies: Mapping[str, str]) -> None: ...
    def dump_cookies(self) -> dict[str, str]: ...
    def close(self) -> None: ...
