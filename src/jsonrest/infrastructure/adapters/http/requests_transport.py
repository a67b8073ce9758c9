from __future__ import annotations

from collections.abc import Mapping

import requests

from jsonrest.application.ports.transport_port import TransportPort, TransportResponse
from jsonrest.log import get_logger

logger = get_logger()


class RequestsTransport(TransportPort):
    """Transport adapter backed by a persistent requests.Session.

    - Persists cookies across requests automatically (cookie jar)
    - Exposes dump_cookies/set_cookies to comply with the port
    - Lets requests exceptions propagate untouched
    """

    supported_schemes = frozenset({"http", "https"})

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()

    def _log(self, msg: str) -> None:
        logger.debug("[RequestsTransport] %s", msg)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: bytes | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        self._log(f"{method} {url} | cookies: {list(self.session.cookies.get_dict().keys())}")
        resp = self.session.request(method, url, headers=dict(headers), data=content, timeout=timeout)
        set_cookie = resp.headers.get("Set-Cookie", "")
        if set_cookie:
            self._log(f"{method} {url} | Set-Cookie: {set_cookie[:240]}...")
        return TransportResponse(resp.status_code, resp.content, str(resp.url), resp.headers)

    def set_cookies(self, cookies: Mapping[str, str]) -> None:
        self.session.cookies.update(dict(cookies))
        self._log(f"set_cookies -> now: {list(self.session.cookies.get_dict().keys())}")

    def dump_cookies(self) -> dict[str, str]:
        return self.session.cookies.get_dict()

    def close(self) -> None:
        self.session.close()
