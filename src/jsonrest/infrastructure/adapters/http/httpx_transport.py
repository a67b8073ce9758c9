from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from jsonrest.application.ports.transport_port import TransportPort, TransportResponse


class HttpxTransport(TransportPort):
    supported_schemes = frozenset({"http", "https"})

    def __init__(self, client: httpx.Client | None = None, *, timeout: float = 45.0) -> None:
        """Transport adapter backed by a persistent httpx.Client.

        - Persists cookies across requests automatically (cookie jar)
        - Follows redirects
        - Any httpx.Client subclass can be injected, including in-process test clients

        Args:
            client (httpx.Client | None, optional): Client to use. Defaults to a new one.
            timeout (float, optional): Timeout for a client created here. Defaults to 45.0.
        """
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        content: bytes | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        """Sends one request.

        Args:
            method (str): HTTP verb.
            url (str): Absolute URL, query string included.
            headers (Mapping[str, str]): Headers to send.
            content (bytes | None, optional): Request body. Defaults to None.
            timeout (float | None, optional): Per-request timeout. Defaults to the client's.

        Returns:
            TransportResponse: Status, body, final URL and headers.
        """
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        resp = self._client.request(method, url, headers=dict(headers), content=content, **kwargs)
        return TransportResponse(resp.status_code, resp.content, str(resp.url), resp.headers)

    def set_cookies(self, cookies: Mapping[str, str]) -> None:
        """Sets cookies in the client.

        Args:
            cookies (Mapping[str, str]): Cookies to set.
        """
        self._client.cookies.update(dict(cookies))

    def dump_cookies(self) -> dict[str, str]:
        """Dumps cookies from the client.

        Returns:
            dict[str, str]: Cookies from the client.
        """
        return dict(self._client.cookies)

    def close(self) -> None:
        self._client.close()
