from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from typing import Any

from requests.structures import CaseInsensitiveDict

from jsonrest.application.codec import JSON_CONTENT_TYPE, marshal
from jsonrest.application.ports.transport_port import TransportPort
from jsonrest.application.response import Response
from jsonrest.application.urls import build_url
from jsonrest.config import settings
from jsonrest.domain.errors import UnexpectedStatusError
from jsonrest.domain.model import Options, Params, Request
from jsonrest.infrastructure.adapters.http.requests_transport import RequestsTransport
from jsonrest.log import get_logger

logger = get_logger()

_MASKED = ("authorization", "proxy-authorization", "cookie")


def _pretty(body: bytes) -> str:
    try:
        return json.dumps(json.loads(body), indent=2, sort_keys=True)
    except ValueError:
        return body.decode("utf-8", errors="replace")


class Session:
    """Shared configuration for a series of JSON requests.

    Headers are configure-once, read-many: they are copied into each request
    and must not be mutated while requests are in flight.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        *,
        log: bool | None = None,
        transport: TransportPort | None = None,
        auth: tuple[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict({"User-Agent": settings.user_agent})
        if headers:
            self.headers.update(headers)
        self.log = settings.log if log is None else log
        self.auth = auth
        self.timeout = settings.http_timeout if timeout is None else timeout
        self._transport = transport or RequestsTransport()

    @property
    def transport(self) -> TransportPort:
        return self._transport

    def __enter__(self) -> Session:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    def set_cookies(self, cookies: Mapping[str, str]) -> None:
        self._transport.set_cookies(cookies)

    def dump_cookies(self) -> dict[str, str]:
        return self._transport.dump_cookies()

    def _log(self, msg: str) -> None:
        if self.log:
            logger.info("[Session] %s", msg)

    def _trace(self, arrow: str, title: str, headers: Mapping[str, str], body: bytes | None) -> None:
        if not self.log:
            return
        lines = [f"{arrow} {title}"]
        for name, value in headers.items():
            shown = "***" if name.lower() in _MASKED else value
            lines.append(f"    {name}: {shown}")
        if body:
            lines.append(_pretty(body))
        self._log("\n".join(lines))

    # ------------------------------------------------------------------
    # Request cycle
    # ------------------------------------------------------------------
    def send(self, request: Request) -> Response:
        """Execute ``request`` and return its Response.

        Raises:
            InvalidURLError: before any I/O, bad URL or unsupported scheme.
            UnmarshalableTypeError: before any I/O, payload is not JSON-able.
            UnexpectedStatusError: status differs from options.expected_status;
                the populated response is on the exception.
            DecodeError: a result target was given and a non-empty body
                does not decode into it. An empty body leaves the target untouched.

        Transport exceptions propagate unchanged.
        """
        opts = request.options or Options()
        url = build_url(request.url, request.params, self._transport.supported_schemes)
        body = marshal(request.payload) if request.payload is not None else None

        headers: CaseInsensitiveDict[str] = CaseInsensitiveDict({"Accept": JSON_CONTENT_TYPE})
        headers.update(self.headers)
        if body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if self.auth is not None:
            token = base64.b64encode(f"{self.auth[0]}:{self.auth[1]}".encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {token}"
        if opts.headers:
            headers.update(opts.headers)

        timeout = opts.timeout if opts.timeout is not None else self.timeout
        if timeout is not None and timeout <= 0:
            timeout = None

        self._trace("-->", f"{request.method} {url}", headers, body)
        raw = self._transport.request(request.method, url, headers=headers, content=body, timeout=timeout)
        resp = Response(raw.status_code, raw.content, headers=raw.headers, url=raw.url, method=request.method)
        self._trace("<--", f"{resp.status()} {request.method} {url}", resp.headers, resp.content)

        if opts.expected_status and resp.status() != opts.expected_status:
            logger.debug("%s %s -> %s, expected %s", request.method, url, resp.status(), opts.expected_status)
            raise UnexpectedStatusError(resp, opts.expected_status)
        if request.result is not None and resp.content:
            resp.unmarshall(request.result)
        return resp

    def get(
        self,
        url: str,
        params: Params | None = None,
        result: Any = None,
        options: Options | None = None,
    ) -> Response:
        return self.send(Request("GET", url, params=params, result=result, options=options))

    def post(
        self,
        url: str,
        payload: Any = None,
        result: Any = None,
        options: Options | None = None,
        *,
        params: Params | None = None,
    ) -> Response:
        return self.send(Request("POST", url, params=params, payload=payload, result=result, options=options))

    def put(
        self,
        url: str,
        payload: Any = None,
        result: Any = None,
        options: Options | None = None,
        *,
        params: Params | None = None,
    ) -> Response:
        return self.send(Request("PUT", url, params=params, payload=payload, result=result, options=options))

    def delete(
        self,
        url: str,
        params: Params | None = None,
        result: Any = None,
        options: Options | None = None,
    ) -> Response:
        return self.send(Request("DELETE", url, params=params, result=result, options=options))
