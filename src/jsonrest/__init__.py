"""JSON REST client helper: query params, JSON payloads, status checks, decoding."""

from jsonrest.api import delete, get, post, put
from jsonrest.application.ports.transport_port import TransportPort, TransportResponse
from jsonrest.application.response import Response
from jsonrest.application.session import Session
from jsonrest.domain.errors import (
    DecodeError,
    InvalidURLError,
    RestError,
    UnexpectedStatusError,
    UnmarshalableTypeError,
)
from jsonrest.domain.model import Options, Params, Request
from jsonrest.infrastructure.adapters.http.httpx_transport import HttpxTransport
from jsonrest.infrastructure.adapters.http.requests_transport import RequestsTransport

__all__ = [
    "DecodeError",
    "HttpxTransport",
    "InvalidURLError",
    "Options",
    "Params",
    "Request",
    "RequestsTransport",
    "Response",
    "RestError",
    "Session",
    "TransportPort",
    "TransportResponse",
    "UnexpectedStatusError",
    "UnmarshalableTypeError",
    "delete",
    "get",
    "post",
    "put",
]
