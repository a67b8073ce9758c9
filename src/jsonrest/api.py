from __future__ import annotations

from typing import Any

from jsonrest.application.response import Response
from jsonrest.application.session import Session
from jsonrest.domain.model import Options, Params


def get(url: str, params: Params | None = None, result: Any = None, options: Options | None = None) -> Response:
    with Session() as session:
        return session.get(url, params, result, options)


def post(url: str, payload: Any = None, result: Any = None, options: Options | None = None) -> Response:
    with Session() as session:
        return session.post(url, payload, result, options)


def put(url: str, payload: Any = None, result: Any = None, options: Options | None = None) -> Response:
    with Session() as session:
        return session.put(url, payload, result, options)


def delete(url: str, params: Params | None = None, result: Any = None, options: Options | None = None) -> Response:
    with Session() as session:
        return session.delete(url, params, result, options)
