from __future__ import annotations

import json
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, Response

FOO_PARAMS = {"foo": "bar"}
FOO_STRUCT = {"foo": 111, "bar": "foo"}
BAR_STRUCT = {"Foo": 222, "Bar": "bar"}

app = FastAPI(title="jsonrest echo", version="0.1.0")


def json_error(msg: str, code: int) -> JSONResponse:
    return JSONResponse({"Status": code, "Message": msg}, status_code=code)


def _bad_params(request: Request) -> JSONResponse | None:
    q = request.query_params
    for k, v in FOO_PARAMS.items():
        if q.get(k) != v:
            return json_error("Bad query params: " + urlencode(sorted(q.multi_items())), 500)
    return None


async def _bad_body(request: Request) -> JSONResponse | None:
    body = await request.body()
    if not body:
        return json_error("Content-Length must be greater than 0.", 411)
    try:
        data = json.loads(body)
    except ValueError as e:
        return json_error(str(e), 400)
    if not isinstance(data, dict) or {k.lower(): v for k, v in data.items()} != FOO_STRUCT:
        return json_error("Bad request body", 400)
    return None


@app.get("/")
def handle_get(request: Request):
    return _bad_params(request) or BAR_STRUCT


@app.post("/")
async def handle_post(request: Request):
    return await _bad_body(request) or BAR_STRUCT


@app.put("/")
async def handle_put(request: Request):
    # server answers with no data
    return await _bad_body(request) or Response(status_code=200)


@app.delete("/")
def handle_delete(request: Request):
    return _bad_params(request) or {"Deleted": True}


@app.get("/headers")
def echo_headers(request: Request):
    return dict(request.headers)


@app.get("/cookies")
def echo_cookies(request: Request):
    return dict(request.cookies)


@app.get("/login")
def login():
    resp = JSONResponse({"ok": True})
    resp.set_cookie("token", "abc")
    return resp
