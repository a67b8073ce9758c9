from __future__ import annotations

import dataclasses
import json
import types
import typing
from collections.abc import Mapping
from typing import Any, Union

from jsonrest.domain.errors import DecodeError, UnmarshalableTypeError

JSON_CONTENT_TYPE = "application/json"


def _json_name(f: dataclasses.Field) -> str:
    return f.metadata.get("json", f.name)


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {_json_name(f): _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def marshal(payload: Any) -> bytes:
    """Serialize ``payload`` to UTF-8 JSON bytes.

    Raises:
        UnmarshalableTypeError: payload holds a value JSON cannot represent
            (functions, sets, NaN, ...).
    """
    try:
        return json.dumps(_to_jsonable(payload), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise UnmarshalableTypeError(str(e)) from e


def unmarshal(data: bytes, target: Any) -> Any:
    """Decode JSON ``data`` into ``target`` and return the filled target.

    ``target`` may be a dict, a list, a dataclass instance (updated in place)
    or a dataclass class (a new instance is returned). Invalid JSON and a
    structural mismatch both raise DecodeError.
    """
    try:
        decoded = json.loads(data)
    except json.JSONDecodeError as e:
        raise DecodeError(str(e), e.doc, e.pos) from e
    except UnicodeDecodeError as e:
        raise DecodeError(str(e)) from e
    return _assign(target, decoded)


def _assign(target: Any, value: Any) -> Any:
    if isinstance(target, type):
        if dataclasses.is_dataclass(target):
            return _build(target, value)
        raise DecodeError(f"cannot decode into type {target.__name__}")
    if dataclasses.is_dataclass(target):
        if value is None:
            return target
        if not isinstance(value, dict):
            raise DecodeError(f"cannot decode {_kind(value)} into {type(target).__name__}")
        _populate(target, value)
        return target
    if isinstance(target, dict):
        if value is None:
            return target
        if not isinstance(value, dict):
            raise DecodeError(f"cannot decode {_kind(value)} into dict")
        target.clear()
        target.update(value)
        return target
    if isinstance(target, list):
        if value is None:
            return target
        if not isinstance(value, list):
            raise DecodeError(f"cannot decode {_kind(value)} into list")
        target[:] = value
        return target
    raise DecodeError(f"unsupported result target: {type(target).__name__}")


def _hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except NameError:
        # locally defined classes with postponed annotations
        return {}


def _match_key(data: dict[str, Any], name: str) -> str | None:
    if name in data:
        return name
    lowered = name.lower()
    for key in data:
        if key.lower() == lowered:
            return key
    return None


def _accepts_none(tp: Any) -> bool:
    return tp is Any or tp is type(None) or type(None) in typing.get_args(tp)


def _populate(obj: Any, data: dict[str, Any]) -> None:
    hints = _hints(type(obj))
    for f in dataclasses.fields(obj):
        key = _match_key(data, _json_name(f))
        if key is None:
            continue
        tp = hints.get(f.name, Any)
        raw = data[key]
        if raw is None and not _accepts_none(tp):
            continue
        try:
            setattr(obj, f.name, _convert(tp, raw, f.name))
        except dataclasses.FrozenInstanceError as e:
            raise DecodeError(
                f"{type(obj).__name__} is frozen; pass the class to build a new instance"
            ) from e


def _build(cls: type, value: Any) -> Any:
    if not isinstance(value, dict):
        raise DecodeError(f"cannot decode {_kind(value)} into {cls.__name__}")
    hints = _hints(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = _match_key(value, _json_name(f))
        if key is None:
            continue
        tp = hints.get(f.name, Any)
        raw = value[key]
        if raw is None and not _accepts_none(tp):
            continue
        kwargs[f.name] = _convert(tp, raw, f.name)
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise DecodeError(f"cannot build {cls.__name__}: {e}") from e


def _convert(tp: Any, value: Any, where: str) -> Any:
    if tp is Any or tp is object:
        return value
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        for arm in typing.get_args(tp):
            try:
                return _convert(arm, value, where)
            except DecodeError:
                continue
        raise DecodeError(f"{where}: {_kind(value)} matches none of {tp}")
    if tp is type(None):
        if value is None:
            return None
        raise DecodeError(f"{where}: expected null, got {_kind(value)}")
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _build(tp, value)

    args = typing.get_args(tp)
    container = origin or tp
    if container is list:
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected array, got {_kind(value)}")
        return [_convert(args[0], v, where) for v in value] if args else list(value)
    if container is tuple:
        if not isinstance(value, list):
            raise DecodeError(f"{where}: expected array, got {_kind(value)}")
        if len(args) == 2 and args[1] is Ellipsis:
            return tuple(_convert(args[0], v, where) for v in value)
        if args:
            if len(args) != len(value):
                raise DecodeError(f"{where}: expected {len(args)} items, got {len(value)}")
            return tuple(_convert(a, v, where) for a, v in zip(args, value))
        return tuple(value)
    if container is dict:
        if not isinstance(value, dict):
            raise DecodeError(f"{where}: expected object, got {_kind(value)}")
        if len(args) == 2:
            return {k: _convert(args[1], v, where) for k, v in value.items()}
        return dict(value)
    if tp is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise DecodeError(f"{where}: expected number, got {_kind(value)}")
    if tp is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise DecodeError(f"{where}: expected integer, got {_kind(value)}")
    if isinstance(tp, type):
        if isinstance(value, tp):
            return value
        raise DecodeError(f"{where}: expected {tp.__name__}, got {_kind(value)}")
    return value


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
