from __future__ import annotations

from collections.abc import Collection
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from jsonrest.domain.errors import InvalidURLError
from jsonrest.domain.model import Params


def build_url(raw: str, params: Params | None, schemes: Collection[str]) -> str:
    """Validate ``raw`` and merge ``params`` into its query string.

    Existing query values are preserved unless a param overwrites the key.
    The resulting query is sorted by key.
    """
    try:
        parts = urlsplit(raw)
    except ValueError as e:
        raise InvalidURLError(raw, str(e)) from e
    if not parts.scheme:
        raise InvalidURLError(raw, "missing protocol scheme")
    if parts.scheme.lower() not in schemes:
        raise InvalidURLError(raw, f"unsupported protocol scheme {parts.scheme!r}")
    if not parts.netloc:
        raise InvalidURLError(raw, "missing host")
    if not params:
        return raw

    pairs = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in params]
    pairs.extend((k, str(v)) for k, v in params.items())
    pairs.sort(key=lambda kv: kv[0])
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(pairs), parts.fragment))
