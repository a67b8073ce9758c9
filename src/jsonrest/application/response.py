from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from requests.structures import CaseInsensitiveDict

from jsonrest.application.codec import unmarshal


class Response:
    """A completed exchange: status code plus the body captured once.

    The body is never re-fetched; every decode reads the same bytes.
    """

    def __init__(
        self,
        status_code: int,
        content: bytes,
        *,
        headers: Mapping[str, str] | None = None,
        url: str = "",
        method: str = "",
    ) -> None:
        self._status_code = status_code
        self._content = bytes(content)
        self.headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(headers or {})
        self.url = url
        self.method = method
        self.decoded = False
        self.result: Any = None

    def __repr__(self) -> str:
        return f"<Response [{self._status_code}]>"

    @property
    def content(self) -> bytes:
        return self._content

    def status(self) -> int:
        return self._status_code

    def raw_text(self) -> str:
        """Body as text, empty string when the server sent nothing.

        Undecodable bytes map to lone surrogates, so
        ``raw_text().encode("utf-8", "surrogateescape")`` gives back the body.
        """
        return self._content.decode("utf-8", errors="surrogateescape")

    def json(self) -> Any:
        return json.loads(self._content)

    def unmarshall(self, target: Any) -> Any:
        """Decode the stored body into ``target``.

        Args:
            target: dict, list, dataclass instance or dataclass class.

        Returns:
            Any: the filled target, or a new instance when a class was given.

        Raises:
            DecodeError: body is not valid JSON or does not fit the target.
        """
        self.result = unmarshal(self._content, target)
        self.decoded = True
        return self.result
