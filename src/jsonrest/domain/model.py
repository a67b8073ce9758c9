from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# =========================
# Value Objects
# =========================
Params = Mapping[str, str]

METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True)
class Options:
    """Per-request overrides.

    expected_status: when nonzero, any other status raises UnexpectedStatusError.
    headers: merged over the session headers for this request only.
    timeout: seconds, replaces the session timeout for this request only.
    """

    expected_status: int = 0
    headers: Mapping[str, str] | None = None
    timeout: float | None = None


# =========================
# Entities
# =========================
@dataclass(frozen=True)
class Request:
    method: str
    url: str
    params: Params | None = None
    payload: Any = None
    result: Any = None
    options: Options | None = None

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in METHODS:
            raise ValueError(f"unsupported method: {self.method}")
        object.__setattr__(self, "method", method)
        if self.options is None:
            object.__setattr__(self, "options", Options())
