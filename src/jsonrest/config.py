from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env if present
load_dotenv()


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    http_timeout: float = float(os.getenv("JSONREST_HTTP_TIMEOUT", "30"))
    log: bool = _flag(os.getenv("JSONREST_LOG", ""))
    user_agent: str = os.getenv("JSONREST_USER_AGENT", "jsonrest/0.1")


settings = Settings()
