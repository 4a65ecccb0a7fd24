from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import TavilyConfigError

DEFAULT_BASE_URL = "https://api.tavily.com"


def _get_timeout_seconds() -> float | None:
    raw = (os.environ.get("TAVILY_TIMEOUT_SECONDS") or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise TavilyConfigError("TAVILY_TIMEOUT_SECONDS must be a number (seconds).", stage="config") from exc


@dataclass
class Settings:
    """Runtime configuration (env-first).

    Note: keep this module lightweight; it is imported by tests.
    """

    tavily_api_key: str = ""
    tavily_base_url: str = DEFAULT_BASE_URL
    tavily_timeout_seconds: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            tavily_api_key=os.environ.get("TAVILY_API_KEY", "").strip(),
            tavily_base_url=os.environ.get("TAVILY_BASE_URL", "").strip() or DEFAULT_BASE_URL,
            tavily_timeout_seconds=_get_timeout_seconds(),
        )
