"""Environment-driven settings.

The CLI loads a local ``.env`` (python-dotenv, without overriding variables
already set) before calling :meth:`Settings.from_env`. Explicit CLI options
take precedence over anything read here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.starlingbank.com/api/v2"
DEFAULT_TIMEOUT = 30.0
MAX_BALANCE_CONCURRENCY = 8


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default


def resolve_concurrency(value: int | None) -> int:
    """Clamp a balance fan-out width to ``1..MAX_BALANCE_CONCURRENCY``.

    ``None`` consults ``STARLING_BALANCE_CONCURRENCY`` and otherwise keeps
    the sequential default of 1.
    """

    if value is None:
        raw = os.getenv("STARLING_BALANCE_CONCURRENCY")
        try:
            value = int(raw) if raw else 1
        except ValueError:
            value = 1
    return max(1, min(value, MAX_BALANCE_CONCURRENCY))


@dataclass(frozen=True, slots=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    include_accounts: bool = False
    balance_concurrency: int = 1

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            api_url=(os.getenv("STARLING_API_URL") or DEFAULT_API_URL).rstrip("/"),
            timeout=_env_float("STARLING_TIMEOUT", DEFAULT_TIMEOUT),
            include_accounts=_env_flag("STARLING_INCLUDE_ACCOUNTS"),
            balance_concurrency=resolve_concurrency(None),
        )


__all__ = ["Settings", "resolve_concurrency", "DEFAULT_API_URL", "MAX_BALANCE_CONCURRENCY"]
