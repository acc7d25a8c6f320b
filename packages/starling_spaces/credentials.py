"""Bearer credential resolution.

The access token comes from the local secret store: the
``STARLING_ACCESS_TOKEN`` environment variable (usually populated from
``.env``), falling back to a token file whose path is
``STARLING_TOKEN_FILE`` or ``~/.config/starling/token``. A missing or empty
token is a :class:`~starling_spaces.errors.ConfigurationError`, raised before
any request is attempted.
"""

from __future__ import annotations

import os
from pathlib import Path

from .errors import ConfigurationError

TOKEN_ENV = "STARLING_ACCESS_TOKEN"
TOKEN_FILE_ENV = "STARLING_TOKEN_FILE"
DEFAULT_TOKEN_FILE = Path("~/.config/starling/token")


def token_file_path() -> Path:
    raw = os.getenv(TOKEN_FILE_ENV)
    return Path(raw).expanduser() if raw else DEFAULT_TOKEN_FILE.expanduser()


def resolve_token() -> str:
    """Return the bearer token or raise ``ConfigurationError``."""

    token = (os.getenv(TOKEN_ENV) or "").strip()
    if token:
        return token

    path = token_file_path()
    try:
        token = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        raise ConfigurationError(
            f"No access token: set {TOKEN_ENV} or create the token file {path}"
        ) from None
    except OSError as e:
        raise ConfigurationError(f"Could not read token file {path}: {e}") from e

    if not token:
        raise ConfigurationError(f"Token file {path} is empty")
    return token


__all__ = ["resolve_token", "token_file_path", "TOKEN_ENV", "TOKEN_FILE_ENV"]
