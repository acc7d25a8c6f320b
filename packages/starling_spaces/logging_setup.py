"""Process-wide logging for ``starling_spaces``.

Only entrypoints configure anything: the CLI root callback calls
:func:`configure_logging` before a command runs. Every other module asks
:func:`get_logger` for a ``starling_spaces.<module>`` logger and emits
records; none of them touch handlers.

The package logger owns exactly one ``StreamHandler``. Calling
:func:`configure_logging` again swaps that handler for a fresh one
instead of stacking a second, so repeated CLI invocations inside one
process (``CliRunner`` in tests) honour each run's ``--log-level``.

``httpx`` announces every request at INFO. The transport already writes its
own DEBUG line per request, so the ``httpx`` logger is held at WARNING unless
the package runs at DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "starling_spaces"
LEVEL_ENV = "STARLING_SPACES_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: logging.StreamHandler | None = None


def resolve_level(level: int | str | None = None) -> int:
    """Turn ``level`` (or ``$STARLING_SPACES_LOG_LEVEL``) into a numeric level.

    Names are case-insensitive, decimal strings are taken as numbers. A value
    that is neither falls through to the next source, and finally to INFO.
    """

    names = logging.getLevelNamesMapping()
    for candidate in (level, os.getenv(LEVEL_ENV)):
        if isinstance(candidate, int):
            return candidate
        if not candidate:
            continue
        text = candidate.strip().upper()
        if text.isdecimal():
            return int(text)
        if text in names:
            return names[text]
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> int:
    """Install (or retune) the package's stderr handler; return the level used."""

    global _handler

    resolved = resolve_level(level)
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        if isinstance(h, logging.NullHandler):
            pkg.removeHandler(h)

    if _handler is not None:
        pkg.removeHandler(_handler)
    _handler = logging.StreamHandler(stream or sys.stderr)
    pkg.addHandler(_handler)
    _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
    _handler.setLevel(resolved)

    pkg.setLevel(resolved)
    pkg.propagate = False
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    )
    return resolved


def get_logger(name: str) -> logging.Logger:
    # Silent until configured: a NullHandler keeps "no handlers" warnings away.
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
