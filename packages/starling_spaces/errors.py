"""Error taxonomy for ``starling_spaces``.

Every hard error raised by the package derives from
:class:`StarlingSpacesError` so entrypoints can report them uniformly. None of
these are retried or logged by the library; they bubble to the immediate
caller of the operation that failed.
"""

from __future__ import annotations


class StarlingSpacesError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(StarlingSpacesError):
    """A required setting or credential is missing or unusable.

    Raised before any network traffic; distinct from :class:`TransportError`
    so callers can tell "not set up" apart from "bank unreachable".
    """


class TransportError(StarlingSpacesError):
    """An HTTP-level failure talking to the bank API.

    Covers network errors, timeouts, non-2xx responses and bodies that are
    not valid JSON (or not the expected shape).
    """

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        path: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code


class ValidationError(StarlingSpacesError):
    """A locally rejected input, e.g. a spending category not in the allow-list."""


class NotBrowsingError(StarlingSpacesError):
    """A feed operation was requested before any account/category was selected."""


__all__ = [
    "StarlingSpacesError",
    "ConfigurationError",
    "TransportError",
    "ValidationError",
    "NotBrowsingError",
]
