"""HTTP transport and typed bank API surface.

:class:`StarlingClient` wraps a synchronous ``httpx.Client`` configured with
the base URL and a ``Bearer`` credential. :meth:`StarlingClient.request` is
the single transport seam: every failure below it (network error, timeout,
non-2xx status, body that isn't JSON) becomes a
:class:`~starling_spaces.errors.TransportError`. The typed helpers on top
validate payloads into :mod:`starling_spaces.models` DTOs; a payload that
doesn't match its schema is reported as a ``TransportError`` too.

No retries happen here or anywhere above it.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .credentials import resolve_token
from .errors import TransportError
from .logging_setup import get_logger
from .models import Account, Balance, FeedItem, Spaces, SpendingInsights
from .settings import Settings

logger = get_logger("starling_spaces.client")

ModelT = TypeVar("ModelT", bound=BaseModel)

MONTHS: tuple[str, ...] = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)


def _seg(value: str) -> str:
    """Quote one path segment (ids are opaque and must not introduce ``/``)."""

    return quote(str(value), safe="")


def format_changes_since(since: datetime) -> str:
    """Render a cutoff as the API's ISO-8601 UTC form (``...T..:..:..000Z``)."""

    if since.tzinfo is None:
        since = since.replace(tzinfo=UTC)
    return since.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StarlingClient:
    """Blocking client for the Starling public API (v2 paths).

    Parameters
    ----------
    base_url:
        API root, e.g. ``https://api.starlingbank.com/api/v2``.
    token:
        Bearer token. When ``None`` it is resolved from the local secret store
        (see :func:`starling_spaces.credentials.resolve_token`), which raises
        ``ConfigurationError`` if absent.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional ``httpx`` transport, used by tests to plug in
        ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        bearer = token if token is not None else resolve_token()
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {bearer}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> StarlingClient:
        return cls(settings.api_url, timeout=settings.timeout, **kwargs)

    # -- lifecycle -----------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> StarlingClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- transport -----------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Perform one round trip and return the decoded JSON body.

        Returns ``None`` for an empty body (e.g. ``204 No Content``).
        """

        verb = method.upper()
        try:
            resp = self._http.request(verb, path.lstrip("/"), params=params, json=json)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"{verb} {path} timed out", method=verb, path=path
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"{verb} {path} failed: {e}", method=verb, path=path
            ) from e

        logger.debug("%s %s -> %s", verb, path, resp.status_code)

        if not resp.is_success:
            detail = resp.text.strip()[:200]
            raise TransportError(
                f"{verb} {path} returned {resp.status_code}"
                + (f": {detail}" if detail else ""),
                method=verb,
                path=path,
                status_code=resp.status_code,
            )

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                f"{verb} {path} returned a non-JSON body",
                method=verb,
                path=path,
                status_code=resp.status_code,
            ) from e

    def _parse(self, model: type[ModelT], data: Any, *, method: str, path: str) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(
                f"{method} {path} returned an unexpected payload: {e.error_count()} error(s)",
                method=method,
                path=path,
            ) from e

    def _list_of(
        self, model: type[ModelT], data: Any, key: str, *, method: str, path: str
    ) -> list[ModelT]:
        items = data.get(key) if isinstance(data, Mapping) else None
        if not isinstance(items, list):
            raise TransportError(
                f"{method} {path} returned no {key!r} list", method=method, path=path
            )
        return [self._parse(model, item, method=method, path=path) for item in items]

    # -- bank API surface ----------------------------------------------------

    def list_accounts(self) -> list[Account]:
        path = "accounts"
        data = self.request("GET", path)
        return self._list_of(Account, data, "accounts", method="GET", path=path)

    def get_balance(self, account_id: str) -> Balance:
        path = f"accounts/{_seg(account_id)}/balance"
        return self._parse(Balance, self.request("GET", path), method="GET", path=path)

    def get_spaces(self, account_id: str) -> Spaces:
        path = f"account/{_seg(account_id)}/spaces"
        return self._parse(Spaces, self.request("GET", path), method="GET", path=path)

    def get_feed_since(
        self, account_id: str, category_id: str, since: datetime
    ) -> list[FeedItem]:
        path = f"feed/account/{_seg(account_id)}/category/{_seg(category_id)}"
        data = self.request("GET", path, params={"changesSince": format_changes_since(since)})
        return self._list_of(FeedItem, data, "feedItems", method="GET", path=path)

    def put_spending_category(
        self, account_id: str, category_id: str, feed_item_id: str, spending_category: str
    ) -> None:
        path = (
            f"feed/account/{_seg(account_id)}/category/{_seg(category_id)}"
            f"/{_seg(feed_item_id)}/spending-category"
        )
        self.request("PUT", path, json={"spendingCategory": spending_category})

    def get_spending_insights(self, account_id: str, *, year: int, month: str) -> SpendingInsights:
        path = f"accounts/{_seg(account_id)}/spending-insights/spending-category"
        data = self.request("GET", path, params={"year": year, "month": month})
        return self._parse(SpendingInsights, data, method="GET", path=path)


__all__ = ["StarlingClient", "MONTHS", "format_changes_since"]
