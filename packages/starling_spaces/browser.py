"""Category-scoped transaction browser.

A :class:`BrowserSession` owns the selection state of one browsing view:
which account and category are selected, the transactions last fetched for
that pair, and which transaction (if any) is highlighted. Create one per open
view and :meth:`~BrowserSession.close` it when the view goes away; nothing is
persisted beyond it.

States
------
``Unselected`` → ``Browsing(account, category)`` → ``Browsing(account',
category')`` → ... There is no terminal state.

Every transition fetches first and commits after: if the fetch raises, the
session keeps its previous selection and transactions untouched, and the
error goes to the caller. Nothing is retried.

The primary account id is resolved lazily on first need (first account
returned by the API) and memoized for the life of the session; a new session
resolves it again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol, TypeAlias, assert_never

from .errors import NotBrowsingError, StarlingSpacesError
from .logging_setup import get_logger
from .models import (
    Account,
    ByAccountAndCategory,
    ByCategory,
    DisplayRow,
    FeedItem,
    RowIdentity,
)
from .views import transaction_rows

logger = get_logger("starling_spaces.browser")

# Rolling "changes since" window for feed queries.
FEED_WINDOW = timedelta(days=30)


class FeedApi(Protocol):
    def list_accounts(self) -> list[Account]: ...

    def get_feed_since(
        self, account_id: str, category_id: str, since: datetime
    ) -> list[FeedItem]: ...


@dataclass(frozen=True, slots=True)
class Unselected:
    pass


@dataclass(frozen=True, slots=True)
class Browsing:
    account_id: str
    category_id: str


BrowserState: TypeAlias = Unselected | Browsing

UNSELECTED = Unselected()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BrowserSession:
    """Selection state and feed fetching for one browsing view.

    Parameters
    ----------
    client:
        Anything providing ``list_accounts`` and ``get_feed_since`` (normally
        :class:`starling_spaces.client.StarlingClient`).
    primary_account_id:
        Optional pre-resolved primary account; skips the lazy lookup.
    now:
        Clock used for the rolling window cutoff (injectable for tests).
    """

    def __init__(
        self,
        client: FeedApi,
        *,
        primary_account_id: str | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._primary_account_id = primary_account_id
        self._now = now
        self._state: BrowserState = UNSELECTED
        self._items: tuple[FeedItem, ...] = ()
        self._rows: tuple[DisplayRow, ...] = ()
        self._selected_id: str | None = None

    # -- read-only views -----------------------------------------------------

    @property
    def state(self) -> BrowserState:
        return self._state

    @property
    def account_id(self) -> str | None:
        return self._state.account_id if isinstance(self._state, Browsing) else None

    @property
    def category_id(self) -> str | None:
        return self._state.category_id if isinstance(self._state, Browsing) else None

    @property
    def transactions(self) -> tuple[FeedItem, ...]:
        return self._items

    @property
    def rows(self) -> tuple[DisplayRow, ...]:
        return self._rows

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def primary_account_id(self) -> str:
        """The first account's id, fetched once and kept for the session."""

        if self._primary_account_id is None:
            accounts = self._client.list_accounts()
            if not accounts:
                raise StarlingSpacesError("The API returned no accounts to browse")
            self._primary_account_id = accounts[0].account_uid
            logger.debug("primary account resolved: %s", self._primary_account_id)
        return self._primary_account_id

    def cutoff(self) -> datetime:
        return self._now() - FEED_WINDOW

    # -- transitions ---------------------------------------------------------

    def select_row(self, identity: RowIdentity) -> list[DisplayRow]:
        """Navigate to the feed a space-list row points at and fetch it."""

        match identity:
            case ByAccountAndCategory(account_id=account_id, category_id=category_id):
                target = Browsing(account_id, category_id)
            case ByCategory(category_id=category_id):
                current = self._state
                account_id = (
                    current.account_id
                    if isinstance(current, Browsing)
                    else self.primary_account_id
                )
                target = Browsing(account_id, category_id)
            case _:
                assert_never(identity)

        self._load(target)
        return list(self._rows)

    def fetch_window(self) -> list[DisplayRow]:
        """Re-fetch the current pair's last-30-days feed, in server order."""

        current = self._state
        if not isinstance(current, Browsing):
            raise NotBrowsingError("No account/category selected")
        self._load(current)
        return list(self._rows)

    def refresh(self, preserve_selection: str | None = None) -> str | None:
        """Re-fetch and try to re-highlight ``preserve_selection``.

        Returns the selected transaction id, or ``None`` when there was
        nothing to preserve or the id is no longer in the window (it may have
        aged out or been recategorized away). Absence is not an error.
        """

        self.fetch_window()
        if preserve_selection is None:
            return None
        for row in self._rows:
            if row.identity == preserve_selection:
                self._selected_id = preserve_selection
                return preserve_selection
        logger.debug("transaction %s not in refreshed window", preserve_selection)
        return None

    def select_transaction(self, txn_id: str | None) -> None:
        """Record the highlighted transaction (renderer feedback)."""

        self._selected_id = txn_id

    def selected_index(self) -> int | None:
        if self._selected_id is None:
            return None
        for idx, row in enumerate(self._rows):
            if row.identity == self._selected_id:
                return idx
        return None

    def close(self) -> None:
        """Dispose of the session's selection state."""

        self._state = UNSELECTED
        self._items = ()
        self._rows = ()
        self._selected_id = None

    def __enter__(self) -> BrowserSession:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # -- internals -----------------------------------------------------------

    def _load(self, target: Browsing) -> None:
        items = tuple(
            self._client.get_feed_since(target.account_id, target.category_id, self.cutoff())
        )
        rows = tuple(transaction_rows(items))
        # Commit only after the fetch succeeded.
        self._state = target
        self._items = items
        self._rows = rows
        self._selected_id = None
        logger.debug(
            "browsing %s/%s: %d transaction(s)", target.account_id, target.category_id, len(rows)
        )


__all__ = [
    "BrowserSession",
    "BrowserState",
    "Browsing",
    "Unselected",
    "UNSELECTED",
    "FEED_WINDOW",
    "FeedApi",
]
