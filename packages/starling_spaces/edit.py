"""Change a transaction's spending category, then refresh the feed.

This is write-then-refetch: a successful write never patches the browser's
transaction list locally. The only way the new category shows up is the
unconditional :meth:`~starling_spaces.browser.BrowserSession.refresh` that
follows, which also re-highlights the edited transaction when it is still in
the window.
"""

from __future__ import annotations

from typing import Protocol

from .browser import BrowserSession
from .categories import validate_category
from .logging_setup import get_logger

logger = get_logger("starling_spaces.edit")


class CategoryWriteApi(Protocol):
    def put_spending_category(
        self, account_id: str, category_id: str, feed_item_id: str, spending_category: str
    ) -> None: ...


def set_category(
    client: CategoryWriteApi,
    session: BrowserSession,
    txn_id: str,
    new_category: str,
) -> str | None:
    """Recategorize ``txn_id`` in the session's current account/category.

    Returns whatever ``session.refresh`` returns: ``txn_id`` when the edited
    transaction is found again, else ``None``.

    Raises
    ------
    ValidationError
        ``new_category`` is not in the allow-list. Raised before any request.
    TransportError
        The write failed. No refresh is attempted and the session still holds
        the previously fetched list.
    """

    code = validate_category(new_category)

    account_id = session.account_id
    category_id = session.category_id
    if account_id is None or category_id is None:
        # Nothing selected: there is no feed context to edit within.
        logger.debug("set_category(%s) ignored: no category selected", txn_id)
        return None

    client.put_spending_category(account_id, category_id, txn_id, code)
    logger.info("set spending category of %s to %s", txn_id, code)
    return session.refresh(preserve_selection=txn_id)


__all__ = ["set_category", "CategoryWriteApi"]
