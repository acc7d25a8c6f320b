"""Space aggregation and per-account balance resolution.

The space list merges three structurally different server collections into
one ordered list of :class:`~starling_spaces.models.DisplayRow`:

1. savings goals (identity: ``ByCategory(savingsGoalUid)``),
2. spending spaces (identity: ``ByCategory(spaceUid)``),
3. optionally, every account as a pseudo-space (identity:
   ``ByAccountAndCategory(accountUid, defaultCategory)``).

Goals and spaces hang off the primary account, so their own id is enough to
browse their feed later. An account row has to carry both ids because the
feed is addressed by account *and* category.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from .formatting import format_money
from .logging_setup import get_logger
from .models import (
    Account,
    AccountBalance,
    Balance,
    ByAccountAndCategory,
    ByCategory,
    DisplayRow,
    SavingsGoal,
    Spaces,
    SpendingSpace,
)
from .pmap import p_map

logger = get_logger("starling_spaces.spaces")


class SpacesApi(Protocol):
    def list_accounts(self) -> list[Account]: ...

    def get_balance(self, account_id: str) -> Balance: ...

    def get_spaces(self, account_id: str) -> Spaces: ...


def aggregate_spaces(
    savings_goals: Iterable[SavingsGoal] | None,
    spending_spaces: Iterable[SpendingSpace] | None,
    account_balances: Iterable[AccountBalance] | None = None,
) -> list[DisplayRow]:
    """Concatenate goals, spaces and account pseudo-spaces into display rows.

    Order is fixed by group and follows the server within each group; nothing
    is sorted here. ``None`` or empty inputs contribute no rows.
    """

    rows: list[DisplayRow] = []
    for goal in savings_goals or ():
        rows.append(
            DisplayRow(
                identity=ByCategory(goal.savings_goal_uid),
                columns=(goal.name, format_money(goal.total_saved.minor_units)),
            )
        )
    for space in spending_spaces or ():
        rows.append(
            DisplayRow(
                identity=ByCategory(space.space_uid),
                columns=(space.name, format_money(space.balance.minor_units)),
            )
        )
    for ab in account_balances or ():
        rows.append(
            DisplayRow(identity=ab.identity, columns=(ab.name, format_money(ab.balance_units)))
        )
    return rows


def resolve_account_balances(
    client: SpacesApi,
    accounts: Sequence[Account],
    *,
    concurrency: int = 1,
) -> list[AccountBalance]:
    """Look up each account's effective balance and package it as a pseudo-space.

    One balance request per account. Failures are not caught: the first one
    aborts the whole resolution and nothing is returned, so a caller never
    shows a list with an account silently missing. ``concurrency > 1`` fans
    the lookups out over a bounded pool; output order always matches
    ``accounts``.
    """

    def _resolve(account: Account) -> AccountBalance:
        balance = client.get_balance(account.account_uid)
        return AccountBalance(
            name=account.name or account.account_uid,
            balance_units=balance.effective_balance.minor_units,
            identity=ByAccountAndCategory(account.account_uid, account.default_category),
        )

    return p_map(accounts, _resolve, concurrency=concurrency)


def load_space_rows(
    client: SpacesApi,
    *,
    include_accounts: bool = False,
    concurrency: int = 1,
    accounts: Sequence[Account] | None = None,
) -> list[DisplayRow]:
    """Fetch everything the space list needs and aggregate it.

    Spaces come from the primary (first) account. When ``include_accounts``
    is set, every account's balance is resolved as well. ``accounts`` may be
    passed in to reuse a listing the caller already has.
    """

    if accounts is None:
        accounts = client.list_accounts()
    if not accounts:
        return []

    primary = accounts[0]
    spaces = client.get_spaces(primary.account_uid)
    balances = (
        resolve_account_balances(client, accounts, concurrency=concurrency)
        if include_accounts
        else None
    )
    logger.debug(
        "space list: %d goal(s), %d space(s), %d account(s)",
        len(spaces.savings_goals),
        len(spaces.spending_spaces),
        len(balances or ()),
    )
    return aggregate_spaces(spaces.savings_goals, spaces.spending_spaces, balances)


__all__ = ["aggregate_spaces", "resolve_account_balances", "load_space_rows", "SpacesApi"]
