import pytest
from helpers.fake_bank import FakeBank, account_payload, money

from starling_spaces.errors import TransportError
from starling_spaces.models import (
    Account,
    AccountBalance,
    ByAccountAndCategory,
    ByCategory,
    SavingsGoal,
    SpendingSpace,
)
from starling_spaces.spaces import (
    aggregate_spaces,
    load_space_rows,
    resolve_account_balances,
)


def _goal(uid: str, name: str, units: int) -> SavingsGoal:
    return SavingsGoal.model_validate(
        {"savingsGoalUid": uid, "name": name, "totalSaved": money(units), "state": "ACTIVE"}
    )


def _space(uid: str, name: str, units: int) -> SpendingSpace:
    return SpendingSpace.model_validate({"spaceUid": uid, "name": name, "balance": money(units)})


def _bank_with_accounts(n: int = 3) -> FakeBank:
    return FakeBank(
        accounts=[account_payload(f"acc-{i}", f"cat-{i}", f"Account {i}") for i in range(1, n + 1)],
        balances={f"acc-{i}": i * 1000 for i in range(1, n + 1)},
        spaces={
            "savingsGoals": [
                {"savingsGoalUid": "goal-1", "name": "Holiday", "totalSaved": money(50000)}
            ],
            "spendingSpaces": [{"spaceUid": "space-1", "name": "Bills", "balance": money(1234)}],
        },
    )


def test_aggregate_orders_goals_then_spaces_then_accounts():
    balance = AccountBalance("Main", 999, ByAccountAndCategory("acc-1", "cat-1"))
    rows = aggregate_spaces([_goal("g1", "Holiday", 12345)], [_space("s1", "Bills", 0)], [balance])

    assert len(rows) == 3
    assert rows[0].identity == ByCategory("g1")
    assert rows[0].columns == ("Holiday", "123.45")
    assert rows[1].identity == ByCategory("s1")
    assert rows[1].columns == ("Bills", "0.00")
    assert rows[2].identity == ByAccountAndCategory("acc-1", "cat-1")
    assert rows[2].columns == ("Main", "9.99")


def test_aggregate_keeps_server_order_within_groups():
    goals = [_goal("g2", "Zebra", 1), _goal("g1", "Apple", 2)]
    rows = aggregate_spaces(goals, [])
    assert [r.columns[0] for r in rows] == ["Zebra", "Apple"]


def test_aggregate_treats_missing_sections_as_empty():
    assert aggregate_spaces(None, None, None) == []
    assert aggregate_spaces([], [], []) == []
    rows = aggregate_spaces(None, [_space("s1", "Bills", 10)])
    assert [r.identity for r in rows] == [ByCategory("s1")]


def test_null_sections_in_spaces_payload_contribute_no_rows():
    bank = FakeBank(
        accounts=[account_payload("acc-1", "cat-1")],
        spaces={
            "savingsGoals": None,
            "spendingSpaces": [{"spaceUid": "s1", "name": "Bills", "balance": money(5)}],
        },
    )
    rows = load_space_rows(bank)
    assert [r.identity for r in rows] == [ByCategory("s1")]

    empty = FakeBank(
        accounts=[account_payload("acc-1", "cat-1")],
        spaces={"savingsGoals": None, "spendingSpaces": None},
    )
    assert load_space_rows(empty) == []


def test_resolve_account_balances_builds_composite_identity():
    bank = _bank_with_accounts(2)
    accounts = bank.list_accounts()

    balances = resolve_account_balances(bank, accounts)

    assert [b.identity for b in balances] == [
        ByAccountAndCategory("acc-1", "cat-1"),
        ByAccountAndCategory("acc-2", "cat-2"),
    ]
    assert [b.balance_units for b in balances] == [1000, 2000]
    assert [b.name for b in balances] == ["Account 1", "Account 2"]
    assert bank.count("get_balance") == 2


def test_resolve_account_balances_is_total_or_nothing():
    bank = _bank_with_accounts(3)
    accounts = bank.list_accounts()
    bank.fail("get_balance", "acc-2")

    result = None
    with pytest.raises(TransportError):
        result = resolve_account_balances(bank, accounts)

    assert result is None
    # Sequential: the third lookup never happens after the second fails.
    assert [c[1][0] for c in bank.calls if c[0] == "get_balance"] == ["acc-1", "acc-2"]


def test_resolve_account_balances_with_fan_out_preserves_order():
    bank = _bank_with_accounts(5)
    accounts = bank.list_accounts()

    balances = resolve_account_balances(bank, accounts, concurrency=4)

    assert [b.identity.account_id for b in balances] == [f"acc-{i}" for i in range(1, 6)]


def test_resolve_account_balances_with_fan_out_still_fails_whole():
    bank = _bank_with_accounts(4)
    accounts = bank.list_accounts()
    bank.fail("get_balance", "acc-3")

    with pytest.raises(TransportError):
        resolve_account_balances(bank, accounts, concurrency=3)


def test_load_space_rows_uses_primary_account_and_optional_accounts():
    bank = _bank_with_accounts(2)

    rows = load_space_rows(bank)
    assert [r.identity for r in rows] == [ByCategory("goal-1"), ByCategory("space-1")]
    assert ("get_spaces", ("acc-1",)) in bank.calls
    assert bank.count("get_balance") == 0

    rows = load_space_rows(bank, include_accounts=True)
    assert [r.identity for r in rows][2:] == [
        ByAccountAndCategory("acc-1", "cat-1"),
        ByAccountAndCategory("acc-2", "cat-2"),
    ]


def test_load_space_rows_without_accounts_is_empty():
    bank = FakeBank()
    assert load_space_rows(bank) == []
    assert bank.count("get_spaces") == 0


def test_account_name_falls_back_to_uid():
    bank = FakeBank(balances={"acc-x": 1})
    account = Account.model_validate({"accountUid": "acc-x", "defaultCategory": "c", "name": ""})
    [balance] = resolve_account_balances(bank, [account])
    assert balance.name == "acc-x"
