"""Data models for ``starling_spaces``.

Two families live here:

- Server DTOs (pydantic): validated views of the bank API's JSON payloads.
  Field names are snake_case and populated from the API's camelCase keys.
  Unknown keys are ignored so additive API changes don't break parsing.
- Display values (frozen dataclasses): identities, aggregated balances and
  the rows handed to the rendering layer. These are immutable snapshots of a
  single fetch and are replaced wholesale on refresh.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Server DTOs
# ---------------------------------------------------------------------------


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class CurrencyAndAmount(_ApiModel):
    currency: str
    minor_units: int


class Account(_ApiModel):
    """An account as returned by ``GET accounts`` (no balance included)."""

    account_uid: str
    default_category: str
    name: str = ""
    currency: str | None = None
    account_type: str | None = None
    created_at: datetime | None = None


class Balance(_ApiModel):
    """``GET accounts/{id}/balance``; only ``effectiveBalance`` is required."""

    effective_balance: CurrencyAndAmount
    cleared_balance: CurrencyAndAmount | None = None
    pending_transactions: CurrencyAndAmount | None = None
    amount: CurrencyAndAmount | None = None


class SavingsGoal(_ApiModel):
    savings_goal_uid: str
    name: str
    total_saved: CurrencyAndAmount
    target: CurrencyAndAmount | None = None
    saved_percentage: int | None = None
    state: str | None = None


class SpendingSpace(_ApiModel):
    space_uid: str
    name: str
    balance: CurrencyAndAmount
    state: str | None = None
    spending_space_type: str | None = None


class Spaces(_ApiModel):
    """``GET account/{id}/spaces``: both collections default to empty."""

    savings_goals: tuple[SavingsGoal, ...] = ()
    spending_spaces: tuple[SpendingSpace, ...] = ()

    @field_validator("savings_goals", "spending_spaces", mode="before")
    @classmethod
    def _null_is_empty(cls, v):
        return () if v is None else v


class FeedItem(_ApiModel):
    """One transaction in a category-scoped feed."""

    feed_item_uid: str
    category_uid: str | None = None
    amount: CurrencyAndAmount
    direction: str
    spending_category: str | None = None
    status: str | None = None
    source: str | None = None
    counter_party_name: str | None = None
    reference: str | None = None
    transaction_time: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("direction")
    @classmethod
    def _direction_upper(cls, v: str) -> str:
        d = v.strip().upper()
        if d not in {"IN", "OUT"}:
            raise ValueError(f"direction must be IN or OUT, got {v!r}")
        return d


class SpendingInsight(_ApiModel):
    """One category line of the monthly spending-insights breakdown.

    Insight totals are decimal major units, unlike the minor-unit amounts used
    everywhere else in the API.
    """

    spending_category: str
    net_spend: Decimal = Decimal("0")
    net_direction: str | None = None
    total_spent: Decimal = Decimal("0")
    total_received: Decimal = Decimal("0")
    percentage: Decimal | None = None
    transaction_count: int = 0


class SpendingInsights(_ApiModel):
    period: str | None = None
    total_spent: Decimal = Decimal("0")
    total_received: Decimal = Decimal("0")
    net_spend: Decimal = Decimal("0")
    direction: str | None = None
    breakdown: tuple[SpendingInsight, ...] = ()


# ---------------------------------------------------------------------------
# Row identities
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ByCategory:
    """A row navigable with a category id alone.

    Savings goals and spending spaces belong to the primary account, so their
    id is enough to resume browsing against whichever account is current.
    """

    category_id: str


@dataclass(frozen=True, slots=True)
class ByAccountAndCategory:
    """A row that carries its own account context (accounts-as-spaces)."""

    account_id: str
    category_id: str


RowIdentity: TypeAlias = ByCategory | ByAccountAndCategory


# ---------------------------------------------------------------------------
# Display values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AccountBalance:
    """An account's live balance packaged as a pseudo-space."""

    name: str
    balance_units: int
    identity: ByAccountAndCategory


@dataclass(frozen=True, slots=True)
class DisplayRow:
    """A row for the rendering layer.

    ``identity`` is a :data:`RowIdentity` for space rows and the plain
    feed-item id for transaction rows. ``columns`` line up with the view's
    column schema (see :mod:`starling_spaces.views`).
    """

    identity: RowIdentity | str
    columns: tuple[str, ...]


__all__ = [
    "CurrencyAndAmount",
    "Account",
    "Balance",
    "SavingsGoal",
    "SpendingSpace",
    "Spaces",
    "FeedItem",
    "SpendingInsight",
    "SpendingInsights",
    "ByCategory",
    "ByAccountAndCategory",
    "RowIdentity",
    "AccountBalance",
    "DisplayRow",
]
