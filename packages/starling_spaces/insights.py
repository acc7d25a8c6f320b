"""Monthly spending insights grouped by spending category."""

from __future__ import annotations

from typing import Protocol

from .client import MONTHS
from .errors import ValidationError
from .models import DisplayRow, SpendingInsights
from .views import insight_rows


class InsightsApi(Protocol):
    def get_spending_insights(
        self, account_id: str, *, year: int, month: str
    ) -> SpendingInsights: ...


def normalize_month(month: int | str) -> str:
    """Accept ``1..12``, a numeric string, or a month name; return ``"JANUARY"``-style.

    Anything else raises ``ValidationError`` before a request is made.
    """

    if isinstance(month, str):
        m = month.strip().upper()
        if m.isdecimal():
            month = int(m)
        else:
            for name in MONTHS:
                if name == m or (len(m) >= 3 and name.startswith(m)):
                    return name
            raise ValidationError(f"Unknown month: {month!r}")
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise ValidationError(f"Month must be 1-12, got {month!r}")
    return MONTHS[month - 1]


def spending_insights(
    client: InsightsApi, account_id: str, *, year: int, month: int | str
) -> list[DisplayRow]:
    """Fetch one month's per-category breakdown as rows, in server order."""

    if not 1970 <= year <= 9999:
        raise ValidationError(f"Implausible year: {year}")
    insights = client.get_spending_insights(account_id, year=year, month=normalize_month(month))
    return insight_rows(insights.breakdown)


__all__ = ["spending_insights", "normalize_month", "InsightsApi"]
