"""Column schemas and row builders for the rendering layer.

The renderer receives an ordered sequence of ``DisplayRow`` plus the column
schema for the view, and reports back the identity of the row the user
picked. Building rows is kept here so the browser and the CLI share one
definition of what each column shows.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from .formatting import format_category, format_signed_amount, format_timestamp
from .models import DisplayRow, FeedItem, SpendingInsight

SPACE_COLUMNS: tuple[str, ...] = ("Name", "Amount")
TRANSACTION_COLUMNS: tuple[str, ...] = ("Counterparty", "Reference", "Category", "Amount", "Time")
INSIGHT_COLUMNS: tuple[str, ...] = ("Category", "Net", "Direction", "Share %", "Count")


def transaction_row(item: FeedItem) -> DisplayRow:
    return DisplayRow(
        identity=item.feed_item_uid,
        columns=(
            item.counter_party_name or "",
            item.reference or "",
            format_category(item.spending_category) if item.spending_category else "",
            format_signed_amount(item.amount.minor_units, item.direction),
            format_timestamp(item.transaction_time),
        ),
    )


def transaction_rows(items: Iterable[FeedItem]) -> list[DisplayRow]:
    """Rows keyed by feed-item id, in the order given (no re-sorting)."""

    return [transaction_row(item) for item in items]


def _two_dp(value: Decimal | None) -> str:
    if value is None:
        return ""
    return f"{value.quantize(Decimal('0.01'))}"


def insight_rows(items: Iterable[SpendingInsight]) -> list[DisplayRow]:
    return [
        DisplayRow(
            identity=ins.spending_category,
            columns=(
                format_category(ins.spending_category),
                _two_dp(ins.net_spend),
                ins.net_direction or "",
                _two_dp(ins.percentage),
                str(ins.transaction_count),
            ),
        )
        for ins in items
    ]


def render_table(
    columns: tuple[str, ...], rows: Iterable[DisplayRow], *, numbered: bool = False
) -> str:
    """Render rows as a plain, left-aligned text table.

    With ``numbered=True`` a leading ``#`` column (1-based) is added so a
    prompt can refer to rows by position.
    """

    body = [list(r.columns) for r in rows]
    header = list(columns)
    if numbered:
        header = ["#", *header]
        body = [[str(i), *cols] for i, cols in enumerate(body, start=1)]

    widths = [len(h) for h in header]
    for cols in body:
        for i, cell in enumerate(cols):
            if i < len(widths):
                widths[i] = max(widths[i], len(cell))

    def _line(cells: list[str]) -> str:
        return "  ".join(c.ljust(w) for c, w in zip(cells, widths, strict=False)).rstrip()

    lines = [_line(header), _line(["-" * w for w in widths])]
    lines.extend(_line(cols) for cols in body)
    return "\n".join(lines)


__all__ = [
    "SPACE_COLUMNS",
    "TRANSACTION_COLUMNS",
    "INSIGHT_COLUMNS",
    "transaction_row",
    "transaction_rows",
    "insight_rows",
    "render_table",
]
