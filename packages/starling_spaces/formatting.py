"""Display formatting for money, category codes and timestamps.

All helpers are pure. Money is single-currency: minor units are rendered as
``units / 100`` with exactly two fractional digits and no currency symbol or
thousands separator.
"""

from __future__ import annotations

from datetime import datetime


def format_money(units: int) -> str:
    """Render integer minor units as a two-decimal string.

    Any integer is accepted, including negatives (``-500`` → ``"-5.00"``,
    ``-5`` → ``"-0.05"``). Integer arithmetic only, so there is no float
    rounding.
    """

    sign = "-" if units < 0 else ""
    major, minor = divmod(abs(int(units)), 100)
    return f"{sign}{major}.{minor:02d}"


def format_signed_amount(units: int, direction: str | None) -> str:
    """Render a feed amount with a leading ``-`` for outgoing money.

    Feed amounts are always non-negative with a separate ``IN``/``OUT``
    direction; the transaction list shows them as a signed value.
    """

    if (direction or "").upper() == "OUT":
        return format_money(-abs(units))
    return format_money(units)


def format_category(code: str) -> str:
    """Turn an upper-snake-case code into a spaced, title-cased label.

    ``EATING_OUT`` → ``Eating Out``; ``DIY`` → ``Diy``. Unknown codes are
    transformed mechanically, never rejected.
    """

    words = code.replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def format_timestamp(value: datetime | str | None) -> str:
    """Render a server timestamp as ``YYYY-MM-DD HH:MM``.

    Strings that don't parse as ISO-8601 are returned unchanged; ``None``
    renders as an empty string.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M")


__all__ = [
    "format_money",
    "format_signed_amount",
    "format_category",
    "format_timestamp",
]
