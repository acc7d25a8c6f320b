"""Spending-category allow-list and edit-time validation.

The bank API has no endpoint that enumerates valid spending categories, so
the vocabulary is kept here as static data. Validation happens only when a
category edit is requested; display formatting
(:func:`starling_spaces.formatting.format_category`) accepts any code.
"""

from __future__ import annotations

from .errors import ValidationError
from .formatting import format_category

# Personal and business spending categories accepted by the feed
# ``spending-category`` endpoint.
SPENDING_CATEGORIES: tuple[str, ...] = (
    "ACCOMMODATION",
    "ADMIN",
    "ADVERTISING",
    "BANK_CHARGES",
    "BIKE",
    "BILLS_AND_SERVICES",
    "BUCKET_LIST",
    "BUSINESS_ENTERTAINMENT",
    "CAR",
    "CASH",
    "CELEBRATION",
    "CHARITY",
    "CHILDREN",
    "CLOTHES",
    "COFFEE",
    "COMMUNICATIONS",
    "CORPORATION_TAX",
    "DEBT_REPAYMENT",
    "DIRECTORS_WAGES",
    "DIVIDENDS",
    "DIY",
    "DRINKS",
    "EATING_OUT",
    "EDUCATION",
    "EMERGENCY",
    "EMPLOYEES",
    "ENTERTAINMENT",
    "EQUIPMENT",
    "ESSENTIAL_SPEND",
    "EXPENSES",
    "FAMILY",
    "FITNESS",
    "FUEL",
    "GAMBLING",
    "GAMING",
    "GARDEN",
    "GENERAL",
    "GIFTS",
    "GROCERIES",
    "HOBBY",
    "HOLIDAYS",
    "HOME",
    "IMPULSE_BUY",
    "INCOME",
    "INSURANCE",
    "INTEREST",
    "INVESTMENTS",
    "INVOICE_PAYMENTS",
    "IT_EQUIPMENT",
    "LEGAL",
    "LIFESTYLE",
    "LOAN_PRINCIPAL",
    "LOAN_REPAYMENTS",
    "MAINTENANCE_AND_REPAIRS",
    "MARKETING",
    "MATERIALS",
    "MEALS",
    "MEDICAL",
    "MORTGAGE",
    "NONE",
    "OFFICE_COSTS",
    "OTHER",
    "PAYMENTS",
    "PAYROLL",
    "PENSIONS",
    "PERSONAL_CARE",
    "PERSONAL_TRANSFERS",
    "PETS",
    "PROFESSIONAL_SERVICES",
    "PROJECTS",
    "REFUNDS",
    "RELATIONSHIPS",
    "RENT",
    "REVENUE",
    "SALARY",
    "SAVING",
    "SHOPPING",
    "SOFTWARE",
    "STOCK",
    "SUBCONTRACTORS",
    "SUBSCRIPTIONS",
    "SUBSISTENCE",
    "TAKEAWAY",
    "TAXI",
    "TRAINING",
    "TRANSPORT",
    "TRAVEL",
    "UTILITIES",
    "VAT",
    "VEHICLES",
    "WEDDING",
    "WELLBEING",
)

_ALLOWED: frozenset[str] = frozenset(SPENDING_CATEGORIES)


def is_known_category(code: str) -> bool:
    return code in _ALLOWED


def validate_category(code: str) -> str:
    """Return ``code`` normalized to upper case, or raise ``ValidationError``.

    Surrounding whitespace is trimmed and case is folded so ``"eating_out"``
    is accepted as ``EATING_OUT``; anything else outside the allow-list is
    rejected before it can reach the network.
    """

    normalized = code.strip().upper() if isinstance(code, str) else ""
    if normalized not in _ALLOWED:
        raise ValidationError(f"Unknown spending category: {code!r}")
    return normalized


def category_choices() -> list[tuple[str, str]]:
    """Return ``(code, label)`` pairs for selection menus, in allow-list order."""

    return [(code, format_category(code)) for code in SPENDING_CATEGORIES]


__all__ = [
    "SPENDING_CATEGORIES",
    "is_known_category",
    "validate_category",
    "category_choices",
]
