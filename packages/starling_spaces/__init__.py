"""Public interface for the ``starling_spaces`` package.

Symbol re-exports only; behavior lives in the submodules.
"""

from .browser import BrowserSession, Browsing, Unselected
from .categories import SPENDING_CATEGORIES, validate_category
from .client import StarlingClient
from .edit import set_category
from .errors import (
    ConfigurationError,
    NotBrowsingError,
    StarlingSpacesError,
    TransportError,
    ValidationError,
)
from .formatting import format_category, format_money
from .insights import spending_insights
from .models import (
    Account,
    AccountBalance,
    ByAccountAndCategory,
    ByCategory,
    DisplayRow,
    FeedItem,
    SavingsGoal,
    SpendingSpace,
)
from .spaces import aggregate_spaces, load_space_rows, resolve_account_balances

__all__ = [
    # Operations
    "aggregate_spaces",
    "resolve_account_balances",
    "load_space_rows",
    "set_category",
    "spending_insights",
    "validate_category",
    "format_money",
    "format_category",
    # Session / transport
    "BrowserSession",
    "Browsing",
    "Unselected",
    "StarlingClient",
    # Models
    "Account",
    "AccountBalance",
    "ByAccountAndCategory",
    "ByCategory",
    "DisplayRow",
    "FeedItem",
    "SavingsGoal",
    "SpendingSpace",
    "SPENDING_CATEGORIES",
    # Errors
    "StarlingSpacesError",
    "ConfigurationError",
    "TransportError",
    "ValidationError",
    "NotBrowsingError",
]
