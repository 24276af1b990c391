"""Mini README: In-memory budget ledger for Budget Buddy.

This package holds the model behind every screen of the expense tracker:
categories with auto-assigned palette colors, dated transactions, and the
pure aggregation functions (total spent, category breakdown, date groups)
that are recomputed on each read. ``BudgetStore`` ties them together and is
the object outer layers should hold on to.
"""

from .aggregation import (
    BudgetSummary,
    CategorySpend,
    DateGroup,
    budget_usage_percent,
    category_breakdown,
    group_by_date,
    remaining_budget,
    summarise_budget,
    total_income,
    total_spent,
)
from .categories import DEFAULT_ICON, Category, CategoryRegistry
from .errors import NotFoundError, ValidationError, ValidationReason
from .palette import CATEGORY_COLORS, STRIDE, color_for_index, palette_order
from .store import BudgetStore
from .transactions import Transaction, TransactionLedger

__all__ = [
    "BudgetStore",
    "BudgetSummary",
    "CATEGORY_COLORS",
    "Category",
    "CategoryRegistry",
    "CategorySpend",
    "DEFAULT_ICON",
    "DateGroup",
    "NotFoundError",
    "STRIDE",
    "Transaction",
    "TransactionLedger",
    "ValidationError",
    "ValidationReason",
    "budget_usage_percent",
    "category_breakdown",
    "color_for_index",
    "group_by_date",
    "palette_order",
    "remaining_budget",
    "summarise_budget",
    "total_income",
    "total_spent",
]
