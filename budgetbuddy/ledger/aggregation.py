"""Mini README: Derived budget figures computed from the current ledger state.

Structure:
    * CategorySpend - one slice of the spending breakdown.
    * DateGroup - transactions sharing a calendar date with their signed total.
    * BudgetSummary - header figures for the monthly budget view.
    * total_spent / total_income / category_breakdown / group_by_date
    * remaining_budget / budget_usage_percent / summarise_budget

Every function is pure and recomputes from the sequences it is given. The
data sets are small enough that recomputing on each read is cheaper than
keeping cached aggregates in sync with edits.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Sequence

from .categories import Category
from .transactions import Transaction, newest_first


@dataclass(slots=True)
class CategorySpend:
    """Total spent in a category and its percentage of all spending."""

    category: Category
    amount: float
    share: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "category": self.category.as_dict(),
            "amount": self.amount,
            "share": self.share,
        }


@dataclass(slots=True)
class DateGroup:
    """Transactions on one calendar date, newest entry first."""

    occurred_on: date
    transactions: List[Transaction]
    total: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "occurred_on": self.occurred_on.isoformat(),
            "transactions": [transaction.as_dict() for transaction in self.transactions],
            "total": self.total,
        }


@dataclass(slots=True)
class BudgetSummary:
    """Figures shown in the budget header."""

    monthly_budget: float
    total_spent: float
    total_income: float
    remaining: float
    percent_used: float

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "monthly_budget": self.monthly_budget,
            "total_spent": self.total_spent,
            "total_income": self.total_income,
            "remaining": self.remaining,
            "percent_used": self.percent_used,
            "is_over_budget": self.is_over_budget,
        }


def total_spent(transactions: Sequence[Transaction]) -> float:
    """Sum of expense magnitudes; income is not netted off."""

    return sum(
        (abs(transaction.amount) for transaction in transactions if transaction.amount < 0), 0.0
    )


def total_income(transactions: Sequence[Transaction]) -> float:
    return sum((transaction.amount for transaction in transactions if transaction.amount > 0), 0.0)


def category_breakdown(
    transactions: Sequence[Transaction], categories: Sequence[Category]
) -> List[CategorySpend]:
    """Spending per category, largest first, omitting categories with no spend.

    ``categories`` must be in registry order; equal totals keep that order.
    Expenses filed under an id missing from ``categories`` are ignored.
    """

    sums: Dict[str, float] = {}
    for transaction in transactions:
        if transaction.amount < 0:
            sums[transaction.category_id] = sums.get(transaction.category_id, 0.0) + abs(
                transaction.amount
            )

    slices = [
        CategorySpend(category=category, amount=sums[category.category_id])
        for category in categories
        if category.category_id in sums
    ]
    slices.sort(key=lambda entry: entry.amount, reverse=True)

    grand_total = sum(entry.amount for entry in slices)
    for entry in slices:
        entry.share = (entry.amount / grand_total) * 100 if grand_total > 0 else 0.0
    return slices


def group_by_date(transactions: Sequence[Transaction]) -> List[DateGroup]:
    """Partition by calendar date, most recent date first.

    Group totals keep their sign, unlike the category breakdown.
    """

    buckets: Dict[date, List[Transaction]] = {}
    for transaction in newest_first(transactions):
        buckets.setdefault(transaction.occurred_on, []).append(transaction)

    return [
        DateGroup(
            occurred_on=occurred_on,
            transactions=entries,
            total=sum((entry.amount for entry in entries), 0.0),
        )
        for occurred_on, entries in sorted(buckets.items(), key=lambda item: item[0], reverse=True)
    ]


def remaining_budget(monthly_budget: float, spent: float) -> float:
    """Budget left to spend; negative when over budget."""

    return monthly_budget - spent


def budget_usage_percent(monthly_budget: float, spent: float) -> float:
    """Percentage of the budget used, capped at 100."""

    if monthly_budget <= 0:
        return 100.0 if spent > 0 else 0.0
    return min(spent / monthly_budget * 100, 100.0)


def summarise_budget(monthly_budget: float, transactions: Sequence[Transaction]) -> BudgetSummary:
    spent = total_spent(transactions)
    return BudgetSummary(
        monthly_budget=monthly_budget,
        total_spent=spent,
        total_income=total_income(transactions),
        remaining=remaining_budget(monthly_budget, spent),
        percent_used=budget_usage_percent(monthly_budget, spent),
    )
