"""Mini README: Owned budget store combining registry, ledger and budget.

Structure:
    * BudgetStore - the single object UI and HTTP layers talk to.

The store is constructed once at start-up and handed to whichever layer
needs it. It serialises every operation with a re-entrant lock scoped to the
registry and ledger together, which keeps the two compound steps atomic:
deleting a category together with its transactions, and reading then
advancing the auto-color counter. Aggregates are recomputed from current
state on every read.

Snapshots hold one record collection per entity keyed by id plus the scalar
budget and the color counter, which is enough for a storage layer to restore
identical behaviour after a restart.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from ..configuration import get_settings
from ..logging_utils import get_logger
from . import aggregation
from ._clock import Clock
from .aggregation import BudgetSummary, CategorySpend, DateGroup
from .categories import Category, CategoryRegistry
from .errors import NotFoundError
from .transactions import (
    Transaction,
    TransactionLedger,
    validate_amount,
    validate_category_id,
)

LOGGER = get_logger(__name__)


class BudgetStore:
    """Expose the read and write operations over categories, transactions and budget."""

    def __init__(
        self,
        *,
        initial_budget: Optional[float] = None,
        categories: Optional[List[Category]] = None,
        transactions: Optional[List[Transaction]] = None,
        next_color_index: int = 0,
        id_sequences: Optional[Dict[str, int]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        sequences = id_sequences or {}
        self._lock = threading.RLock()
        self._closed = False
        self._ledger = TransactionLedger(
            transactions, sequence=sequences.get("transactions", 0), clock=clock
        )
        self._registry = CategoryRegistry(
            self._ledger,
            categories,
            next_color_index=next_color_index,
            sequence=sequences.get("categories", 0),
            clock=clock,
        )
        for transaction in self._ledger.list():
            self._require_category(transaction.category_id)
        if initial_budget is None:
            initial_budget = get_settings().default_monthly_budget
        self._budget = validate_amount(initial_budget)
        LOGGER.debug(
            "Budget store ready: %s categories, %s transactions, budget %.2f",
            len(self._registry),
            len(self._ledger),
            self._budget,
        )

    @contextmanager
    def _writing(self) -> Iterator[None]:
        """Hold the store lock for a mutation, refusing writes once closed."""

        with self._lock:
            if self._closed:
                raise RuntimeError("Budget store is closed")
            yield

    # Lifecycle -----------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> Dict[str, object]:
        """Export state keyed by id, oldest records first."""

        with self._lock:
            return {
                "budget": self._budget,
                "next_color_index": self._registry.next_color_index,
                "id_sequences": {
                    "categories": self._registry.sequence,
                    "transactions": self._ledger.sequence,
                },
                "categories": {
                    category.category_id: category.as_dict() for category in self._registry.list()
                },
                "transactions": {
                    transaction.transaction_id: transaction.as_dict()
                    for transaction in reversed(self._ledger.list())
                },
            }

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, object], *, clock: Optional[Clock] = None) -> "BudgetStore":
        """Rebuild a store from ``snapshot`` output, color counter included.

        Records go through the same validation as fresh input, and a
        transaction filed under a category missing from the snapshot raises
        ``NotFoundError`` rather than restoring an orphan.
        """

        categories = [
            Category.from_dict(payload)
            for payload in dict(snapshot.get("categories") or {}).values()
        ]
        transactions = [
            Transaction.from_dict(payload)
            for payload in dict(snapshot.get("transactions") or {}).values()
        ]
        store = cls(
            initial_budget=snapshot.get("budget"),  # type: ignore[arg-type]
            categories=categories,
            transactions=transactions,
            next_color_index=int(snapshot.get("next_color_index", 0)),  # type: ignore[arg-type]
            id_sequences=dict(snapshot.get("id_sequences") or {}),  # type: ignore[arg-type]
            clock=clock,
        )
        LOGGER.info("Restored budget store from snapshot")
        return store

    def flush(self) -> Dict[str, object]:
        """Return the snapshot a persistence layer should write."""

        snapshot = self.snapshot()
        LOGGER.debug(
            "Flushing %s categories and %s transactions",
            len(snapshot["categories"]),  # type: ignore[arg-type]
            len(snapshot["transactions"]),  # type: ignore[arg-type]
        )
        return snapshot

    def close(self) -> Dict[str, object]:
        """Flush one last time and refuse further writes."""

        with self._lock:
            snapshot = self.flush()
            self._closed = True
        LOGGER.info("Budget store closed")
        return snapshot

    # Budget ----------------------------------------------------------------

    @property
    def budget(self) -> float:
        return self._budget

    def set_budget(self, amount: float) -> float:
        """Replace the monthly budget; negative values are accepted."""

        clean = validate_amount(amount)
        with self._writing():
            self._budget = clean
        LOGGER.info("Monthly budget set to %.2f", clean)
        return clean

    # Categories ------------------------------------------------------------

    def list_categories(self) -> List[Category]:
        with self._lock:
            return self._registry.list()

    def get_category(self, category_id: str) -> Optional[Category]:
        with self._lock:
            return self._registry.get(category_id)

    def peek_next_color(self) -> str:
        with self._lock:
            return self._registry.peek_next_color()

    def add_category(self, name: str, icon: Optional[str] = None, color: Optional[str] = None) -> Category:
        with self._writing():
            return self._registry.add(name, icon=icon, color=color)

    def update_category(self, category_id: str, changes: Optional[Dict[str, object]] = None) -> Category:
        with self._writing():
            return self._registry.update(category_id, changes)

    def count_transactions_for_category(self, category_id: str) -> int:
        """How many transactions deleting ``category_id`` would remove."""

        with self._lock:
            self._registry.require(category_id)
            return self._ledger.count_by_category(category_id)

    def delete_category(self, category_id: str) -> int:
        """Delete a category and its transactions as one step."""

        with self._writing():
            return self._registry.delete(category_id)

    # Transactions ----------------------------------------------------------

    def list_transactions(self) -> List[Transaction]:
        with self._lock:
            return self._ledger.list()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with self._lock:
            return self._ledger.get(transaction_id)

    def list_by_date(self, occurred_on: object) -> List[Transaction]:
        with self._lock:
            return self._ledger.list_by_date(occurred_on)

    def add_transaction(
        self,
        title: str,
        amount: float,
        category_id: str,
        occurred_on: object,
        note: Optional[str] = None,
    ) -> Transaction:
        """Record a transaction against an existing category."""

        with self._writing():
            self._require_category(category_id)
            return self._ledger.add(title, amount, category_id, occurred_on, note=note)

    def update_transaction(
        self, transaction_id: str, changes: Optional[Dict[str, object]] = None
    ) -> Transaction:
        with self._writing():
            self._ledger.require(transaction_id)
            if changes and "category_id" in changes:
                self._require_category(changes["category_id"])
            return self._ledger.update(transaction_id, changes)

    def delete_transaction(self, transaction_id: str) -> None:
        with self._writing():
            self._ledger.delete(transaction_id)

    def _require_category(self, category_id: object) -> None:
        """Reject blank references and ids missing from the registry."""

        category_id = validate_category_id(category_id)
        if self._registry.get(category_id) is None:
            LOGGER.warning("Rejected transaction for unknown category %s", category_id)
            raise NotFoundError("category", category_id)

    # Aggregates ------------------------------------------------------------

    def total_spent(self) -> float:
        with self._lock:
            return aggregation.total_spent(self._ledger.list())

    def category_breakdown(self) -> List[CategorySpend]:
        with self._lock:
            return aggregation.category_breakdown(self._ledger.list(), self._registry.list())

    def group_by_date(self) -> List[DateGroup]:
        with self._lock:
            return aggregation.group_by_date(self._ledger.list())

    def remaining_budget(self) -> float:
        with self._lock:
            return aggregation.remaining_budget(self._budget, self.total_spent())

    def summary(self) -> BudgetSummary:
        with self._lock:
            return aggregation.summarise_budget(self._budget, self._ledger.list())
