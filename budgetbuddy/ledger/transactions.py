"""Mini README: In-memory transaction ledger for income and expense entries.

Structure:
    * Transaction - dataclass storing a dated, categorised monetary entry.
    * TransactionLedger - validated add/update/delete plus ordered queries.

Amounts are signed: negative values are expenses and positive values are
income. The ledger validates titles, amounts and dates itself and leaves the
collection untouched whenever it rejects input. It stores category ids only;
checking that a category exists is the job of whoever owns both the ledger
and the category registry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ._clock import Clock, utc_now
from .errors import NotFoundError, ValidationError, ValidationReason

LOGGER = get_logger(__name__)

TITLE_MAX_LENGTH = 100
PATCHABLE_FIELDS = frozenset({"title", "amount", "category_id", "occurred_on", "note"})


@dataclass(slots=True)
class Transaction:
    """Represent a ledger entry; negative amounts are spending."""

    transaction_id: str
    title: str
    amount: float
    category_id: str
    occurred_on: date
    created_at: datetime
    note: Optional[str] = None

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "title": self.title,
            "amount": self.amount,
            "category_id": self.category_id,
            "occurred_on": self.occurred_on.isoformat(),
            "created_at": self.created_at.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Transaction":
        """Rebuild a transaction exported with ``as_dict``."""

        return cls(
            transaction_id=str(payload["transaction_id"]),
            title=validate_title(payload["title"]),
            amount=validate_amount(payload["amount"]),
            category_id=validate_category_id(payload["category_id"]),
            occurred_on=parse_date(payload["occurred_on"]),
            created_at=datetime.fromisoformat(str(payload["created_at"])),
            note=_clean_note(payload.get("note")),
        )


def validate_title(value: object) -> str:
    """Trim a title and enforce the non-empty and length rules."""

    title = "" if value is None else str(value).strip()
    if not title:
        raise ValidationError(ValidationReason.EMPTY_TITLE, "Transaction title must not be empty.")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            ValidationReason.TITLE_TOO_LONG,
            f"Transaction title must be at most {TITLE_MAX_LENGTH} characters.",
        )
    return title


def validate_amount(value: object) -> float:
    """Coerce an amount to float, rejecting booleans, junk and non-finite values."""

    if isinstance(value, bool):
        raise ValidationError(ValidationReason.INVALID_AMOUNT, "Amount must be a number.")
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise ValidationError(
            ValidationReason.INVALID_AMOUNT, f"Amount must be a number, got {value!r}."
        ) from error
    if not math.isfinite(amount):
        raise ValidationError(ValidationReason.INVALID_AMOUNT, "Amount must be finite.")
    return amount


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValidationError(
                ValidationReason.INVALID_DATE, f"Dates must use YYYY-MM-DD, got {value!r}."
            ) from error
    raise ValidationError(
        ValidationReason.INVALID_DATE,
        "Dates must be provided as ISO strings or date/datetime instances.",
    )


def validate_category_id(value: object) -> str:
    """Require a non-blank category reference."""

    category_id = "" if value is None else str(value).strip()
    if not category_id:
        raise ValidationError(
            ValidationReason.INVALID_CATEGORY, "Transactions must reference a category."
        )
    return category_id


def _clean_note(value: object) -> Optional[str]:
    if value is None:
        return None
    note = str(value).strip()
    return note or None


def _coerce_changes(changes: Dict[str, object]) -> Dict[str, object]:
    """Validate and coerce a partial update payload."""

    coerced: Dict[str, object] = {}
    for key, value in changes.items():
        if key not in PATCHABLE_FIELDS:
            raise ValidationError(
                ValidationReason.UNSUPPORTED_FIELD,
                f"Update of transaction field '{key}' is not supported.",
            )
        if key == "title":
            coerced[key] = validate_title(value)
        elif key == "amount":
            coerced[key] = validate_amount(value)
        elif key == "occurred_on":
            coerced[key] = parse_date(value)
        elif key == "category_id":
            coerced[key] = validate_category_id(value)
        else:
            coerced[key] = _clean_note(value)
    return coerced


class TransactionLedger:
    """Manage the collection of transactions."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        sequence: int = 0,
        clock: Optional[Clock] = None,
    ) -> None:
        self._transactions: Dict[str, Transaction] = {}
        self._sequence = sequence
        self._clock = clock or utc_now
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("Transaction ledger initialised with %s entries", len(self._transactions))

    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def sequence(self) -> int:
        """Highest identifier number handed out so far."""

        return self._sequence

    def _next_id(self) -> str:
        """Generate a sequential transaction identifier."""

        self._sequence += 1
        return f"txn_{self._sequence:04d}"

    def _register(self, transaction: Transaction) -> None:
        """Store a transaction ensuring identifiers remain unique."""

        if transaction.transaction_id in self._transactions:
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions[transaction.transaction_id] = transaction
        suffix = transaction.transaction_id.rsplit("_", 1)[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def add(
        self,
        title: object,
        amount: object,
        category_id: str,
        occurred_on: object,
        note: Optional[str] = None,
    ) -> Transaction:
        """Validate and record a new transaction."""

        clean_title = validate_title(title)
        clean_amount = validate_amount(amount)
        clean_date = parse_date(occurred_on)
        transaction = Transaction(
            transaction_id=self._next_id(),
            title=clean_title,
            amount=clean_amount,
            category_id=validate_category_id(category_id),
            occurred_on=clean_date,
            created_at=self._clock(),
            note=_clean_note(note),
        )
        self._register(transaction)
        LOGGER.info(
            "Added transaction %s (%.2f) on %s",
            transaction.transaction_id,
            transaction.amount,
            transaction.occurred_on.isoformat(),
        )
        return transaction

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def require(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising ``NotFoundError`` when missing."""

        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError("transaction", transaction_id)
        return transaction

    def update(self, transaction_id: str, changes: Optional[Dict[str, object]] = None) -> Transaction:
        """Apply a partial patch; id and ``created_at`` never change."""

        current = self.require(transaction_id)
        coerced = _coerce_changes(changes or {})
        if not coerced:
            return current
        updated = replace(current, **coerced)
        self._transactions[transaction_id] = updated
        LOGGER.info("Updated transaction %s fields: %s", transaction_id, sorted(coerced))
        return updated

    def delete(self, transaction_id: str) -> None:
        self.require(transaction_id)
        del self._transactions[transaction_id]
        LOGGER.info("Deleted transaction %s", transaction_id)

    def list(self) -> List[Transaction]:
        """Return every transaction, most recently entered first."""

        return newest_first(self._transactions.values())

    def list_by_date(self, occurred_on: object) -> List[Transaction]:
        """Return transactions dated ``occurred_on``, most recently entered first."""

        target = parse_date(occurred_on)
        return newest_first(
            transaction
            for transaction in self._transactions.values()
            if transaction.occurred_on == target
        )

    def count_by_category(self, category_id: str) -> int:
        return sum(
            1 for transaction in self._transactions.values() if transaction.category_id == category_id
        )

    def delete_by_category(self, category_id: str) -> int:
        """Remove every transaction filed under ``category_id``; return how many went."""

        doomed = [
            transaction_id
            for transaction_id, transaction in self._transactions.items()
            if transaction.category_id == category_id
        ]
        for transaction_id in doomed:
            del self._transactions[transaction_id]
        if doomed:
            LOGGER.info("Deleted %s transactions for category %s", len(doomed), category_id)
        return len(doomed)


def newest_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Sort by ``created_at`` descending; later insertions win timestamp ties."""

    return sorted(
        reversed(list(transactions)),
        key=lambda transaction: transaction.created_at,
        reverse=True,
    )
