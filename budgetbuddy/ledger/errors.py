"""Mini README: Error taxonomy shared by the registry, ledger and store.

Structure:
    * ValidationReason - enumerates why caller input was rejected.
    * ValidationError - recoverable bad-input error carrying a reason.
    * NotFoundError - raised when an id does not address a live entity.

Both errors are recoverable. Operations validate before mutating, so a
raised error always leaves the store exactly as it was.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ValidationReason(str, Enum):
    """Enumerate the reasons caller input can be rejected."""

    EMPTY_NAME = "empty_name"
    NAME_TOO_LONG = "name_too_long"
    DUPLICATE_NAME = "duplicate_name"
    EMPTY_TITLE = "empty_title"
    TITLE_TOO_LONG = "title_too_long"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_DATE = "invalid_date"
    INVALID_CATEGORY = "invalid_category"
    UNSUPPORTED_FIELD = "unsupported_field"


class ValidationError(ValueError):
    """Caller supplied input that breaks a ledger rule."""

    def __init__(self, reason: ValidationReason, message: Optional[str] = None) -> None:
        self.reason = reason
        self.message = message or reason.value.replace("_", " ")
        super().__init__(self.message)


class NotFoundError(KeyError):
    """An operation addressed a category or transaction that does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} {entity_id} not found")

    def __str__(self) -> str:
        return str(self.args[0])
