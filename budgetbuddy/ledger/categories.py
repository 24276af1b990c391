"""Mini README: Category registry with auto-colouring and cascade deletes.

Structure:
    * Category - dataclass describing a spending category.
    * CategoryRegistry - validated add/update/delete and ordered listing.

Names are trimmed, limited to 30 characters and unique ignoring case. When
a category is added without a color the registry hands out the next color
from the palette using a counter that only ever moves forward, so deleting
categories never causes a fresh one to reuse a recent color. Deleting a
category also removes its transactions from the attached ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from ._clock import Clock, utc_now
from .errors import NotFoundError, ValidationError, ValidationReason
from .palette import color_for_index
from .transactions import TransactionLedger

LOGGER = get_logger(__name__)

NAME_MAX_LENGTH = 30
DEFAULT_ICON = "cart-outline"
PATCHABLE_FIELDS = frozenset({"name", "icon", "color"})


@dataclass(slots=True)
class Category:
    """A spending category referenced by transactions."""

    category_id: str
    name: str
    icon: str
    color: str
    created_at: datetime

    def as_dict(self) -> Dict[str, object]:
        return {
            "category_id": self.category_id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "Category":
        return cls(
            category_id=str(payload["category_id"]),
            name=validate_name(payload["name"]),
            icon=str(payload.get("icon") or DEFAULT_ICON),
            color=str(payload["color"]),
            created_at=datetime.fromisoformat(str(payload["created_at"])),
        )


def validate_name(value: object) -> str:
    """Trim a category name and enforce the non-empty and length rules."""

    name = "" if value is None else str(value).strip()
    if not name:
        raise ValidationError(ValidationReason.EMPTY_NAME, "Category name must not be empty.")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            ValidationReason.NAME_TOO_LONG,
            f"Category name must be at most {NAME_MAX_LENGTH} characters.",
        )
    return name


class CategoryRegistry:
    """Own the category set, name uniqueness and the color counter."""

    def __init__(
        self,
        ledger: Optional[TransactionLedger] = None,
        categories: Optional[Iterable[Category]] = None,
        *,
        next_color_index: int = 0,
        sequence: int = 0,
        clock: Optional[Clock] = None,
    ) -> None:
        self._ledger = ledger
        self._categories: Dict[str, Category] = {}
        self._sequence = sequence
        self._next_color_index = next_color_index
        self._clock = clock or utc_now
        for category in categories or ():
            self._register(category)
        LOGGER.debug(
            "Category registry initialised with %s categories (next color index %s)",
            len(self._categories),
            self._next_color_index,
        )

    def __len__(self) -> int:
        return len(self._categories)

    @property
    def next_color_index(self) -> int:
        return self._next_color_index

    @property
    def sequence(self) -> int:
        return self._sequence

    def _next_id(self) -> str:
        self._sequence += 1
        return f"cat_{self._sequence:04d}"

    def _register(self, category: Category) -> None:
        """Store a category ensuring identifiers and names remain unique."""

        if category.category_id in self._categories:
            raise ValueError(f"Category {category.category_id} already exists.")
        self._ensure_unique(category.name)
        self._categories[category.category_id] = category
        suffix = category.category_id.rsplit("_", 1)[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def _validate_name(self, value: object, *, exclude_id: Optional[str] = None) -> str:
        name = validate_name(value)
        self._ensure_unique(name, exclude_id=exclude_id)
        return name

    def _ensure_unique(self, name: str, *, exclude_id: Optional[str] = None) -> None:
        folded = name.casefold()
        for category in self._categories.values():
            if category.category_id != exclude_id and category.name.casefold() == folded:
                LOGGER.warning("Rejected duplicate category name '%s'", name)
                raise ValidationError(
                    ValidationReason.DUPLICATE_NAME,
                    f"A category named '{category.name}' already exists.",
                )

    def peek_next_color(self) -> str:
        """Preview the color the next auto-colored category would receive.

        The counter is read again when ``add`` commits, so the preview can go
        stale if another add lands first.
        """

        return color_for_index(self._next_color_index)

    def add(self, name: object, icon: Optional[str] = None, color: Optional[str] = None) -> Category:
        """Validate and register a category, auto-assigning a color if needed."""

        clean_name = self._validate_name(name)
        if color is None:
            color = color_for_index(self._next_color_index)
            self._next_color_index += 1
        category = Category(
            category_id=self._next_id(),
            name=clean_name,
            icon=icon or DEFAULT_ICON,
            color=color,
            created_at=self._clock(),
        )
        self._register(category)
        LOGGER.info("Added category %s '%s' (%s)", category.category_id, category.name, category.color)
        return category

    def get(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def require(self, category_id: str) -> Category:
        """Retrieve a category, raising ``NotFoundError`` when missing."""

        category = self._categories.get(category_id)
        if category is None:
            raise NotFoundError("category", category_id)
        return category

    def update(self, category_id: str, changes: Optional[Dict[str, object]] = None) -> Category:
        """Patch ``name``, ``icon`` or ``color``; other fields are rejected."""

        current = self.require(category_id)
        coerced: Dict[str, object] = {}
        for key, value in (changes or {}).items():
            if key not in PATCHABLE_FIELDS:
                raise ValidationError(
                    ValidationReason.UNSUPPORTED_FIELD,
                    f"Update of category field '{key}' is not supported.",
                )
            if key == "name":
                coerced[key] = self._validate_name(value, exclude_id=category_id)
            elif key == "icon":
                coerced[key] = str(value or "").strip() or DEFAULT_ICON
            elif value is not None:
                coerced[key] = str(value)
        if not coerced:
            return current
        updated = replace(current, **coerced)
        self._categories[category_id] = updated
        LOGGER.info("Updated category %s fields: %s", category_id, sorted(coerced))
        return updated

    def delete(self, category_id: str) -> int:
        """Remove a category and its transactions; return the transactions removed."""

        self.require(category_id)
        removed = self._ledger.delete_by_category(category_id) if self._ledger is not None else 0
        del self._categories[category_id]
        LOGGER.info("Deleted category %s along with %s transactions", category_id, removed)
        return removed

    def list(self) -> List[Category]:
        """Return categories oldest first; insertion order breaks timestamp ties."""

        return sorted(self._categories.values(), key=lambda category: category.created_at)
