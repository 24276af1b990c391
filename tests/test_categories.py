"""Mini README: Tests covering the category registry.

Structure:
    * auto-color assignment and the monotonic color counter.
    * name validation (empty, too long, case-insensitive duplicates).
    * partial updates, cascade deletes and ordering.
"""

from __future__ import annotations

import pytest

from budgetbuddy.ledger import (
    DEFAULT_ICON,
    CategoryRegistry,
    NotFoundError,
    TransactionLedger,
    ValidationError,
    ValidationReason,
    color_for_index,
)


def test_add_assigns_palette_colors_in_stride_order(clock) -> None:
    """Categories without an explicit color draw successive palette entries."""

    registry = CategoryRegistry(clock=clock)
    food = registry.add("Food", icon="restaurant-outline")
    rent = registry.add("Rent")

    assert food.color == color_for_index(0)
    assert rent.color == color_for_index(1)
    assert rent.icon == DEFAULT_ICON
    assert food.category_id != rent.category_id
    assert registry.next_color_index == 2


def test_explicit_color_does_not_consume_counter(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    custom = registry.add("Travel", color="#123456")

    assert custom.color == "#123456"
    assert registry.next_color_index == 0
    assert registry.peek_next_color() == color_for_index(0)


def test_counter_survives_deletions(clock) -> None:
    """Deleting a category must not hand its color to the next one."""

    registry = CategoryRegistry(clock=clock)
    registry.add("Coffee")
    second = registry.add("Books")
    registry.delete(second.category_id)
    third = registry.add("Games")

    assert third.color == color_for_index(2)
    assert len(registry) == 2


def test_duplicate_name_is_rejected_case_insensitively(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    registry.add("Groceries")

    with pytest.raises(ValidationError) as excinfo:
        registry.add("  gROCERIES ")

    assert excinfo.value.reason is ValidationReason.DUPLICATE_NAME
    assert len(registry) == 1
    assert registry.next_color_index == 1


@pytest.mark.parametrize(
    ("name", "reason"),
    [
        ("", ValidationReason.EMPTY_NAME),
        ("    ", ValidationReason.EMPTY_NAME),
        ("x" * 31, ValidationReason.NAME_TOO_LONG),
    ],
)
def test_invalid_names_leave_registry_untouched(clock, name: str, reason: ValidationReason) -> None:
    registry = CategoryRegistry(clock=clock)

    with pytest.raises(ValidationError) as excinfo:
        registry.add(name)

    assert excinfo.value.reason is reason
    assert registry.list() == []
    assert registry.next_color_index == 0


def test_name_is_trimmed_and_thirty_characters_allowed(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    category = registry.add("  " + "y" * 30 + "  ")
    assert category.name == "y" * 30


def test_update_patches_fields_and_keeps_identity(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    original = registry.add("Food")

    renamed = registry.update(original.category_id, {"name": "FOOD", "color": "#000000"})

    assert renamed.name == "FOOD"
    assert renamed.color == "#000000"
    assert renamed.category_id == original.category_id
    assert renamed.created_at == original.created_at
    assert original.name == "Food"
    assert registry.get(original.category_id) == renamed


def test_empty_update_is_a_no_op(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    original = registry.add("Food")

    assert registry.update(original.category_id, {}) == original
    assert registry.get(original.category_id) == original


def test_update_rejects_collisions_and_protected_fields(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    registry.add("Food")
    rent = registry.add("Rent")

    with pytest.raises(ValidationError) as duplicate:
        registry.update(rent.category_id, {"name": "food"})
    with pytest.raises(ValidationError) as protected:
        registry.update(rent.category_id, {"created_at": "2020-01-01"})

    assert duplicate.value.reason is ValidationReason.DUPLICATE_NAME
    assert protected.value.reason is ValidationReason.UNSUPPORTED_FIELD
    assert registry.get(rent.category_id).name == "Rent"


def test_missing_ids_raise_not_found(clock) -> None:
    registry = CategoryRegistry(clock=clock)

    assert registry.get("cat_9999") is None
    with pytest.raises(NotFoundError):
        registry.update("cat_9999", {"name": "Ghost"})
    with pytest.raises(KeyError):
        registry.delete("cat_9999")


def test_delete_cascades_to_ledger(clock) -> None:
    """Removing a category removes every transaction filed under it."""

    ledger = TransactionLedger(clock=clock)
    registry = CategoryRegistry(ledger, clock=clock)
    food = registry.add("Food")
    rent = registry.add("Rent")
    ledger.add("Lunch", -12.5, food.category_id, "2024-05-01")
    ledger.add("Dinner", -30, food.category_id, "2024-05-02")
    ledger.add("May rent", -900, rent.category_id, "2024-05-01")

    removed = registry.delete(food.category_id)

    assert removed == 2
    assert registry.get(food.category_id) is None
    assert all(entry.category_id != food.category_id for entry in ledger.list())
    assert len(ledger) == 1


def test_list_orders_by_creation_with_insertion_tiebreak(frozen_clock) -> None:
    registry = CategoryRegistry(clock=frozen_clock)
    for name in ("Zeta", "Alpha", "Mid"):
        registry.add(name)

    assert [category.name for category in registry.list()] == ["Zeta", "Alpha", "Mid"]


def test_blank_icon_update_falls_back_to_default(clock) -> None:
    registry = CategoryRegistry(clock=clock)
    category = registry.add("Pets", icon="paw-outline")

    assert registry.update(category.category_id, {"icon": ""}).icon == DEFAULT_ICON
    assert registry.update(category.category_id, {"icon": None}).icon == DEFAULT_ICON
