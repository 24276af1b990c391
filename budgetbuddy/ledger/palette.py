"""Mini README: Category color palette and the prime-stride assignment rule.

Structure:
    * CATEGORY_COLORS - 30 curated hex colors sorted across the spectrum.
    * STRIDE - step applied to creation indices before wrapping.
    * color_for_index - deterministic index -> color mapping.
    * palette_order - the full permutation produced by the stride.

Consecutive creation indices are multiplied by a prime stride so that two
categories created back to back land far apart in the palette rather than
on neighbouring, similar hues. The palette order and stride must not change
or previously assigned colors stop lining up with their indices.
"""

from __future__ import annotations

from typing import List, Tuple

CATEGORY_COLORS: Tuple[str, ...] = (
    # Reds & warmth
    "#FF3B30",
    "#E74C3C",
    "#C0392B",
    "#D35400",
    "#E67E22",
    "#F39C12",
    # Yellows & olives
    "#F1C40F",
    "#D4AC0D",
    "#AFB42B",
    "#8D6E63",
    "#A1887F",
    "#CD6155",
    # Greens & teals
    "#2ECC71",
    "#27AE60",
    "#16A085",
    "#1ABC9C",
    "#009688",
    "#006266",
    # Blues
    "#2980B9",
    "#3498DB",
    "#0984E3",
    "#1E3799",
    "#2C3E50",
    "#607D8B",
    # Purples & pinks
    "#6C5CE7",
    "#8E44AD",
    "#9B59B6",
    "#BE2EDD",
    "#E84393",
    "#C44569",
)

STRIDE = 7


def color_for_index(index: int) -> str:
    """Return the palette color for a creation index, wrapping past the end."""

    if index < 0:
        raise ValueError(f"Color index must be non-negative, got {index}")
    return CATEGORY_COLORS[(index * STRIDE) % len(CATEGORY_COLORS)]


def palette_order() -> List[str]:
    """Colors in the order successive auto-colored categories receive them."""

    return [color_for_index(index) for index in range(len(CATEGORY_COLORS))]
