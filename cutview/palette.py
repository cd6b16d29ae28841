# cutview/palette.py
# Deterministic item-type colors: a fixed 12-entry pastel palette.

from __future__ import annotations

from typing import List, Tuple

from .types import Color

PALETTE: Tuple[Color, ...] = (
    Color(255, 179, 186),  # pink
    Color(255, 223, 186),  # orange
    Color(255, 255, 186),  # yellow
    Color(186, 255, 201),  # light green
    Color(186, 225, 255),  # light blue
    Color(218, 186, 255),  # purple
    Color(255, 186, 255),  # magenta
    Color(186, 255, 255),  # cyan
    Color(255, 200, 200),  # light red
    Color(200, 255, 200),  # light green 2
    Color(200, 200, 255),  # light blue 2
    Color(255, 230, 200),  # light orange
)


def color_for(item_type: int) -> Color:
    """Palette color of a 1-based item type id."""
    if item_type <= 0:
        raise ValueError(f"item_type must be >= 1, got {item_type}")
    return PALETTE[(item_type - 1) % len(PALETTE)]


def legend(item_type_count: int) -> List[Tuple[int, Color]]:
    return [(t, color_for(t)) for t in range(1, item_type_count + 1)]
