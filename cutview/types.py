# cutview/types.py
# Core data structures for a solved two-stage guillotine plan.
# Keep this file dependency-light so it can be imported everywhere.
#
# Model convention:
#   - origin at the bottom-left corner of the stock, Y grows upward
#   - width  = extent along Y (up/down)
#   - length = extent along X (left/right)
#
# Pixel convention (Rect): origin at the top-left, Y grows downward.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


# ----------------------------
# Model space
# ----------------------------

@dataclass(frozen=True)
class StockSpec:
    """Raw stock sheet. `length >= width` by convention, not enforced."""
    width: int
    length: int

    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.length <= 0


@dataclass(frozen=True)
class Strip:
    """Stage-1 band of a plate: [y, y + width] along Y."""
    strip_id: int
    y: int
    width: int

    @property
    def top(self) -> int:
        return self.y + self.width


# Items of legacy documents carry no stage-1 association.
NO_STRIP = -1


@dataclass(frozen=True)
class Item:
    """Stage-2 piece; (x, y) is its bottom-left corner."""
    item_type: int
    x: int
    y: int
    width: int
    length: int
    strip_id: int = NO_STRIP

    @property
    def right(self) -> int:
        return self.x + self.length

    @property
    def top(self) -> int:
        return self.y + self.width


@dataclass(frozen=True)
class Plate:
    """One cut sheet of the solution."""
    plate_id: int
    utilization: float = 0.0
    strips: Tuple[Strip, ...] = ()
    items: Tuple[Item, ...] = ()


@dataclass(frozen=True)
class Solution:
    """Document root: stock size, declared item types, plates in order."""
    stock: StockSpec
    item_type_count: int = 0
    plates: Tuple[Plate, ...] = field(default_factory=tuple)

    def num_plates(self) -> int:
        return len(self.plates)


# ----------------------------
# Pixel space
# ----------------------------

@dataclass(frozen=True)
class Rect:
    """Axis-aligned pixel rectangle (top-left origin, Y down)."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inset(self, dx: int, dy: int) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width - 2 * dx, self.height - 2 * dy)


@dataclass(frozen=True)
class Color:
    """8-bit RGB color."""
    r: int
    g: int
    b: int

    def to_unit(self) -> Tuple[float, float, float]:
        return (self.r / 255, self.g / 255, self.b / 255)

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
