# cutview/commands.py
# Primitive draw commands consumed by a drawing sink, in painter's order.
# Coordinates are pixels (top-left origin, Y down); stroke widths are pixels.
# A DrawingSink paints them; the layout code never touches a pixel buffer.

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence, Union

from .types import Color, Rect


@dataclass(frozen=True)
class FillRect:
    rect: Rect
    color: Color


@dataclass(frozen=True)
class StrokeRect:
    rect: Rect
    color: Color
    width: int = 1


@dataclass(frozen=True)
class Line:
    """Straight segment; cap is 'butt' (flat) unless stated otherwise."""
    x0: int
    y0: int
    x1: int
    y1: int
    color: Color
    width: int = 1
    cap: str = "butt"

    def is_vertical(self) -> bool:
        return self.x0 == self.x1

    def is_horizontal(self) -> bool:
        return self.y0 == self.y1


@dataclass(frozen=True)
class Text:
    """Text centered on (x, y); rotation in degrees, counter-clockwise."""
    x: float
    y: float
    text: str
    color: Color
    font_size: int = 8
    rotation: float = 0.0


DrawCommand = Union[FillRect, StrokeRect, Line, Text]


class DrawingSink(Protocol):
    """Rasterizes a command list into a width x height file at `path`."""

    def save(
        self,
        commands: Sequence[DrawCommand],
        path: Union[str, Path],
        width: int,
        height: int,
    ) -> None: ...
