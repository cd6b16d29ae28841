# cutview/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (margins, stroke widths, export size, colors) in one place.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .types import Color


@dataclass(frozen=True)
class Defaults:
    # Fraction of the binding viewport axis used by the stock rectangle
    fit_factor: float = 0.95

    # Cut-line stroke width (px); both stages use flat caps
    cut_line_width: int = 3

    # Item labels are only drawn when the item is larger than this (px)
    label_min_w: int = 30
    label_min_h: int = 20

    font_size: int = 8

    # Dimension annotations: gap between stock edge and label, label box height (px)
    dim_label_gap: int = 15
    dim_label_height: int = 15

    # Stroke widths of outlines (px)
    canvas_border_width: int = 1
    stock_border_width: int = 2
    item_border_width: int = 1

    # Export raster
    export_width: int = 800
    export_height: int = 600
    export_margin: int = 20
    export_dpi: int = 100

    # Interactive view chrome: navigation bar height and inset around the canvas
    nav_bar_height: int = 40
    canvas_inset: int = 10


DEFAULTS = Defaults()


@dataclass(frozen=True)
class RenderStyle:
    canvas_fill: Color = Color(250, 250, 250)
    canvas_border: Color = Color(160, 160, 164)
    placeholder_text: Color = Color(160, 160, 164)
    stock_fill: Color = Color(220, 220, 220)
    stock_border: Color = Color(0, 0, 0)
    item_border: Color = Color(0, 0, 0)
    item_label: Color = Color(0, 0, 0)
    stage1_line: Color = Color(200, 50, 50)
    stage2_line: Color = Color(50, 100, 180)
    dim_text: Color = Color(128, 128, 128)
    export_background: Color = Color(255, 255, 255)
    placeholder: str = "No cutting plan"


DEFAULT_STYLE = RenderStyle()


def half_width(stroke: int) -> int:
    """Integer ceiling of stroke / 2: pixels a flat-capped stroke covers on one side."""
    return (stroke + 1) // 2


def parse_size_text(size_text: str) -> Tuple[int, int]:
    """
    Parse '800x600' -> (800, 600)
    """
    s = size_text.lower().replace(" ", "")
    if "x" not in s:
        raise ValueError("size_text must be like '800x600'")
    a, b = s.split("x", 1)
    w, h = int(float(a)), int(float(b))
    if w <= 0 or h <= 0:
        raise ValueError(f"Image size must be positive, got {w}x{h}")
    return w, h
