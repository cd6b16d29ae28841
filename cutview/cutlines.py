# cutview/cutlines.py
# Two-stage guillotine cut overlay:
#   - stage 1: horizontal lines separating strips (full stock length)
#   - stage 2: vertical lines separating items inside one strip
#
# Both stages are stroked with flat caps. Where a stage-2 line ends on a
# stage-1 line, its endpoint is pulled back by half the stroke width so the
# two strokes never share pixels.

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple

from .commands import Line
from .config import DEFAULTS, DEFAULT_STYLE, RenderStyle, half_width
from .transform import Transform
from .types import Plate, StockSpec


@dataclass(frozen=True)
class CutLines:
    stage1: Tuple[Line, ...]
    stage2: Tuple[Line, ...]
    # Model Y of every drawn stage-1 line (coincidence test only)
    red_y: FrozenSet[int]

    def commands(self) -> List[Line]:
        """Stage 1 first, so stage-2 strokes paint on top."""
        return list(self.stage1) + list(self.stage2)


def collect_boundaries(plate: Plate, stock: StockSpec) -> Dict[int, List[int]]:
    """
    Right edges of items grouped by strip_id, in item order.
    Edges on the stock's right border are not cuts.
    """
    groups: Dict[int, List[int]] = {}
    for it in plate.items:
        if it.right < stock.length:
            groups.setdefault(it.strip_id, []).append(it.right)
    return groups


def resolve_cut_lines(
    plate: Plate,
    stock: StockSpec,
    transform: Transform,
    style: Optional[RenderStyle] = None,
    stroke: Optional[int] = None,
) -> CutLines:
    style = style or DEFAULT_STYLE
    stroke = DEFAULTS.cut_line_width if stroke is None else stroke
    trim = half_width(stroke)
    stock_rect = transform.stock_rect

    stage1: List[Line] = []
    red_y = set()
    for strip in plate.strips:
        top = strip.top
        # The outer top edge is the stock border, not a cut
        if top < stock.width:
            red_y.add(top)
            y = transform.y_px(top)
            stage1.append(Line(stock_rect.x, y, stock_rect.right, y, style.stage1_line, stroke))

    # Legacy items (strip_id == -1) never match a strip and get no overlay
    groups = collect_boundaries(plate, stock)

    stage2: List[Line] = []
    for strip in plate.strips:
        xs = groups.get(strip.strip_id)
        if not xs:
            continue
        top_px = transform.y_px(strip.top)
        bottom_px = transform.y_px(strip.y)
        if strip.top in red_y:
            top_px += trim
        if strip.y in red_y:
            bottom_px -= trim
        for x in xs:
            x_px = transform.x_px(x)
            stage2.append(Line(x_px, top_px, x_px, bottom_px, style.stage2_line, stroke))

    return CutLines(stage1=tuple(stage1), stage2=tuple(stage2), red_y=frozenset(red_y))
