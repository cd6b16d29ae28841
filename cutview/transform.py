# cutview/transform.py
# Model space -> viewport pixel space.
#
# The stock is scaled uniformly to fit the viewport (keeping a margin on the
# binding axis) and centered. Model Y grows upward, pixel Y grows downward,
# so every vertical position is flipped against stock.width.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULTS
from .types import Rect, StockSpec

# Absorbs binary float error so that e.g. 200 * 1.8525 rounds to 371.
_ROUND_EPS = 1e-6


def round_px(v: float) -> int:
    """Round half up to an integer pixel."""
    return int(math.floor(v + 0.5 + _ROUND_EPS))


@dataclass(frozen=True)
class Transform:
    stock: StockSpec
    scale: float
    offset_x: int
    offset_y: int
    stock_w_px: int
    stock_h_px: int

    @property
    def stock_rect(self) -> Rect:
        return Rect(self.offset_x, self.offset_y, self.stock_w_px, self.stock_h_px)

    def x_px(self, mx: float) -> int:
        return self.offset_x + round_px(mx * self.scale)

    def y_px(self, my: float) -> int:
        """Pixel row of the horizontal model line at height `my`."""
        return self.offset_y + round_px((self.stock.width - my) * self.scale)

    def length_px(self, extent: float) -> int:
        return round_px(extent * self.scale)

    def map_rect(self, mx: float, my: float, extent_x: float, extent_y: float) -> Rect:
        """Pixel rect of the model rectangle anchored (bottom-left) at (mx, my)."""
        return Rect(
            x=self.x_px(mx),
            y=self.y_px(my + extent_y),
            width=self.length_px(extent_x),
            height=self.length_px(extent_y),
        )


def build_transform(
    stock: StockSpec,
    viewport: Rect,
    fit_factor: Optional[float] = None,
) -> Optional[Transform]:
    """
    Fit `stock` into `viewport`. Returns None for degenerate stock or an empty
    viewport; callers render a placeholder instead.
    """
    if stock.is_degenerate() or viewport.is_empty():
        return None
    fit = DEFAULTS.fit_factor if fit_factor is None else fit_factor

    scale_x = viewport.width / stock.length
    scale_y = viewport.height / stock.width
    scale = min(scale_x, scale_y) * fit

    stock_w_px = round_px(stock.length * scale)
    stock_h_px = round_px(stock.width * scale)

    return Transform(
        stock=stock,
        scale=scale,
        offset_x=viewport.x + (viewport.width - stock_w_px) // 2,
        offset_y=viewport.y + (viewport.height - stock_h_px) // 2,
        stock_w_px=stock_w_px,
        stock_h_px=stock_h_px,
    )
