# cutview/layout.py
# Layout facade: solution + plate index + viewport -> ordered draw commands.
#
# The interactive view and the PNG export call the same build_draw_commands;
# only the viewport differs, which is what keeps the two pixel-identical.
#
# Command order (painter's algorithm, later paints over earlier):
#   1. canvas background + border
#   2. placeholder text (no plates / bad plate index / degenerate stock) -> stop
#   3. stock fill + border
#   4. items: fill + border (+ "T<type>" label when large enough)
#   5. stage-1 cut lines, then stage-2 cut lines
#   6. dimension labels (length below, width on the right, rotated)

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from .commands import DrawCommand, DrawingSink, FillRect, StrokeRect, Text
from .config import DEFAULTS, DEFAULT_STYLE, Defaults, RenderStyle
from .cutlines import resolve_cut_lines
from .io_json import DocumentProvider, JsonFileProvider, LoadError
from .logger import get_logger
from .navigator import PlateNavigator
from .palette import color_for
from .plotting import PngSink
from .transform import Transform, build_transform
from .types import Plate, Rect, Solution

LOGGER = get_logger()


class ExportError(Exception):
    """Base class for plate export failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoPlatesError(ExportError):
    """Nothing loaded, or the loaded solution has no plates."""


class PlateIndexError(ExportError):
    """Requested plate index is out of range."""


class WriteFailedError(ExportError):
    """The raster file could not be written."""


# ----------------------------
# Pure layout
# ----------------------------

def _item_commands(plate: Plate, tr: Transform, style: RenderStyle, d: Defaults) -> List[DrawCommand]:
    out: List[DrawCommand] = []
    for it in plate.items:
        r = tr.map_rect(it.x, it.y, it.length, it.width)
        out.append(FillRect(r, color_for(it.item_type)))
        out.append(StrokeRect(r, style.item_border, d.item_border_width))
        if r.width > d.label_min_w and r.height > d.label_min_h:
            cx, cy = r.center
            out.append(Text(cx, cy, f"T{it.item_type}", style.item_label, d.font_size))
    return out


def _dimension_commands(tr: Transform, style: RenderStyle, d: Defaults) -> List[DrawCommand]:
    sr = tr.stock_rect
    cx, cy = sr.center
    return [
        Text(
            cx, sr.bottom + d.dim_label_gap + d.dim_label_height / 2,
            str(tr.stock.length), style.dim_text, d.font_size,
        ),
        Text(
            sr.right + d.dim_label_gap, cy,
            str(tr.stock.width), style.dim_text, d.font_size, rotation=90.0,
        ),
    ]


def build_draw_commands(
    solution: Optional[Solution],
    plate_index: int,
    viewport: Rect,
    style: Optional[RenderStyle] = None,
    defaults: Optional[Defaults] = None,
) -> List[DrawCommand]:
    """Ordered draw commands for one plate. Never raises for loaded data."""
    style = style or DEFAULT_STYLE
    d = defaults or DEFAULTS

    cmds: List[DrawCommand] = [
        FillRect(viewport, style.canvas_fill),
        StrokeRect(viewport, style.canvas_border, d.canvas_border_width),
    ]

    tr: Optional[Transform] = None
    if solution is not None and 0 <= plate_index < solution.num_plates():
        tr = build_transform(solution.stock, viewport, d.fit_factor)

    if tr is None:
        cx, cy = viewport.center
        cmds.append(Text(cx, cy, style.placeholder, style.placeholder_text, d.font_size))
        return cmds

    plate = solution.plates[plate_index]
    cmds.append(FillRect(tr.stock_rect, style.stock_fill))
    cmds.append(StrokeRect(tr.stock_rect, style.stock_border, d.stock_border_width))
    cmds.extend(_item_commands(plate, tr, style, d))
    cmds.extend(resolve_cut_lines(plate, solution.stock, tr, style, d.cut_line_width).commands())
    cmds.extend(_dimension_commands(tr, style, d))
    return cmds


def export_viewport(target_width: int, target_height: int, margin: int) -> Rect:
    return Rect(margin, margin, target_width - 2 * margin, target_height - 2 * margin)


# ----------------------------
# Stateful engine
# ----------------------------

class LayoutEngine:
    """
    Holds the current Solution and the plate cursor.
    A new Solution replaces the old one only when loading succeeds.
    """

    def __init__(
        self,
        style: Optional[RenderStyle] = None,
        defaults: Optional[Defaults] = None,
        sink: Optional[DrawingSink] = None,
    ) -> None:
        self.style = style or DEFAULT_STYLE
        self.defaults = defaults or DEFAULTS
        self.sink = sink or PngSink(dpi=self.defaults.export_dpi, background=self.style.export_background)
        self.navigator = PlateNavigator()
        self._solution: Optional[Solution] = None

    @property
    def solution(self) -> Optional[Solution]:
        return self._solution

    @property
    def plate_count(self) -> int:
        return self._solution.num_plates() if self._solution is not None else 0

    # ---- loading ----

    def load(self, provider: DocumentProvider) -> Solution:
        """
        Accept the provider's Solution and rewind to the first plate.
        On LoadError the held Solution and plate index are left as they were.
        """
        try:
            sol = provider()
        except LoadError as e:
            LOGGER.warn(f"Load failed, keeping previous solution: {e.message}")
            raise
        self._solution = sol
        self.navigator.reset(sol.plates)
        LOGGER.info(
            f"Loaded solution: stock {sol.stock.length}x{sol.stock.width}, "
            f"{sol.num_plates()} plate(s), {sol.item_type_count} item type(s)"
        )
        return sol

    def load_json(self, path: Union[str, Path]) -> Solution:
        return self.load(JsonFileProvider(path))

    def clear(self) -> None:
        self._solution = None
        self.navigator.reset(())

    # ---- layout ----

    def interactive_viewport(self, width: int, height: int) -> Rect:
        """Drawing area of a width x height view below the navigation bar."""
        d = self.defaults
        top = Rect(0, d.nav_bar_height, width, height - d.nav_bar_height)
        return top.inset(d.canvas_inset, d.canvas_inset)

    def draw_commands(self, viewport: Rect, plate_index: Optional[int] = None) -> List[DrawCommand]:
        idx = self.navigator.index if plate_index is None else plate_index
        return build_draw_commands(self._solution, idx, viewport, self.style, self.defaults)

    # ---- export ----

    def export_plate(
        self,
        path: Union[str, Path],
        plate_index: Optional[int] = None,
        target_width: Optional[int] = None,
        target_height: Optional[int] = None,
        margin: Optional[int] = None,
    ) -> Path:
        """Render one plate (default: the current one) to a PNG file."""
        d = self.defaults
        if self.plate_count == 0:
            raise NoPlatesError("No cutting plan to export")

        idx = self.navigator.index if plate_index is None else plate_index
        if not (0 <= idx < self.plate_count):
            raise PlateIndexError(f"Plate index {idx} out of range [0, {self.plate_count})")

        w = d.export_width if target_width is None else target_width
        h = d.export_height if target_height is None else target_height
        m = d.export_margin if margin is None else margin

        cmds = self.draw_commands(export_viewport(w, h, m), plate_index=idx)
        path = Path(path)
        try:
            self.sink.save(cmds, path, w, h)
        except (OSError, ValueError) as e:
            raise WriteFailedError(f"Cannot write {path}: {e}") from e
        LOGGER.info(f"Exported plate {idx + 1}/{self.plate_count} to {path} ({w}x{h})")
        return path

    def export_all(self, out_dir: Union[str, Path], prefix: str = "plate", **kwargs) -> List[Path]:
        """Export every plate as <prefix>_<n>.png (1-based)."""
        if self.plate_count == 0:
            raise NoPlatesError("No cutting plan to export")
        out = Path(out_dir)
        try:
            out.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteFailedError(f"Cannot create {out}: {e}") from e
        return [
            self.export_plate(out / f"{prefix}_{i + 1}.png", plate_index=i, **kwargs)
            for i in range(self.plate_count)
        ]
