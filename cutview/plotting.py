# cutview/plotting.py
# matplotlib drawing sink: rasterize a draw-command list pixel-for-pixel.
#
# The axes span the whole figure with limits (0..width, height..0), so one
# data unit is one output pixel and Y grows downward like the commands.
# Commands are painted in list order (zorder = position).

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

from .commands import DrawCommand, FillRect, Line, StrokeRect, Text
from .config import DEFAULTS, DEFAULT_STYLE
from .types import Color

if TYPE_CHECKING:
    from .layout import LayoutEngine


def _pt(px: float, dpi: int) -> float:
    """Pixels -> points (matplotlib line widths and font sizes are in points)."""
    return px * 72.0 / dpi


def _prepare_axes(fig: Figure, width: int, height: int) -> plt.Axes:
    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()
    return ax


def draw_commands(ax: plt.Axes, commands: Sequence[DrawCommand], dpi: int) -> None:
    """Add every command to `ax` as a matplotlib artist."""
    for z, cmd in enumerate(commands, start=1):
        if isinstance(cmd, FillRect):
            r = cmd.rect
            ax.add_patch(
                Rectangle(
                    (r.x, r.y), r.width, r.height,
                    facecolor=cmd.color.to_unit(), edgecolor="none",
                    linewidth=0, antialiased=False, zorder=z,
                )
            )
        elif isinstance(cmd, StrokeRect):
            r = cmd.rect
            ax.add_patch(
                Rectangle(
                    (r.x, r.y), r.width, r.height,
                    fill=False, edgecolor=cmd.color.to_unit(),
                    linewidth=_pt(cmd.width, dpi), joinstyle="miter", zorder=z,
                )
            )
        elif isinstance(cmd, Line):
            ax.add_line(
                Line2D(
                    [cmd.x0, cmd.x1], [cmd.y0, cmd.y1],
                    color=cmd.color.to_unit(), linewidth=_pt(cmd.width, dpi),
                    solid_capstyle=cmd.cap, antialiased=False, zorder=z,
                )
            )
        elif isinstance(cmd, Text):
            ax.text(
                cmd.x, cmd.y, cmd.text,
                ha="center", va="center", rotation=cmd.rotation,
                fontsize=cmd.font_size, color=cmd.color.to_unit(), zorder=z,
            )
        else:
            raise TypeError(f"Unknown draw command: {cmd!r}")


@dataclass(frozen=True)
class PngSink:
    """Writes a command list to a raster file of exactly width x height pixels."""
    dpi: int = DEFAULTS.export_dpi
    background: Color = DEFAULT_STYLE.export_background

    def render(self, commands: Sequence[DrawCommand], width: int, height: int) -> Figure:
        fig = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        fig.patch.set_facecolor(self.background.to_unit())
        ax = _prepare_axes(fig, width, height)
        draw_commands(ax, commands, self.dpi)
        return fig

    def save(
        self,
        commands: Sequence[DrawCommand],
        path: Union[str, Path],
        width: int,
        height: int,
    ) -> None:
        """Raises OSError / ValueError when the file cannot be written."""
        fig = self.render(commands, width, height)
        fig.savefig(str(path), dpi=self.dpi, facecolor=self.background.to_unit())


# ----------------------------
# Interactive view
# ----------------------------

def _canvas_size(fig: Figure) -> Tuple[int, int]:
    w, h = fig.canvas.get_width_height()
    return int(w), int(h)


def show_viewer(engine: "LayoutEngine", size: Optional[Tuple[int, int]] = None) -> None:
    """
    Open a matplotlib window showing the current plate.
    Left/Right (or p/n) page through plates; the view is rebuilt from the
    same draw commands the export uses, sized to the window.
    """
    w, h = size or (900, 700)
    dpi = DEFAULTS.export_dpi
    fig = plt.figure(figsize=(w / dpi, h / dpi), dpi=dpi)
    nav = engine.navigator

    def redraw(*_args) -> None:
        fig.clear()
        cw, ch = _canvas_size(fig)
        ax = _prepare_axes(fig, cw, ch)
        draw_commands(ax, engine.draw_commands(engine.interactive_viewport(cw, ch)), dpi)
        labels = nav.plate_labels()
        head = labels[nav.index] if labels else "No plates"
        ax.text(
            engine.defaults.canvas_inset, engine.defaults.nav_bar_height / 2,
            f"{head}    {nav.utilization_text()}",
            ha="left", va="center", fontsize=10,
        )
        fig.canvas.draw_idle()

    def on_key(event) -> None:
        if event.key in ("right", "n"):
            nav.next()
        elif event.key in ("left", "p"):
            nav.prev()

    def on_change(_index: int, _count: int) -> None:
        redraw()

    nav.subscribe(on_change)
    fig.canvas.mpl_connect("key_press_event", on_key)
    fig.canvas.mpl_connect("resize_event", redraw)
    fig.canvas.mpl_connect("close_event", lambda _e: nav.unsubscribe(on_change))
    redraw()
    plt.show()
