# cutview/debug.py
# Debug / inspection helpers:
# - pretty-print plates, strips and items
# - dump a draw-command list (what the sink will paint, in order)

from __future__ import annotations

from typing import Iterable

from .commands import DrawCommand, FillRect, Line, StrokeRect, Text
from .types import Plate, Solution


def print_plate(plate: Plate, index: int, total: int) -> None:
    print(f"=== Plate {index + 1}/{total} (id={plate.plate_id}) ===")
    print(f"Utilization: {plate.utilization * 100:.1f}%  Strips: {len(plate.strips)}  Items: {len(plate.items)}")
    for s in plate.strips:
        print(f"  strip {s.strip_id:3d}  y={s.y:5d} width={s.width:5d}")
    for it in plate.items:
        sid = "-" if it.strip_id < 0 else str(it.strip_id)
        print(
            f"  T{it.item_type:<3d} x={it.x:5d} y={it.y:5d} "
            f"length={it.length:5d} width={it.width:5d} strip={sid}"
        )


def print_solution(sol: Solution) -> None:
    print(f"Stock: {sol.stock.length} x {sol.stock.width} (length x width)")
    print(f"Item types: {sol.item_type_count}  Plates: {sol.num_plates()}")
    for i, p in enumerate(sol.plates):
        print_plate(p, i, sol.num_plates())


def format_command(cmd: DrawCommand) -> str:
    if isinstance(cmd, FillRect):
        r = cmd.rect
        return f"fill   ({r.x},{r.y}) {r.width}x{r.height} {cmd.color.hex()}"
    if isinstance(cmd, StrokeRect):
        r = cmd.rect
        return f"stroke ({r.x},{r.y}) {r.width}x{r.height} {cmd.color.hex()} w={cmd.width}"
    if isinstance(cmd, Line):
        return f"line   ({cmd.x0},{cmd.y0})-({cmd.x1},{cmd.y1}) {cmd.color.hex()} w={cmd.width}"
    if isinstance(cmd, Text):
        rot = f" rot={cmd.rotation:g}" if cmd.rotation else ""
        return f"text   ({cmd.x:g},{cmd.y:g}) {cmd.text!r}{rot}"
    return repr(cmd)


def print_commands(cmds: Iterable[DrawCommand]) -> None:
    for i, c in enumerate(cmds):
        print(f"{i:4d} {format_command(c)}")
