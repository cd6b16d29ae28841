# cutview/cli.py
# Command line viewer / exporter for solved cutting plans.
#
# Run:
#   python -m cutview --solution result.json                   # interactive window
#   python -m cutview --solution result.json --plate 2 --png plate_2.png --no_plot
#   python -m cutview --solution result.json --out_dir out/ --no_plot
#   python -m cutview --solution result.json --dump --no_plot

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, parse_size_text
from .debug import print_commands, print_solution
from .io_json import LoadError
from .layout import ExportError, LayoutEngine, export_viewport
from .logger import configure


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="View and export two-stage guillotine cutting plans")
    p.add_argument("--solution", type=str, required=True, help="Path to solution JSON")
    p.add_argument("--plate", type=int, default=1, help="Plate to show/export (1-based)")
    p.add_argument("--png", type=str, default="", help="Export the selected plate to this PNG file")
    p.add_argument("--out_dir", type=str, default="", help="Export every plate as plate_<n>.png into this folder")
    p.add_argument(
        "--size",
        type=str,
        default=f"{DEFAULTS.export_width}x{DEFAULTS.export_height}",
        help="Export image size WxH in pixels",
    )
    p.add_argument("--margin", type=int, default=DEFAULTS.export_margin, help="Export margin in pixels")
    p.add_argument("--dump", action="store_true", help="Print the solution and the draw commands")
    p.add_argument("--no_plot", action="store_true", help="Do not open the interactive window")
    p.add_argument("--quiet", action="store_true", help="Only print errors")
    p.add_argument("--verbose", action="store_true", help="Print debug messages")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    log = configure(quiet=args.quiet, verbose=args.verbose)

    try:
        width, height = parse_size_text(args.size)
    except ValueError as e:
        raise SystemExit(str(e))

    engine = LayoutEngine()
    try:
        engine.load_json(Path(args.solution))
    except LoadError as e:
        log.error(e.message)
        raise SystemExit(1)

    if engine.plate_count and not engine.navigator.go_to(args.plate - 1):
        log.error(f"--plate must be in 1..{engine.plate_count}, got {args.plate}")
        raise SystemExit(1)

    if args.dump:
        print_solution(engine.solution)
        print("-- Draw commands (export viewport) --")
        print_commands(engine.draw_commands(export_viewport(width, height, args.margin)))

    try:
        if args.png.strip():
            engine.export_plate(args.png.strip(), target_width=width, target_height=height, margin=args.margin)
        if args.out_dir.strip():
            paths = engine.export_all(args.out_dir.strip(), target_width=width, target_height=height, margin=args.margin)
            log.debug("Wrote: " + ", ".join(str(p) for p in paths))
    except ExportError as e:
        log.error(e.message)
        raise SystemExit(1)

    if not args.no_plot:
        from .plotting import show_viewer
        show_viewer(engine)


if __name__ == "__main__":
    main()
