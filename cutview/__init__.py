# cutview/__init__.py
"""
cutview - viewer/exporter for solved two-stage guillotine cutting plans.

A solution (stock sheet -> horizontal strips -> items) is laid out as an
ordered list of primitive draw commands:
  - uniform fit of the stock into a pixel viewport (Y flipped)
  - pastel color per item type
  - stage-1 / stage-2 cut lines, trimmed so they never share pixels
  - dimension labels

The same command list is painted interactively and exported to PNG
(matplotlib), so both outputs are identical.
"""

from .types import (
    StockSpec,
    Strip,
    Item,
    Plate,
    Solution,
    Rect,
    Color,
    NO_STRIP,
)

from .commands import (
    DrawCommand,
    DrawingSink,
    FillRect,
    StrokeRect,
    Line,
    Text,
)

from .io_json import (
    LoadError,
    UnreadableDocumentError,
    MalformedDocumentError,
    DocumentProvider,
    JsonFileProvider,
    JsonTextProvider,
    DictProvider,
    solution_from_dict,
    parse_solution_json,
    load_solution_json,
    solution_to_dict,
    save_solution_json,
)

from .palette import PALETTE, color_for, legend
from .transform import Transform, build_transform
from .cutlines import CutLines, resolve_cut_lines
from .navigator import PlateNavigator

from .layout import (
    ExportError,
    NoPlatesError,
    PlateIndexError,
    WriteFailedError,
    LayoutEngine,
    build_draw_commands,
    export_viewport,
)

from .plotting import PngSink, show_viewer

__all__ = [
    # types
    "StockSpec",
    "Strip",
    "Item",
    "Plate",
    "Solution",
    "Rect",
    "Color",
    "NO_STRIP",
    # commands
    "DrawCommand",
    "DrawingSink",
    "FillRect",
    "StrokeRect",
    "Line",
    "Text",
    # loading
    "LoadError",
    "UnreadableDocumentError",
    "MalformedDocumentError",
    "DocumentProvider",
    "JsonFileProvider",
    "JsonTextProvider",
    "DictProvider",
    "solution_from_dict",
    "parse_solution_json",
    "load_solution_json",
    "solution_to_dict",
    "save_solution_json",
    # geometry
    "PALETTE",
    "color_for",
    "legend",
    "Transform",
    "build_transform",
    "CutLines",
    "resolve_cut_lines",
    "PlateNavigator",
    # layout / export
    "ExportError",
    "NoPlatesError",
    "PlateIndexError",
    "WriteFailedError",
    "LayoutEngine",
    "build_draw_commands",
    "export_viewport",
    "PngSink",
    "show_viewer",
]
