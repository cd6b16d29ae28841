# cutview/io_json.py
# Load a solved cutting plan (solver result JSON) into our Solution model.
#
# Expected JSON shape:
# {
#   "stock": {"width": 1220, "length": 2440},
#   "item_types": [...],                      # only the count is used
#   "plates": [{
#       "plate_id": 0,
#       "utilization": 0.87,                  # optional, default 0.0
#       "strips": [{"strip_id": 0, "y": 0, "width": 400}, ...],   # optional
#       "items": [{"item_type": 1, "x": 0, "y": 0, "width": 400,
#                  "length": 600, "strip_id": 0}, ...]            # strip_id optional, default -1
#   }]
# }
#
# Loaders raise LoadError subclasses; they never touch state held elsewhere,
# so a caller that keeps its previous Solution on exception gets atomic replace.

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from .types import NO_STRIP, Item, Plate, Solution, StockSpec, Strip


class LoadError(Exception):
    """Base class for document loading failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnreadableDocumentError(LoadError):
    """The source bytes could not be opened or read."""


class MalformedDocumentError(LoadError):
    """The document is not JSON, or its structure / numeric fields are invalid."""


# A provider is any zero-arg callable returning a Solution or raising LoadError.
DocumentProvider = Callable[[], Solution]

_REQUIRED = object()


def _as_int(obj: Mapping[str, Any], key: str, where: str, default: Any = _REQUIRED) -> int:
    if key not in obj or obj[key] is None:
        if default is _REQUIRED:
            raise MalformedDocumentError(f"{where}: missing required field '{key}'")
        return default
    v = obj[key]
    if isinstance(v, bool):
        raise MalformedDocumentError(f"{where}.{key}: expected integer, got {v!r}")
    if isinstance(v, int):
        return v
    try:
        f = float(v)
    except (TypeError, ValueError):
        raise MalformedDocumentError(f"{where}.{key}: expected integer, got {v!r}") from None
    if not f.is_integer():
        raise MalformedDocumentError(f"{where}.{key}: expected integer, got {v!r}")
    return int(f)


def _as_float(obj: Mapping[str, Any], key: str, where: str, default: float) -> float:
    v = obj.get(key)
    if v is None:
        return default
    if isinstance(v, bool):
        raise MalformedDocumentError(f"{where}.{key}: expected number, got {v!r}")
    try:
        return float(v)
    except (TypeError, ValueError):
        raise MalformedDocumentError(f"{where}.{key}: expected number, got {v!r}") from None


def _as_object(v: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(v, Mapping):
        raise MalformedDocumentError(f"{where}: expected an object, got {type(v).__name__}")
    return v


def _as_list(obj: Mapping[str, Any], key: str, where: str) -> List[Any]:
    v = obj.get(key)
    if v is None:
        return []
    if not isinstance(v, list):
        raise MalformedDocumentError(f"{where}.{key}: expected an array, got {type(v).__name__}")
    return v


def _parse_strip(raw: Any, where: str) -> Strip:
    obj = _as_object(raw, where)
    return Strip(
        strip_id=_as_int(obj, "strip_id", where),
        y=_as_int(obj, "y", where),
        width=_as_int(obj, "width", where),
    )


def _parse_item(raw: Any, where: str) -> Item:
    obj = _as_object(raw, where)
    item_type = _as_int(obj, "item_type", where)
    if item_type < 1:
        raise MalformedDocumentError(f"{where}.item_type: item types are 1-based, got {item_type}")
    return Item(
        item_type=item_type,
        x=_as_int(obj, "x", where),
        y=_as_int(obj, "y", where),
        width=_as_int(obj, "width", where),
        length=_as_int(obj, "length", where),
        strip_id=_as_int(obj, "strip_id", where, default=NO_STRIP),
    )


def _parse_plate(raw: Any, where: str) -> Plate:
    obj = _as_object(raw, where)
    strips = tuple(
        _parse_strip(s, f"{where}.strips[{i}]") for i, s in enumerate(_as_list(obj, "strips", where))
    )
    items = tuple(
        _parse_item(it, f"{where}.items[{i}]") for i, it in enumerate(_as_list(obj, "items", where))
    )
    return Plate(
        plate_id=_as_int(obj, "plate_id", where),
        utilization=_as_float(obj, "utilization", where, default=0.0),
        strips=strips,
        items=items,
    )


def solution_from_dict(root: Any) -> Solution:
    """
    Build a Solution from an already-decoded document tree.
    Raises MalformedDocumentError on structural problems.
    """
    root = _as_object(root, "document root")
    stock_obj = _as_object(root.get("stock"), "stock")
    stock = StockSpec(
        width=_as_int(stock_obj, "width", "stock"),
        length=_as_int(stock_obj, "length", "stock"),
    )
    item_types = _as_list(root, "item_types", "document root")
    plates = tuple(
        _parse_plate(p, f"plates[{i}]") for i, p in enumerate(_as_list(root, "plates", "document root"))
    )
    return Solution(stock=stock, item_type_count=len(item_types), plates=plates)


def parse_solution_json(data: Union[str, bytes]) -> Solution:
    """Decode JSON text/bytes and build a Solution."""
    try:
        root = json.loads(data)
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError; nesting too deep for the
        # decoder surfaces as RecursionError
        raise MalformedDocumentError(f"Not a valid JSON document: {e}") from e
    return solution_from_dict(root)


def load_solution_json(path: Union[str, Path]) -> Solution:
    """Read a solution JSON file from disk."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise UnreadableDocumentError(f"Cannot read {path}: {e}") from e
    return parse_solution_json(data)


# ----------------------------
# Providers
# ----------------------------

@dataclass(frozen=True)
class JsonFileProvider:
    path: Union[str, Path]

    def __call__(self) -> Solution:
        return load_solution_json(self.path)


@dataclass(frozen=True)
class JsonTextProvider:
    text: Union[str, bytes]

    def __call__(self) -> Solution:
        return parse_solution_json(self.text)


@dataclass(frozen=True)
class DictProvider:
    root: Any

    def __call__(self) -> Solution:
        return solution_from_dict(self.root)


# ----------------------------
# Writing (same schema)
# ----------------------------

def solution_to_dict(sol: Solution) -> Dict[str, Any]:
    """
    Convert Solution back to the document schema.
    item_types is emitted as a list of ids (only its length is read back).
    """
    return {
        "stock": {"width": sol.stock.width, "length": sol.stock.length},
        "item_types": [{"id": t} for t in range(1, sol.item_type_count + 1)],
        "plates": [
            {
                "plate_id": p.plate_id,
                "utilization": p.utilization,
                "strips": [{"strip_id": s.strip_id, "y": s.y, "width": s.width} for s in p.strips],
                "items": [
                    {
                        "item_type": it.item_type,
                        "x": it.x,
                        "y": it.y,
                        "width": it.width,
                        "length": it.length,
                        "strip_id": it.strip_id,
                    }
                    for it in p.items
                ],
            }
            for p in sol.plates
        ],
    }


def save_solution_json(sol: Solution, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(solution_to_dict(sol), f, ensure_ascii=False, indent=2)
