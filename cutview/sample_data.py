# cutview/sample_data.py
# Sample solution documents for demos and tests:
# - a small hand-written two-plate plan (including a legacy plate without strips)
# - random but well-formed two-stage plans (strips stacked along Y, items along X)

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


def example_solution_dict() -> Dict[str, Any]:
    """
    Stock 400 (length) x 200 (width).
    Plate 1: strips [0,120) and [120,200); plate 2: legacy items without strip_id.
    """
    return {
        "stock": {"width": 200, "length": 400},
        "item_types": [{"id": 1}, {"id": 2}, {"id": 3}],
        "plates": [
            {
                "plate_id": 0,
                "utilization": 0.875,
                "strips": [
                    {"strip_id": 0, "y": 0, "width": 120},
                    {"strip_id": 1, "y": 120, "width": 80},
                ],
                "items": [
                    {"item_type": 1, "x": 0, "y": 0, "width": 120, "length": 150, "strip_id": 0},
                    {"item_type": 2, "x": 150, "y": 0, "width": 120, "length": 150, "strip_id": 0},
                    {"item_type": 3, "x": 0, "y": 120, "width": 80, "length": 250, "strip_id": 1},
                    {"item_type": 1, "x": 250, "y": 120, "width": 80, "length": 100, "strip_id": 1},
                ],
            },
            {
                "plate_id": 1,
                "items": [
                    {"item_type": 2, "x": 0, "y": 0, "width": 50, "length": 100},
                    {"item_type": 3, "x": 100, "y": 0, "width": 50, "length": 100},
                ],
            },
        ],
    }


@dataclass(frozen=True)
class RandomPlanConfig:
    seed: int = 123
    n_plates: int = 3
    n_item_types: int = 8
    stock_width: int = 1220
    stock_length: int = 2440

    strip_width_range: Tuple[int, int] = (150, 600)
    item_length_range: Tuple[int, int] = (100, 900)

    # probability an item is shorter (along Y) than its strip
    p_short_item: float = 0.3
    # probability a strip ends with unused offcut along X
    p_offcut: float = 0.25


def _random_plate(rnd: random.Random, cfg: RandomPlanConfig, plate_id: int) -> Dict[str, Any]:
    strips: List[Dict[str, int]] = []
    items: List[Dict[str, int]] = []
    y = 0
    sid = 0
    used = 0
    while y < cfg.stock_width:
        sw = min(rnd.randint(*cfg.strip_width_range), cfg.stock_width - y)
        strips.append({"strip_id": sid, "y": y, "width": sw})

        limit = cfg.stock_length
        if rnd.random() < cfg.p_offcut:
            limit -= rnd.randint(1, cfg.item_length_range[0])
        x = 0
        while x < limit:
            il = min(rnd.randint(*cfg.item_length_range), limit - x)
            iw = rnd.randint(max(1, sw // 2), sw) if rnd.random() < cfg.p_short_item else sw
            items.append(
                {
                    "item_type": rnd.randint(1, cfg.n_item_types),
                    "x": x,
                    "y": y,
                    "width": iw,
                    "length": il,
                    "strip_id": sid,
                }
            )
            used += iw * il
            x += il
        y += sw
        sid += 1

    return {
        "plate_id": plate_id,
        "utilization": used / (cfg.stock_width * cfg.stock_length),
        "strips": strips,
        "items": items,
    }


def generate_random_solution_dict(cfg: RandomPlanConfig) -> Dict[str, Any]:
    rnd = random.Random(cfg.seed)
    return {
        "stock": {"width": cfg.stock_width, "length": cfg.stock_length},
        "item_types": [{"id": t} for t in range(1, cfg.n_item_types + 1)],
        "plates": [_random_plate(rnd, cfg, i) for i in range(cfg.n_plates)],
    }
