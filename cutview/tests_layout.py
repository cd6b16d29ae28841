# cutview/tests_layout.py
# Layout facade, engine and navigator tests.
#   python -m cutview.tests_layout     or     pytest

from __future__ import annotations

from typing import List, Tuple

from cutview.commands import FillRect, Line, StrokeRect, Text
from cutview.config import DEFAULT_STYLE, Defaults
from cutview.io_json import DictProvider, JsonTextProvider, MalformedDocumentError, solution_from_dict
from cutview.layout import LayoutEngine, build_draw_commands
from cutview.logger import set_enabled
from cutview.navigator import PlateNavigator
from cutview.palette import color_for
from cutview.sample_data import RandomPlanConfig, example_solution_dict, generate_random_solution_dict
from cutview.types import Item, Plate, Rect, Solution, StockSpec

VIEWPORT = Rect(0, 0, 780, 580)

set_enabled(False)


def _kinds(cmds) -> List[str]:
    names = {FillRect: "fill", StrokeRect: "stroke", Line: "line", Text: "text"}
    return [names[type(c)] for c in cmds]


# ----------------------------
# build_draw_commands
# ----------------------------

def test_command_order_for_strip_plate() -> None:
    sol = solution_from_dict(example_solution_dict())
    cmds = build_draw_commands(sol, 0, VIEWPORT)
    assert _kinds(cmds) == (
        ["fill", "stroke"]                       # canvas
        + ["fill", "stroke"]                     # stock
        + ["fill", "stroke", "text"] * 4         # items with labels
        + ["line"] * 5                           # 1 stage-1 + 4 stage-2
        + ["text", "text"]                       # dimensions
    )
    assert cmds[0] == FillRect(VIEWPORT, DEFAULT_STYLE.canvas_fill)
    assert cmds[2].color == DEFAULT_STYLE.stock_fill
    assert cmds[4].color == color_for(1)
    assert cmds[6].text == "T1"

    lines = [c for c in cmds if isinstance(c, Line)]
    assert lines[0].color == DEFAULT_STYLE.stage1_line
    assert all(ln.color == DEFAULT_STYLE.stage2_line for ln in lines[1:])

    length_label, width_label = cmds[-2], cmds[-1]
    assert (length_label.text, length_label.rotation) == ("400", 0.0)
    assert (width_label.text, width_label.rotation) == ("200", 90.0)


def test_legacy_plate_has_no_lines() -> None:
    sol = solution_from_dict(example_solution_dict())
    cmds = build_draw_commands(sol, 1, VIEWPORT)
    assert "line" not in _kinds(cmds)
    assert _kinds(cmds).count("fill") == 2 + 2


def test_small_items_are_not_labelled() -> None:
    doc = example_solution_dict()
    doc["stock"] = {"width": 2000, "length": 4000}
    sol = solution_from_dict(doc)
    # 100x50 model units at scale ~0.185 -> 19x9 px
    cmds = build_draw_commands(sol, 1, VIEWPORT)
    assert [c.text for c in cmds if isinstance(c, Text)] == ["4000", "2000"]


def test_label_threshold_is_strict() -> None:
    # scale is exactly 1.0: one model unit per pixel
    d = Defaults(fit_factor=1.0)
    plate = Plate(
        plate_id=0,
        items=(
            Item(item_type=1, x=0, y=0, width=50, length=30),    # 30x50 px
            Item(item_type=2, x=50, y=0, width=20, length=50),   # 50x20 px
            Item(item_type=3, x=100, y=0, width=21, length=31),  # 31x21 px
        ),
    )
    sol = Solution(stock=StockSpec(width=200, length=400), item_type_count=3, plates=(plate,))
    cmds = build_draw_commands(sol, 0, Rect(0, 0, 400, 200), defaults=d)
    rects = [c.rect for c in cmds if isinstance(c, FillRect)][2:]
    assert [(r.width, r.height) for r in rects] == [(30, 50), (50, 20), (31, 21)]
    assert [c.text for c in cmds if isinstance(c, Text)] == ["T3", "400", "200"]


def test_placeholder_cases() -> None:
    sol = solution_from_dict(example_solution_dict())
    empty = Solution(stock=StockSpec(200, 400), plates=())
    flat = Solution(stock=StockSpec(0, 400), plates=(Plate(plate_id=0),))
    for s, idx in ((None, 0), (empty, 0), (flat, 0), (sol, 5), (sol, -1)):
        cmds = build_draw_commands(s, idx, VIEWPORT)
        assert _kinds(cmds) == ["fill", "stroke", "text"]
        assert cmds[2].text == DEFAULT_STYLE.placeholder
        assert (cmds[2].x, cmds[2].y) == VIEWPORT.center


def test_rects_stay_inside_viewport() -> None:
    sol = solution_from_dict(generate_random_solution_dict(RandomPlanConfig(seed=11, n_plates=3)))
    viewports = [Rect(20, 20, 760, 560), Rect(10, 50, 880, 630), Rect(0, 0, 300, 900), Rect(3, 7, 1500, 240)]
    for vp in viewports:
        for idx in range(sol.num_plates()):
            for c in build_draw_commands(sol, idx, vp):
                if isinstance(c, (FillRect, StrokeRect)):
                    r = c.rect
                    assert r.x >= vp.x - 1 and r.y >= vp.y - 1
                    assert r.right <= vp.right + 1 and r.bottom <= vp.bottom + 1


# ----------------------------
# Navigator
# ----------------------------

def _recording_nav(n: int) -> Tuple[PlateNavigator, List[Tuple[int, int]]]:
    nav = PlateNavigator()
    events: List[Tuple[int, int]] = []
    nav.subscribe(lambda i, total: events.append((i, total)))
    nav.reset([Plate(plate_id=i) for i in range(n)])
    events.clear()
    return nav, events


def test_navigator_moves_and_notifies() -> None:
    nav, events = _recording_nav(3)
    assert nav.index == 0 and nav.count == 3
    assert nav.next() and nav.next()
    assert nav.index == 2
    assert nav.prev()
    assert nav.go_to(0)
    assert events == [(1, 3), (2, 3), (1, 3), (0, 3)]


def test_navigator_go_to_current_still_notifies() -> None:
    nav, events = _recording_nav(3)
    assert nav.go_to(0)
    assert nav.go_to(0)
    assert nav.index == 0
    assert events == [(0, 3), (0, 3)]


def test_navigator_is_idempotent_at_bounds() -> None:
    nav, events = _recording_nav(3)
    for _ in range(3):
        assert not nav.prev()
    assert nav.index == 0
    nav.go_to(2)
    events.clear()
    for _ in range(3):
        assert not nav.next()
    assert nav.index == 2
    for bad in (-1, 3, 100):
        assert not nav.go_to(bad)
    assert nav.index == 2
    assert events == []


def test_navigator_empty_state() -> None:
    nav, events = _recording_nav(0)
    assert nav.is_empty() and nav.index == 0 and nav.current is None
    assert not nav.next() and not nav.prev() and not nav.go_to(0)
    assert events == []
    assert nav.plate_labels() == []
    assert nav.utilization_text() == "Utilization: --"


def test_navigator_labels() -> None:
    nav = PlateNavigator([Plate(plate_id=0, utilization=0.875), Plate(plate_id=1)])
    assert nav.plate_labels() == ["Plate 1/2", "Plate 2/2"]
    assert nav.utilization_text() == "Utilization: 87.5%"
    assert not nav.can_prev and nav.can_next


# ----------------------------
# Engine
# ----------------------------

def test_engine_load_resets_cursor() -> None:
    engine = LayoutEngine()
    seen: List[Tuple[int, int]] = []
    engine.navigator.subscribe(lambda i, n: seen.append((i, n)))

    engine.load(DictProvider(example_solution_dict()))
    engine.navigator.go_to(1)
    engine.load(DictProvider(example_solution_dict()))
    assert engine.navigator.index == 0
    assert seen[-1] == (0, 2)


def test_engine_keeps_state_on_failed_load() -> None:
    engine = LayoutEngine()
    sol = engine.load(DictProvider(example_solution_dict()))
    engine.navigator.go_to(1)

    for bad in ("{broken", "[]", '{"stock": 5}', "[" * 100000 + "]" * 100000):
        try:
            engine.load(JsonTextProvider(bad))
        except MalformedDocumentError:
            pass
        else:
            raise AssertionError("malformed document accepted")
        assert engine.solution is sol
        assert engine.navigator.index == 1
        assert engine.navigator.current is sol.plates[1]


def test_engine_draws_current_plate() -> None:
    engine = LayoutEngine()
    assert _kinds(engine.draw_commands(VIEWPORT)) == ["fill", "stroke", "text"]
    sol = engine.load(DictProvider(example_solution_dict()))
    engine.navigator.next()
    assert engine.draw_commands(VIEWPORT) == build_draw_commands(sol, 1, VIEWPORT)
    engine.clear()
    assert engine.solution is None and engine.navigator.is_empty()


def test_interactive_viewport() -> None:
    engine = LayoutEngine()
    assert engine.interactive_viewport(900, 700) == Rect(10, 50, 880, 640)


def main() -> None:
    print("Running layout tests...")
    test_command_order_for_strip_plate()
    test_legacy_plate_has_no_lines()
    test_small_items_are_not_labelled()
    test_label_threshold_is_strict()
    test_placeholder_cases()
    test_rects_stay_inside_viewport()
    test_navigator_moves_and_notifies()
    test_navigator_go_to_current_still_notifies()
    test_navigator_is_idempotent_at_bounds()
    test_navigator_empty_state()
    test_navigator_labels()
    test_engine_load_resets_cursor()
    test_engine_keeps_state_on_failed_load()
    test_engine_draws_current_plate()
    test_interactive_viewport()
    print("OK")


if __name__ == "__main__":
    main()
