# cutview/tests_geometry.py
# Geometry tests: transform, palette, cut-line trimming.
#   python -m cutview.tests_geometry     or     pytest

from __future__ import annotations

from cutview.cutlines import resolve_cut_lines
from cutview.io_json import solution_from_dict
from cutview.palette import PALETTE, color_for, legend
from cutview.sample_data import RandomPlanConfig, example_solution_dict, generate_random_solution_dict
from cutview.transform import build_transform, round_px
from cutview.types import Color, Item, Plate, Rect, StockSpec, Strip

VIEWPORT = Rect(0, 0, 780, 580)
STOCK = StockSpec(width=200, length=400)


def test_concrete_scenario() -> None:
    tr = build_transform(STOCK, VIEWPORT)
    assert tr is not None
    assert abs(tr.scale - 1.8525) < 1e-9
    assert tr.stock_w_px == 741
    assert tr.stock_h_px == 371
    assert tr.offset_x == (780 - 741) // 2
    assert tr.offset_y == (580 - 371) // 2

    r = tr.map_rect(0, 0, 100, 50)
    assert r == Rect(tr.offset_x, tr.offset_y + 278, 185, 93)


def test_round_px_is_half_up() -> None:
    assert round_px(0.5) == 1
    assert round_px(370.5) == 371
    assert round_px(277.875) == 278
    assert round_px(2.49) == 2


def test_degenerate_stock_has_no_transform() -> None:
    assert build_transform(StockSpec(width=0, length=400), VIEWPORT) is None
    assert build_transform(StockSpec(width=200, length=-1), VIEWPORT) is None
    assert build_transform(STOCK, Rect(0, 0, 0, 100)) is None


def test_stock_centered_and_inside_viewport() -> None:
    for vp in (Rect(10, 50, 880, 630), Rect(0, 0, 100, 1000), Rect(5, 5, 1000, 60)):
        tr = build_transform(STOCK, vp)
        sr = tr.stock_rect
        assert sr.x >= vp.x and sr.y >= vp.y
        assert sr.right <= vp.right and sr.bottom <= vp.bottom
        # slack is split evenly (floor division)
        assert abs((sr.x - vp.x) - (vp.right - sr.right)) <= 1
        assert abs((sr.y - vp.y) - (vp.bottom - sr.bottom)) <= 1


def test_aspect_ratio_fidelity() -> None:
    stocks = [StockSpec(200, 400), StockSpec(1220, 2440), StockSpec(2070, 2800), StockSpec(300, 300)]
    viewports = [Rect(0, 0, 780, 580), Rect(20, 20, 760, 560), Rect(0, 0, 300, 900), Rect(0, 0, 1600, 200)]
    for st in stocks:
        for vp in viewports:
            tr = build_transform(st, vp)
            ratio = st.width / st.length
            tol = (1 + ratio) / tr.stock_w_px
            assert abs(tr.stock_h_px / tr.stock_w_px - ratio) <= tol


def test_palette_lookup() -> None:
    assert len(PALETTE) == 12
    assert color_for(1) == Color(255, 179, 186)
    assert color_for(12) == Color(255, 230, 200)
    assert color_for(13) == color_for(1)
    assert color_for(25) == color_for(1)
    # same answer regardless of call order
    seq = [color_for(t) for t in (5, 3, 5, 17, 3)]
    assert seq[0] == seq[2] == seq[3]


def test_palette_rejects_non_positive_types() -> None:
    for bad in (0, -1, -13):
        try:
            color_for(bad)
        except ValueError:
            pass
        else:
            raise AssertionError(f"color_for({bad}) should raise")


def test_legend() -> None:
    lg = legend(3)
    assert [t for t, _ in lg] == [1, 2, 3]
    assert lg[1][1] == PALETTE[1]
    assert legend(0) == []


def _example_plate() -> Plate:
    return solution_from_dict(example_solution_dict()).plates[0]


def test_stage1_lines_skip_stock_top() -> None:
    tr = build_transform(STOCK, VIEWPORT)
    lines = resolve_cut_lines(_example_plate(), STOCK, tr)
    # strips end at 120 and 200; 200 is the stock's top edge
    assert lines.red_y == frozenset({120})
    assert len(lines.stage1) == 1
    l1 = lines.stage1[0]
    assert l1.is_horizontal()
    assert l1.y0 == tr.y_px(120) == tr.offset_y + 148
    assert (l1.x0, l1.x1) == (tr.stock_rect.x, tr.stock_rect.right)
    assert l1.width == 3 and l1.cap == "butt"


def test_stage2_lines_trimmed_at_stage1() -> None:
    tr = build_transform(STOCK, VIEWPORT)
    lines = resolve_cut_lines(_example_plate(), STOCK, tr)
    red_px = tr.y_px(120)

    # strip 0 (y 0..120): right edges 150, 300; strip 1 (y 120..200): 250, 350
    assert [ln.x0 for ln in lines.stage2] == [tr.x_px(150), tr.x_px(300), tr.x_px(250), tr.x_px(350)]
    assert all(ln.is_vertical() for ln in lines.stage2)

    low = lines.stage2[:2]
    for ln in low:
        assert ln.y0 == red_px + 2          # pulled below the stage-1 line
        assert ln.y1 == tr.y_px(0)          # stock bottom, no stage-1 line there

    high = lines.stage2[2:]
    for ln in high:
        assert ln.y0 == tr.y_px(200)        # stock top, untouched
        assert ln.y1 == red_px - 2          # pulled above the stage-1 line

    assert lines.commands() == list(lines.stage1) + list(lines.stage2)


def test_right_border_is_not_a_cut() -> None:
    plate = Plate(
        plate_id=0,
        strips=(Strip(0, 0, 200),),
        items=(Item(1, 0, 0, 200, 400, strip_id=0),),
    )
    tr = build_transform(STOCK, VIEWPORT)
    lines = resolve_cut_lines(plate, STOCK, tr)
    assert lines.stage1 == ()
    assert lines.stage2 == ()


def test_legacy_items_have_no_overlay() -> None:
    plate = Plate(plate_id=0, items=(Item(1, 0, 0, 50, 100), Item(2, 100, 0, 50, 100)))
    tr = build_transform(STOCK, VIEWPORT)
    lines = resolve_cut_lines(plate, STOCK, tr)
    assert lines.commands() == []


def test_trim_is_exact_on_random_plans() -> None:
    sol = solution_from_dict(generate_random_solution_dict(RandomPlanConfig(seed=7, n_plates=4)))
    tr = build_transform(sol.stock, Rect(20, 20, 760, 560))
    for plate in sol.plates:
        lines = resolve_cut_lines(plate, sol.stock, tr)
        red_px = {ln.y0 for ln in lines.stage1}
        for ln in lines.stage2:
            assert ln.y0 - 2 in red_px or ln.y0 == tr.stock_rect.y
            assert ln.y1 + 2 in red_px or ln.y1 == tr.stock_rect.bottom


def main() -> None:
    print("Running geometry tests...")
    test_concrete_scenario()
    test_round_px_is_half_up()
    test_degenerate_stock_has_no_transform()
    test_stock_centered_and_inside_viewport()
    test_aspect_ratio_fidelity()
    test_palette_lookup()
    test_palette_rejects_non_positive_types()
    test_legend()
    test_stage1_lines_skip_stock_top()
    test_stage2_lines_trimmed_at_stage1()
    test_right_border_is_not_a_cut()
    test_legacy_items_have_no_overlay()
    test_trim_is_exact_on_random_plans()
    print("OK")


if __name__ == "__main__":
    main()
