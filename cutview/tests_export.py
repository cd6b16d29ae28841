# cutview/tests_export.py
# PNG export, drawing sinks, CLI and console logging (matplotlib Agg raster).
#   python -m cutview.tests_export     or     pytest

from __future__ import annotations

import io
import tempfile
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.image as mpimg  # noqa: E402

from cutview.cli import main as cli_main  # noqa: E402
from cutview.io_json import (  # noqa: E402
    DictProvider,
    JsonTextProvider,
    MalformedDocumentError,
    save_solution_json,
    solution_from_dict,
)
from cutview.layout import (  # noqa: E402
    LayoutEngine,
    NoPlatesError,
    PlateIndexError,
    WriteFailedError,
    build_draw_commands,
    export_viewport,
)
from cutview.logger import Logger, configure, get_logger, set_enabled  # noqa: E402
from cutview.palette import color_for  # noqa: E402
from cutview.sample_data import example_solution_dict  # noqa: E402
from cutview.types import Rect  # noqa: E402

set_enabled(False)


def _loaded_engine() -> LayoutEngine:
    engine = LayoutEngine()
    engine.load(DictProvider(example_solution_dict()))
    return engine


def _rgb_at(img, x: int, y: int):
    px = img[y, x]
    return tuple(int(round(float(c) * 255)) for c in px[:3])


def _close(a, b, tol: int = 2) -> bool:
    return all(abs(x - y) <= tol for x, y in zip(a, b))


def test_export_viewport_matches_margin() -> None:
    assert export_viewport(800, 600, 20) == Rect(20, 20, 760, 560)


def test_export_uses_same_commands_as_view() -> None:
    engine = _loaded_engine()
    vp = export_viewport(800, 600, 20)
    assert engine.draw_commands(vp, plate_index=0) == build_draw_commands(engine.solution, 0, vp)


def test_export_writes_exact_size_png() -> None:
    engine = _loaded_engine()
    with tempfile.TemporaryDirectory() as tmp:
        out = engine.export_plate(Path(tmp) / "plate_1.png", plate_index=0)
        assert out.exists()
        img = mpimg.imread(str(out))
    assert img.shape[0] == 600 and img.shape[1] == 800

    # outside the viewport: white page; inside: canvas fill
    assert _close(_rgb_at(img, 5, 5), (255, 255, 255))
    assert _close(_rgb_at(img, 25, 25), (250, 250, 250))
    # stock at (39,119) 722x361; first item spans x 39..310, y 263..480
    c = color_for(1)
    assert _close(_rgb_at(img, 60, 300), (c.r, c.g, c.b))


def test_export_custom_size() -> None:
    engine = _loaded_engine()
    with tempfile.TemporaryDirectory() as tmp:
        out = engine.export_plate(Path(tmp) / "big.png", plate_index=1, target_width=1200, target_height=500, margin=10)
        img = mpimg.imread(str(out))
    assert img.shape[:2] == (500, 1200)


def test_export_errors() -> None:
    empty = LayoutEngine()
    try:
        empty.export_plate("unused.png")
    except NoPlatesError:
        pass
    else:
        raise AssertionError("export without plates must fail")

    engine = _loaded_engine()
    for bad in (-1, 2):
        try:
            engine.export_plate("unused.png", plate_index=bad)
        except PlateIndexError:
            pass
        else:
            raise AssertionError("out-of-range plate accepted")

    with tempfile.TemporaryDirectory() as tmp:
        target = Path(tmp) / "missing_dir" / "plate.png"
        try:
            engine.export_plate(target)
        except WriteFailedError as e:
            assert "missing_dir" in e.message
        else:
            raise AssertionError("write into a missing folder should fail")


def test_export_all() -> None:
    engine = _loaded_engine()
    with tempfile.TemporaryDirectory() as tmp:
        paths = engine.export_all(Path(tmp) / "plates")
        assert [p.name for p in paths] == ["plate_1.png", "plate_2.png"]
        assert all(p.exists() for p in paths)
    # exporting does not move the cursor
    assert engine.navigator.index == 0


class _RecordingSink:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = []

    def save(self, commands, path, width, height) -> None:
        self.calls.append((list(commands), Path(path), width, height))
        if self.fail:
            raise OSError("disk full")


def test_engine_exports_through_any_sink() -> None:
    sink = _RecordingSink()
    engine = LayoutEngine(sink=sink)
    engine.load(DictProvider(example_solution_dict()))
    out = engine.export_plate("plate_1.png", plate_index=0)
    assert out == Path("plate_1.png")
    [(cmds, path, w, h)] = sink.calls
    assert cmds == engine.draw_commands(export_viewport(800, 600, 20), plate_index=0)
    assert (path, w, h) == (Path("plate_1.png"), 800, 600)

    failing = LayoutEngine(sink=_RecordingSink(fail=True))
    failing.load(DictProvider(example_solution_dict()))
    try:
        failing.export_plate("plate_1.png")
    except WriteFailedError as e:
        assert "disk full" in e.message
    else:
        raise AssertionError("sink failure not reported")


def test_cli_exports_png() -> None:
    sol = solution_from_dict(example_solution_dict())
    with tempfile.TemporaryDirectory() as tmp:
        src = Path(tmp) / "solution.json"
        save_solution_json(sol, src)
        png = Path(tmp) / "plate_2.png"
        cli_main(["--solution", str(src), "--plate", "2", "--png", str(png), "--size", "640x480", "--no_plot", "--quiet"])
        img = mpimg.imread(str(png))
    assert img.shape[:2] == (480, 640)


def test_cli_rejects_bad_input() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        bad = Path(tmp) / "broken.json"
        bad.write_text("{oops", encoding="utf-8")
        for argv in (
            ["--solution", str(bad), "--no_plot", "--quiet"],
            ["--solution", str(Path(tmp) / "missing.json"), "--no_plot", "--quiet"],
        ):
            try:
                cli_main(argv)
            except SystemExit as e:
                assert e.code == 1
            else:
                raise AssertionError("CLI accepted a bad document")


def test_logger_levels() -> None:
    out, err = io.StringIO(), io.StringIO()
    log = Logger(out=out, err=err)
    log.debug("hidden")
    log.info("loaded")
    log.warn("kept previous")
    assert out.getvalue() == "[cutview] loaded\n"
    assert err.getvalue() == "[cutview] WARNING: kept previous\n"

    log.verbose = True
    log.debug("files")
    assert out.getvalue().endswith("[cutview] files\n")

    log.enabled = False
    log.info("muted")
    log.error("bad plate")
    assert "muted" not in out.getvalue()
    assert err.getvalue().endswith("[cutview] ERROR: bad plate\n")


def test_configure_quiet_wins() -> None:
    try:
        log = configure(quiet=True, verbose=True)
        assert not log.enabled and not log.verbose
        log = configure(verbose=True)
        assert log.enabled and log.verbose
    finally:
        configure(quiet=True)


def test_failed_load_is_logged_as_warning() -> None:
    log = get_logger()
    err = io.StringIO()
    saved = (log.enabled, log.err)
    log.enabled, log.err = True, err
    try:
        engine = _loaded_engine()
        try:
            engine.load(JsonTextProvider("{broken"))
        except MalformedDocumentError:
            pass
    finally:
        log.enabled, log.err = saved
    assert "WARNING: Load failed, keeping previous solution" in err.getvalue()


def main() -> None:
    print("Running export tests...")
    test_export_viewport_matches_margin()
    test_export_uses_same_commands_as_view()
    test_export_writes_exact_size_png()
    test_export_custom_size()
    test_export_errors()
    test_export_all()
    test_engine_exports_through_any_sink()
    test_cli_exports_png()
    test_cli_rejects_bad_input()
    test_logger_levels()
    test_configure_quiet_wins()
    test_failed_load_is_logged_as_warning()
    print("OK")


if __name__ == "__main__":
    main()
