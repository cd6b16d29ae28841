# cutview/tests_loader.py
# Loader tests: defaults, malformed/unreadable documents, providers.
#   python -m cutview.tests_loader     or     pytest

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from cutview.io_json import (
    DictProvider,
    JsonFileProvider,
    JsonTextProvider,
    LoadError,
    MalformedDocumentError,
    UnreadableDocumentError,
    parse_solution_json,
    save_solution_json,
    solution_from_dict,
)
from cutview.sample_data import example_solution_dict
from cutview.types import NO_STRIP


def _expect(exc_type, fn, *args) -> LoadError:
    try:
        fn(*args)
    except exc_type as e:
        assert e.message
        return e
    raise AssertionError(f"{exc_type.__name__} not raised")


def test_example_document() -> None:
    sol = solution_from_dict(example_solution_dict())
    assert (sol.stock.width, sol.stock.length) == (200, 400)
    assert sol.item_type_count == 3
    assert sol.num_plates() == 2

    p0 = sol.plates[0]
    assert p0.utilization == 0.875
    assert [s.strip_id for s in p0.strips] == [0, 1]
    assert [it.item_type for it in p0.items] == [1, 2, 3, 1]
    assert p0.items[2].strip_id == 1


def test_optional_fields_default() -> None:
    sol = solution_from_dict(example_solution_dict())
    legacy = sol.plates[1]
    assert legacy.utilization == 0.0
    assert legacy.strips == ()
    assert all(it.strip_id == NO_STRIP for it in legacy.items)

    bare = solution_from_dict({"stock": {"width": 10, "length": 20}})
    assert bare.item_type_count == 0
    assert bare.plates == ()


def test_numeric_coercion() -> None:
    doc = example_solution_dict()
    doc["stock"] = {"width": 200.0, "length": "400"}
    sol = solution_from_dict(doc)
    assert (sol.stock.width, sol.stock.length) == (200, 400)


def test_malformed_documents() -> None:
    _expect(MalformedDocumentError, parse_solution_json, "{not json")
    _expect(MalformedDocumentError, parse_solution_json, b"\xff\xfe\x00")
    _expect(MalformedDocumentError, parse_solution_json, "[1, 2, 3]")
    _expect(MalformedDocumentError, solution_from_dict, {"plates": []})
    _expect(MalformedDocumentError, solution_from_dict, {"stock": {"width": 10}})
    _expect(MalformedDocumentError, solution_from_dict, {"stock": {"width": "wide", "length": 10}})
    _expect(MalformedDocumentError, solution_from_dict, {"stock": {"width": 1.5, "length": 10}})
    _expect(MalformedDocumentError, solution_from_dict, {"stock": {"width": True, "length": 10}})

    doc = example_solution_dict()
    doc["plates"][0]["items"][0]["item_type"] = 0
    e = _expect(MalformedDocumentError, solution_from_dict, doc)
    assert "plates[0].items[0]" in e.message

    doc = example_solution_dict()
    del doc["plates"][0]["strips"][1]["y"]
    _expect(MalformedDocumentError, solution_from_dict, doc)

    doc = example_solution_dict()
    doc["plates"] = {"plate_id": 0}
    _expect(MalformedDocumentError, solution_from_dict, doc)


def test_deeply_nested_document() -> None:
    deep = "[" * 100000 + "]" * 100000
    _expect(MalformedDocumentError, parse_solution_json, deep)
    _expect(MalformedDocumentError, parse_solution_json, deep.encode("utf-8"))
    _expect(MalformedDocumentError, JsonTextProvider(deep))


def test_unreadable_file() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        missing = Path(tmp) / "nope.json"
        _expect(UnreadableDocumentError, JsonFileProvider(missing))
        # a directory cannot be read as a file either
        _expect(UnreadableDocumentError, JsonFileProvider(tmp))


def test_providers_and_save() -> None:
    doc = example_solution_dict()
    a = DictProvider(doc)()
    b = JsonTextProvider(json.dumps(doc))()
    assert a == b

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "sub" / "solution.json"
        save_solution_json(a, path)
        c = JsonFileProvider(path)()
    assert c == a


def main() -> None:
    print("Running loader tests...")
    test_example_document()
    test_optional_fields_default()
    test_numeric_coercion()
    test_malformed_documents()
    test_deeply_nested_document()
    test_unreadable_file()
    test_providers_and_save()
    print("OK")


if __name__ == "__main__":
    main()
