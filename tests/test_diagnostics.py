from __future__ import annotations

from modpaths.diagnostics import Diagnostics


def test_property_errorf_formats_and_collects() -> None:
    diagnostics = Diagnostics()
    assert diagnostics.ok

    diagnostics.property_errorf("srcs", 'module source directory "%s" does not exist', "gen", directory="gen")
    diagnostics.property_errorf("include_dirs", "100% broken")

    assert not diagnostics.ok
    assert diagnostics.errors[0].message == 'module source directory "gen" does not exist'
    assert diagnostics.errors[1].message == "100% broken"
    assert [e.directory for e in diagnostics.for_property("srcs")] == ["gen"]


def test_merge_keeps_order() -> None:
    first = Diagnostics()
    first.property_errorf("a", "one")
    second = Diagnostics()
    second.property_errorf("b", "two")

    merged = first.merge(second)

    assert merged is first
    assert [e.property_name for e in merged.errors] == ["a", "b"]


def test_to_dict() -> None:
    diagnostics = Diagnostics()
    diagnostics.property_errorf("srcs", "boom", code="source_dir_unreadable", directory="x")
    payload = diagnostics.to_dict()
    assert payload == {
        "ok": False,
        "errors": [
            {
                "property_name": "srcs",
                "message": "boom",
                "code": "source_dir_unreadable",
                "directory": "x",
            }
        ],
    }
