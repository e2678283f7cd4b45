import json
from pathlib import Path

import pytest

from keyspec.bindings import (
    BindingSpec,
    SpecFormatError,
    TemplateGroup,
    load_default_spec,
    load_spec,
)
from keyspec.bindings.defaults import DEFAULT_LITERALS, WORKSPACE_KEYS


def write_spec(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "bindings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_spec_accepts_objects_and_pairs(tmp_path: Path) -> None:
    path = write_spec(
        tmp_path,
        {
            "bindings": ["M-j"],
            "templates": [
                {"modifiers": ["M-{}"], "keys": ["1"]},
                [["M-C-{}"], ["Up", "Down"]],
            ],
        },
    )

    spec = load_spec(path)

    assert spec.literals == ("M-j",)
    assert spec.templates == (
        TemplateGroup(("M-{}",), ("1",)),
        TemplateGroup(("M-C-{}",), ("Up", "Down")),
    )
    assert [b.raw for b in spec.bindings()] == ["M-j", "M-1", "M-C-Up", "M-C-Down"]


def test_spec_round_trips_through_mapping() -> None:
    spec = BindingSpec(("M-j",), (TemplateGroup.of(["M-{}"], ["1", "2"]),))

    assert BindingSpec.from_mapping(spec.to_mapping()) == spec


@pytest.mark.parametrize(
    "data, fragment",
    [
        ([], "top level"),
        ({"bindings": "M-j"}, "'bindings' must be a list of strings"),
        ({"keys": []}, "unknown sections"),
        ({"templates": [{"modifiers": ["M-{}"]}]}, "missing 'keys'"),
        ({"templates": [["M-{}"]]}, "templates[0] must be"),
        ({"templates": [[["M-{}"], [1]]]}, "templates[0].keys"),
    ],
)
def test_load_spec_rejects_bad_shapes(
    tmp_path: Path, data: object, fragment: str
) -> None:
    with pytest.raises(SpecFormatError) as excinfo:
        load_spec(write_spec(tmp_path, data))

    assert fragment in str(excinfo.value)


def test_load_spec_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(SpecFormatError, match="invalid JSON"):
        load_spec(path)


def test_load_spec_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"bindings": ["M-\xff"]}')

    with pytest.raises(SpecFormatError, match="not UTF-8 text"):
        load_spec(path)


def test_merged_keeps_order() -> None:
    first = BindingSpec(("M-j",))
    second = BindingSpec(("M-k",), (TemplateGroup.of(["M-{}"], ["1"]),))

    merged = first.merged(second)

    assert [b.raw for b in merged.bindings()] == ["M-j", "M-k", "M-1"]


def test_default_spec_expands_workspaces() -> None:
    spec = load_default_spec()

    raws = [b.raw for b in spec.bindings()]
    assert len(raws) == len(DEFAULT_LITERALS) + 2 * len(WORKSPACE_KEYS)
    assert len(set(raws)) == len(raws)
    assert "M-S-9" in raws


def test_default_spec_include_filter() -> None:
    spec = load_default_spec(include=["M-j", "M-Tab"], with_templates=False)

    assert spec.literals == ("M-j", "M-Tab")
    assert spec.templates == ()
