import pytest

from keyspec.bindings import (
    BindingResolver,
    BindingValidationError,
    InvalidModifierError,
    ResolvedBinding,
    TemplateError,
    compile_bindings,
    parse_key_binding,
    spec_from_parts,
)
from keyspec.bindings.models import CONTROL_MASK, MOD1_MASK, MOD4_MASK, SHIFT_MASK
from keyspec.keynames import StaticKeyNameSource


def test_parse_key_binding_resolves_super_j() -> None:
    assert parse_key_binding("M-j", {"j": 44}) == ResolvedBinding(MOD4_MASK, 44)


def test_parse_key_binding_unknown_key_is_a_miss() -> None:
    assert parse_key_binding("M-nonexistent", {"j": 44}) is None


def test_parse_key_binding_without_key_name_is_a_miss() -> None:
    assert parse_key_binding("j", {"j": 44}) is None


def test_parse_key_binding_mask_is_order_independent() -> None:
    codes = {"Up": 111}

    left = parse_key_binding("A-C-S-Up", codes)
    right = parse_key_binding("S-C-A-Up", codes)

    assert left == right
    assert left is not None
    assert left.modifier_mask == MOD1_MASK | CONTROL_MASK | SHIFT_MASK


def test_parse_key_binding_bad_modifier_is_fatal() -> None:
    with pytest.raises(InvalidModifierError):
        parse_key_binding("M-Hyper-j", {"j": 44})


def test_resolver_from_source_uses_snapshot() -> None:
    table = {"j": 44}
    resolver = BindingResolver.from_source(StaticKeyNameSource(table))
    table["k"] = 45

    assert resolver.resolve("M-S-j") == ResolvedBinding(MOD4_MASK | SHIFT_MASK, 44)
    assert resolver.resolve("M-k") is None


def test_compile_bindings_end_to_end() -> None:
    spec = spec_from_parts(["M-j", "M-S-j"], [(["M-{}"], ["1", "2"])])

    keymap = compile_bindings(spec, {"j": 44, "1": 10, "2": 11})

    assert list(keymap) == [
        ("M-j", ResolvedBinding(MOD4_MASK, 44)),
        ("M-S-j", ResolvedBinding(MOD4_MASK | SHIFT_MASK, 44)),
        ("M-1", ResolvedBinding(MOD4_MASK, 10)),
        ("M-2", ResolvedBinding(MOD4_MASK, 11)),
    ]
    assert len(keymap) == 4
    assert keymap.get("M-1") == ResolvedBinding(MOD4_MASK, 10)
    assert keymap.get("M-3") is None


def test_compile_bindings_grabs_are_distinct() -> None:
    spec = spec_from_parts(["M-j", "M-M-j"])

    keymap = compile_bindings(spec, {"j": 44})

    assert keymap.grabs() == ((MOD4_MASK, 44),)


def test_compile_bindings_raises_with_all_issues() -> None:
    spec = spec_from_parts(["M-j", "M-j", "X-j"], [(["M-{}"], ["1", "9"])])

    with pytest.raises(BindingValidationError) as excinfo:
        compile_bindings(spec, {"j": 44, "1": 10})

    assert [(i.kind, i.raw) for i in excinfo.value.issues] == [
        ("duplicate", "M-j"),
        ("invalid_modifiers", "X-j"),
        ("unknown_key", "M-9"),
    ]


def test_compile_bindings_template_error_aborts() -> None:
    spec = spec_from_parts(["nonsense"], [(["M-x"], ["1"])])

    with pytest.raises(TemplateError):
        compile_bindings(spec, {"1": 10})


def test_resolved_binding_describe() -> None:
    assert ResolvedBinding(MOD4_MASK | SHIFT_MASK, 44).describe() == "Super|Shift"
    assert ResolvedBinding(0, 44).describe() == "0"
    with pytest.raises(ValueError):
        ResolvedBinding(-1, 44)


def test_resolver_single_segment_pattern_is_a_miss() -> None:
    resolver = BindingResolver({"j": 44})

    assert resolver.resolve("j") is None
