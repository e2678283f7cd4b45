import pytest

from keyspec.bindings import Binding, TemplateError, expand_templates, parse_binding
from keyspec.bindings.grammar import modifier_mask, split_template
from keyspec.bindings.errors import InvalidModifierError
from keyspec.bindings.models import CONTROL_MASK, MOD1_MASK, MOD4_MASK, SHIFT_MASK


def test_parse_binding_splits_modifiers_and_key() -> None:
    binding = parse_binding("M-S-slash")

    assert binding.raw == "M-S-slash"
    assert binding.modifiers == ("M", "S")
    assert binding.key_name == "slash"


@pytest.mark.parametrize("raw", ["M-j", "M-S-j", "A-C-Up", "M-A-S-C-Return"])
def test_parse_binding_rejoins_to_raw(raw: str) -> None:
    assert parse_binding(raw).joined == raw


def test_parse_binding_single_segment_has_no_key() -> None:
    binding = parse_binding("j")

    assert binding.modifiers == ("j",)
    assert binding.key_name is None


def test_parse_binding_trailing_separator_gives_empty_key() -> None:
    binding = parse_binding("M-")

    assert binding.modifiers == ("M",)
    assert binding.key_name == ""


def test_expand_templates_is_cross_product_in_order() -> None:
    bindings = expand_templates(["M-{}", "M-S-{}"], ["1", "2", "3"])

    assert [b.raw for b in bindings] == [
        "M-1",
        "M-2",
        "M-3",
        "M-S-1",
        "M-S-2",
        "M-S-3",
    ]
    assert bindings[4] == Binding(raw="M-S-2", modifiers=("M", "S"), key_name="2")


def test_expand_templates_with_no_keys_yields_nothing() -> None:
    assert expand_templates(["M-{}"], []) == []


def test_expand_templates_rejects_bad_template_before_output() -> None:
    with pytest.raises(TemplateError) as excinfo:
        expand_templates(["M-{}", "M-S-x"], ["1", "2"])

    assert excinfo.value.template == "M-S-x"
    assert "'M-S-x' is an invalid template" in str(excinfo.value)


def test_split_template_requires_exact_placeholder() -> None:
    assert split_template("M-C-{}") == ("M", "C")
    with pytest.raises(TemplateError):
        split_template("M-{1}")


def test_modifier_mask_combines_bits() -> None:
    assert modifier_mask(["A"]) == MOD1_MASK
    assert modifier_mask(["M", "S"]) == MOD4_MASK | SHIFT_MASK
    assert modifier_mask(["C", "C"]) == CONTROL_MASK
    assert modifier_mask([]) == 0


def test_modifier_mask_rejects_unknown_token() -> None:
    with pytest.raises(InvalidModifierError) as excinfo:
        modifier_mask(["M", "X"], pattern="M-X-j")

    assert excinfo.value.token == "X"
    assert excinfo.value.pattern == "M-X-j"
