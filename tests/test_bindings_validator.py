import pytest

from keyspec.bindings import (
    Binding,
    BindingValidationError,
    collect_issues,
    parse_binding,
    validate_bindings,
)
from keyspec.bindings.grammar import parse_bindings


def test_validate_bindings_accepts_valid_set(known_codes: dict[str, int]) -> None:
    validate_bindings(parse_bindings(["M-j", "M-S-j", "A-C-Up"]), known_codes)


def test_validate_bindings_reports_single_duplicate(
    known_codes: dict[str, int],
) -> None:
    bindings = parse_bindings(["M-j", "M-k", "M-j", "M-1"])

    with pytest.raises(BindingValidationError) as excinfo:
        validate_bindings(bindings, known_codes)

    issues = excinfo.value.issues
    assert [issue.kind for issue in issues] == ["duplicate"]
    assert issues[0].raw == "M-j"
    assert "bound as a keybinding more than once" in issues[0].message


def test_collect_issues_keeps_checking_after_errors(
    known_codes: dict[str, int],
) -> None:
    bindings = parse_bindings(["M-nope", "M-j", "M-j", "Q-k", "j"])

    issues = collect_issues(bindings, known_codes)

    assert [(issue.kind, issue.raw) for issue in issues] == [
        ("unknown_key", "M-nope"),
        ("duplicate", "M-j"),
        ("invalid_modifiers", "Q-k"),
        ("missing_key", "j"),
        ("invalid_modifiers", "j"),
    ]


def test_unknown_modifier_rejected_even_with_known_key(
    known_codes: dict[str, int],
) -> None:
    binding = Binding(raw="X-j", modifiers=("X",), key_name="j")

    issues = collect_issues([binding], known_codes)

    assert len(issues) == 1
    assert issues[0].kind == "invalid_modifiers"
    assert "'X' is an invalid modifier set" in issues[0].message


def test_empty_modifier_set_is_invalid(known_codes: dict[str, int]) -> None:
    binding = Binding(raw="-j", modifiers=(), key_name="j")

    issues = collect_issues([binding], known_codes)

    assert [issue.kind for issue in issues] == ["invalid_modifiers"]


def test_missing_key_name_is_reported(known_codes: dict[str, int]) -> None:
    issues = collect_issues([parse_binding("M")], known_codes)

    assert [issue.kind for issue in issues] == ["missing_key"]
    assert issues[0].message == "'M' is an invalid key binding: no key name specified"


def test_validation_error_message_lists_every_issue(
    known_codes: dict[str, int],
) -> None:
    with pytest.raises(BindingValidationError) as excinfo:
        validate_bindings(parse_bindings(["M-nope", "Z-j"]), known_codes)

    text = str(excinfo.value)
    assert text.startswith("2 invalid key bindings:")
    assert "'nope' is not a known key" in text
    assert "'Z' is an invalid modifier set" in text
    assert "<modifiers>-<key name>" in text
    assert len(excinfo.value.of_kind("unknown_key")) == 1
