"""Accumulating validation pass over a full binding set."""

from __future__ import annotations

from typing import Iterable, Mapping

from keyspec.runtime.telemetry import record_event, span

from .errors import BindingValidationError, ValidationIssue
from .grammar import has_valid_modifiers, is_known_key
from .models import VALID_MODIFIERS, Binding


def check_binding(
    binding: Binding, known_codes: Mapping[str, int]
) -> list[ValidationIssue]:
    """Return every problem with a single binding, ignoring uniqueness."""

    issues: list[ValidationIssue] = []
    if binding.key_name is None:
        issues.append(
            ValidationIssue("missing_key", binding.raw, "no key name specified")
        )
    elif not is_known_key(binding, known_codes):
        issues.append(
            ValidationIssue(
                "unknown_key",
                binding.raw,
                f"'{binding.key_name}' is not a known key: "
                "run 'xmodmap -pke' to see valid key names",
            )
        )

    if not has_valid_modifiers(binding):
        issues.append(
            ValidationIssue(
                "invalid_modifiers",
                binding.raw,
                f"'{binding.modifier_set}' is an invalid modifier set: "
                f"valid modifiers are {list(VALID_MODIFIERS)}",
            )
        )
    return issues


def collect_issues(
    bindings: Iterable[Binding],
    known_codes: Mapping[str, int],
) -> list[ValidationIssue]:
    """Check ``bindings`` in order and gather all issues found."""

    seen: set[str] = set()
    issues: list[ValidationIssue] = []
    for binding in bindings:
        if binding.raw in seen:
            # the first occurrence already carries any per-binding issues
            issues.append(
                ValidationIssue(
                    "duplicate",
                    binding.raw,
                    f"'{binding.raw}' is bound as a keybinding more than once",
                )
            )
            continue
        seen.add(binding.raw)
        issues.extend(check_binding(binding, known_codes))
    return issues


def validate_bindings(
    bindings: Iterable[Binding],
    known_codes: Mapping[str, int],
    *,
    logger_name: str | None = None,
) -> None:
    """Raise ``BindingValidationError`` listing every issue, if any."""

    items = tuple(bindings)
    with span(
        "bindings::validate",
        logger_name=logger_name,
        component="bindings",
        metadata={"count": len(items), "known_keys": len(known_codes)},
    ) as handle:
        issues = collect_issues(items, known_codes)
        handle.add_metadata("issues", len(issues))
        if issues:
            record_event(
                "bindings.invalid",
                level="warning",
                data={
                    "issues": len(issues),
                    "first": issues[0].raw,
                },
                logger_name=logger_name,
            )
            raise BindingValidationError(issues)


__all__ = ["check_binding", "collect_issues", "validate_bindings"]
