"""Exceptions raised while expanding, validating and resolving bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from .models import FORMAT_HINT, PLACEHOLDER, SEPARATOR

IssueKind = Literal["duplicate", "missing_key", "unknown_key", "invalid_modifiers"]


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One problem found with one binding."""

    kind: IssueKind
    raw: str
    detail: str

    @property
    def message(self) -> str:
        if self.kind == "duplicate":
            return self.detail
        return f"'{self.raw}' is an invalid key binding: {self.detail}"


class TemplateError(ValueError):
    """Raised when a modifier template does not end in the placeholder."""

    def __init__(self, template: str) -> None:
        super().__init__(
            f"'{template}' is an invalid template: "
            f"expected '<Modifiers>{SEPARATOR}{PLACEHOLDER}'"
        )
        self.template = template


class BindingValidationError(ValueError):
    """Raised once a binding set has been fully checked and found invalid."""

    def __init__(self, issues: Iterable[ValidationIssue]) -> None:
        issues_tuple = tuple(issues)
        lines = [issue.message for issue in issues_tuple]
        count = len(issues_tuple)
        header = f"{count} invalid key binding{'s' if count != 1 else ''}:"
        super().__init__("\n".join([header, *lines, FORMAT_HINT]))
        self.issues = issues_tuple

    def of_kind(self, kind: IssueKind) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.issues if issue.kind == kind)


class InvalidModifierError(ValueError):
    """Raised when runtime resolution meets a token outside the modifier set."""

    def __init__(self, token: str, pattern: str) -> None:
        super().__init__(f"invalid key binding prefix: '{token}' in '{pattern}'")
        self.token = token
        self.pattern = pattern


__all__ = [
    "IssueKind",
    "ValidationIssue",
    "TemplateError",
    "BindingValidationError",
    "InvalidModifierError",
]
