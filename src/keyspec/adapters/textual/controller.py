"""UI-agnostic controller behind the Textual binding inspector."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from keyspec.bindings import (
    BindingResolver,
    BindingSpec,
    BindingValidationError,
    CompiledKeymap,
    InvalidModifierError,
    ResolvedBinding,
    TemplateError,
    ValidationIssue,
    collect_issues,
    compile_bindings,
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class BindingRow:
    """One line of the inspector table."""

    raw: str
    mask: str = ""
    code: str = ""
    status: str = "ok"


@dataclass(slots=True)
class InspectorHooks:
    """Callbacks invoked by the controller to update widgets."""

    update_rows: Callable[[list[BindingRow]], None]
    update_status: Callable[[str], None] = _noop
    show_resolution: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class InspectorController:
    """Compiles a spec against one key-name snapshot and answers lookups."""

    def __init__(
        self,
        known_codes: Mapping[str, int],
        hooks: InspectorHooks,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.hooks = hooks
        self.resolver = BindingResolver(known_codes, logger_name=logger_name)
        self.keymap: Optional[CompiledKeymap] = None
        self.issues: tuple[ValidationIssue, ...] = ()
        self._logger_name = logger_name

    def load_spec(self, spec: BindingSpec) -> tuple[ValidationIssue, ...]:
        """Compile ``spec`` and push the resulting rows to the UI."""

        known = self.resolver.known_codes
        try:
            self.keymap = compile_bindings(spec, known, logger_name=self._logger_name)
            self.issues = ()
        except TemplateError as exc:
            self.keymap = None
            self.issues = ()
            self.hooks.update_rows([])
            self.hooks.update_status(str(exc))
            return self.issues
        except BindingValidationError as exc:
            self.keymap = None
            self.issues = exc.issues

        self.hooks.update_rows(self._rows(spec))
        if self.issues:
            self.hooks.update_status(f"{len(self.issues)} invalid binding(s)")
        elif self.keymap is not None:
            self.hooks.update_status(
                f"{len(self.keymap)} bindings, {len(self.keymap.grabs())} grabs"
            )
        self.hooks.log(f"spec loaded issues={len(self.issues)}")
        return self.issues

    def resolve(self, pattern: str) -> Optional[ResolvedBinding]:
        pattern = pattern.strip()
        if not pattern:
            self.hooks.show_resolution("")
            return None
        try:
            resolved = self.resolver.resolve(pattern)
        except InvalidModifierError as exc:
            self.hooks.show_resolution(str(exc))
            return None
        if resolved is None:
            self.hooks.show_resolution(f"{pattern}: not found")
        else:
            self.hooks.show_resolution(
                f"{pattern}: mask={resolved.modifier_mask} "
                f"({resolved.describe()}) code={resolved.key_code}"
            )
        return resolved

    def _rows(self, spec: BindingSpec) -> list[BindingRow]:
        bindings = spec.bindings()
        if self.keymap is not None:
            return [
                BindingRow(raw, str(r.modifier_mask), str(r.key_code))
                for raw, r in self.keymap
            ]

        by_raw: dict[str, list[str]] = {}
        for issue in collect_issues(bindings, self.resolver.known_codes):
            by_raw.setdefault(issue.raw, []).append(issue.kind)
        rows: list[BindingRow] = []
        for binding in bindings:
            kinds = by_raw.get(binding.raw)
            if kinds:
                rows.append(BindingRow(binding.raw, status=",".join(kinds)))
                continue
            resolved = self.resolver.resolve(binding.raw)
            if resolved is None:  # pragma: no cover - issues cover misses
                rows.append(BindingRow(binding.raw, status="unknown_key"))
            else:
                rows.append(
                    BindingRow(
                        binding.raw,
                        str(resolved.modifier_mask),
                        str(resolved.key_code),
                    )
                )
        return rows


__all__ = ["BindingRow", "InspectorController", "InspectorHooks"]
