"""Binding specifications: literal strings plus template groups."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from .grammar import expand_templates, parse_bindings
from .models import Binding, TemplateGroup


class SpecFormatError(ValueError):
    """Raised when a specification document has the wrong shape."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")
        self.source = source


@dataclass(frozen=True, slots=True)
class BindingSpec:
    """Everything the user asked to bind, before expansion."""

    literals: tuple[str, ...] = ()
    templates: tuple[TemplateGroup, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "literals", tuple(self.literals))
        object.__setattr__(self, "templates", tuple(self.templates))

    def bindings(self) -> list[Binding]:
        """Literal bindings first, then each template group in order.

        Raises ``TemplateError`` on the first malformed template.
        """

        result = parse_bindings(self.literals)
        for group in self.templates:
            result.extend(expand_templates(group.templates, group.key_names))
        return result

    def merged(self, other: "BindingSpec") -> "BindingSpec":
        return BindingSpec(
            literals=self.literals + other.literals,
            templates=self.templates + other.templates,
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "bindings": list(self.literals),
            "templates": [
                {"modifiers": list(group.templates), "keys": list(group.key_names)}
                for group in self.templates
            ],
        }

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], *, source: str | None = None
    ) -> "BindingSpec":
        if not isinstance(data, Mapping):
            raise SpecFormatError("expected a JSON object at top level", source=source)
        unknown = set(data) - {"bindings", "templates"}
        if unknown:
            raise SpecFormatError(
                f"unknown sections {sorted(unknown)}", source=source
            )
        literals = _string_list(data.get("bindings", []), "bindings", source)
        raw_groups = data.get("templates", [])
        if not isinstance(raw_groups, list):
            raise SpecFormatError("'templates' must be a list", source=source)
        groups = tuple(
            _template_group(entry, index, source)
            for index, entry in enumerate(raw_groups)
        )
        return cls(literals=tuple(literals), templates=groups)


def _string_list(value: Any, where: str, source: str | None) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SpecFormatError(f"'{where}' must be a list of strings", source=source)
    return list(value)


def _template_group(entry: Any, index: int, source: str | None) -> TemplateGroup:
    where = f"templates[{index}]"
    if isinstance(entry, Mapping):
        try:
            templates, keys = entry["modifiers"], entry["keys"]
        except KeyError as exc:
            raise SpecFormatError(
                f"{where} is missing '{exc.args[0]}'", source=source
            ) from exc
    elif isinstance(entry, list) and len(entry) == 2:
        templates, keys = entry
    else:
        raise SpecFormatError(
            f"{where} must be an object or a [modifiers, keys] pair", source=source
        )
    return TemplateGroup.of(
        _string_list(templates, f"{where}.modifiers", source),
        _string_list(keys, f"{where}.keys", source),
    )


def load_spec(path: str | Path) -> BindingSpec:
    """Read a JSON binding specification from ``path``."""

    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise SpecFormatError(f"not UTF-8 text: {exc}", source=str(file_path)) from exc
    except json.JSONDecodeError as exc:
        raise SpecFormatError(f"invalid JSON: {exc}", source=str(file_path)) from exc
    return BindingSpec.from_mapping(data, source=str(file_path))


def spec_from_parts(
    literals: Iterable[str] = (),
    templates: Sequence[tuple[Sequence[str], Sequence[str]]] = (),
) -> BindingSpec:
    return BindingSpec(
        literals=tuple(literals),
        templates=tuple(TemplateGroup.of(t, k) for t, k in templates),
    )


__all__ = ["BindingSpec", "SpecFormatError", "load_spec", "spec_from_parts"]
