"""Turn binding patterns into modifier-mask/key-code pairs."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from keyspec.keynames import KeyNameSource
from keyspec.runtime.telemetry import span

from .grammar import modifier_mask, parse_binding
from .models import Binding, ResolvedBinding
from .spec_file import BindingSpec
from .validator import validate_bindings


def _resolve(binding: Binding, known_codes: Mapping[str, int]) -> Optional[ResolvedBinding]:
    if binding.key_name is None:
        return None
    code = known_codes.get(binding.key_name)
    if code is None:
        return None
    mask = modifier_mask(binding.modifiers, pattern=binding.raw)
    return ResolvedBinding(modifier_mask=mask, key_code=code)


def parse_key_binding(
    pattern: str, known_codes: Mapping[str, int]
) -> Optional[ResolvedBinding]:
    """Resolve one pattern such as ``"M-S-j"``.

    Returns ``None`` when the key name is not in ``known_codes``. A modifier
    outside the fixed vocabulary raises ``InvalidModifierError``.
    A pattern without any ``-`` (such as ``"j"``) has no key name and
    always resolves to ``None``.
    """

    return _resolve(parse_binding(pattern), known_codes)


class BindingResolver:
    """Runtime resolver over a single snapshot of the key-name table."""

    def __init__(
        self, known_codes: Mapping[str, int], *, logger_name: str | None = None
    ) -> None:
        self._known_codes = MappingProxyType(dict(known_codes))
        self._logger_name = logger_name

    @classmethod
    def from_source(
        cls, source: KeyNameSource, *, logger_name: str | None = None
    ) -> "BindingResolver":
        return cls(source.fetch(), logger_name=logger_name)

    @property
    def known_codes(self) -> Mapping[str, int]:
        return self._known_codes

    def resolve(self, pattern: str) -> Optional[ResolvedBinding]:
        with span(
            "bindings::resolve",
            logger_name=self._logger_name,
            component="bindings",
            metadata={"pattern": pattern},
        ) as handle:
            resolved = parse_key_binding(pattern, self._known_codes)
            if resolved is None:
                handle.add_metadata("status", "miss")
                return None
            handle.add_metadata("status", "match")
            handle.debug(
                "binding resolved",
                mask=resolved.modifier_mask,
                code=resolved.key_code,
            )
            return resolved


@dataclass(frozen=True, slots=True)
class CompiledKeymap:
    """Validated bindings paired with their resolved grabs, in input order."""

    bindings: tuple[Binding, ...]
    resolved: Mapping[str, ResolvedBinding] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.bindings)

    def __iter__(self) -> Iterator[tuple[str, ResolvedBinding]]:
        for binding in self.bindings:
            yield binding.raw, self.resolved[binding.raw]

    def get(self, raw: str) -> Optional[ResolvedBinding]:
        return self.resolved.get(raw)

    def grabs(self) -> tuple[tuple[int, int], ...]:
        """Distinct ``(mask, code)`` pairs, first occurrence order."""

        pairs = dict.fromkeys(
            (resolved.modifier_mask, resolved.key_code) for _, resolved in self
        )
        return tuple(pairs)


def compile_bindings(
    spec: BindingSpec,
    known_codes: Mapping[str, int],
    *,
    logger_name: str | None = None,
) -> CompiledKeymap:
    """Expand, validate and resolve every binding in ``spec``.

    Raises ``TemplateError`` for malformed templates and
    ``BindingValidationError`` carrying all issues otherwise.
    """

    with span(
        "bindings::compile",
        logger_name=logger_name,
        component="bindings",
        metadata={
            "literals": len(spec.literals),
            "template_groups": len(spec.templates),
        },
    ) as handle:
        bindings = tuple(spec.bindings())
        handle.add_metadata("expanded", len(bindings))
        validate_bindings(bindings, known_codes, logger_name=logger_name)

        resolved: dict[str, ResolvedBinding] = {}
        for binding in bindings:
            result = _resolve(binding, known_codes)
            if result is None:  # pragma: no cover - validated above
                raise KeyError(binding.raw)
            resolved[binding.raw] = result
        return CompiledKeymap(
            bindings=bindings, resolved=MappingProxyType(resolved)
        )


__all__ = [
    "BindingResolver",
    "CompiledKeymap",
    "compile_bindings",
    "parse_key_binding",
]
