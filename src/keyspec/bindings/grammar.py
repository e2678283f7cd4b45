"""Binding string grammar shared by the compile-time and runtime paths."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .errors import InvalidModifierError, TemplateError
from .models import MODIFIER_MASKS, PLACEHOLDER, SEPARATOR, Binding


def parse_binding(raw: str) -> Binding:
    """Split ``raw`` into modifiers and a trailing key name.

    A string without any separator is kept whole as a single modifier with
    no key name; validation always rejects that shape.
    """

    parts = raw.split(SEPARATOR)
    if len(parts) <= 1:
        return Binding(raw=raw, modifiers=(raw,), key_name=None)
    return Binding(raw=raw, modifiers=tuple(parts[:-1]), key_name=parts[-1])


def parse_bindings(raws: Iterable[str]) -> list[Binding]:
    return [parse_binding(raw) for raw in raws]


def split_template(template: str) -> tuple[str, ...]:
    """Return the modifier segments of ``template``.

    Raises ``TemplateError`` unless the last segment is the placeholder.
    """

    parts = template.split(SEPARATOR)
    if parts.pop() != PLACEHOLDER:
        raise TemplateError(template)
    return tuple(parts)


def expand_templates(
    templates: Sequence[str], key_names: Sequence[str]
) -> list[Binding]:
    """Cross every modifier template with every key name.

    All templates are checked before any binding is produced. Output order
    is template-major, key-minor.
    """

    prefixes = [split_template(template) for template in templates]
    bindings: list[Binding] = []
    for modifiers in prefixes:
        prefix = SEPARATOR.join(modifiers)
        for key_name in key_names:
            bindings.append(
                Binding(
                    raw=f"{prefix}{SEPARATOR}{key_name}",
                    modifiers=modifiers,
                    key_name=key_name,
                )
            )
    return bindings


def has_valid_modifiers(binding: Binding) -> bool:
    return bool(binding.modifiers) and all(
        token in MODIFIER_MASKS for token in binding.modifiers
    )


def is_known_key(binding: Binding, known_codes: Mapping[str, int]) -> bool:
    return binding.key_name is not None and binding.key_name in known_codes


def modifier_mask(modifiers: Iterable[str], *, pattern: str = "") -> int:
    """OR together the mask bits for ``modifiers``.

    Unknown tokens raise ``InvalidModifierError``; repeated tokens are
    harmless.
    """

    mask = 0
    for token in modifiers:
        try:
            mask |= MODIFIER_MASKS[token]
        except KeyError:
            raise InvalidModifierError(token, pattern) from None
    return mask


__all__ = [
    "parse_binding",
    "parse_bindings",
    "split_template",
    "expand_templates",
    "has_valid_modifiers",
    "is_known_key",
    "modifier_mask",
]
