"""Dataclasses describing parsed bindings and their resolved key grabs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

SEPARATOR = "-"
PLACEHOLDER = "{}"

# X core protocol modifier bits (xproto ModMask)
SHIFT_MASK = 1 << 0
CONTROL_MASK = 1 << 2
MOD1_MASK = 1 << 3
MOD4_MASK = 1 << 6

MODIFIER_MASKS: dict[str, int] = {
    "A": MOD1_MASK,
    "M": MOD4_MASK,
    "S": SHIFT_MASK,
    "C": CONTROL_MASK,
}

VALID_MODIFIERS: tuple[str, ...] = tuple(MODIFIER_MASKS)

MODIFIER_NAMES: dict[str, str] = {
    "A": "Alt",
    "M": "Super",
    "S": "Shift",
    "C": "Control",
}

FORMAT_HINT = (
    "Key bindings should be of the form <modifiers>-<key name> "
    "e.g:  M-j, M-S-slash, M-C-Up"
)


@dataclass(frozen=True, slots=True)
class Binding:
    """Single keybinding candidate as written by the user."""

    raw: str
    modifiers: tuple[str, ...] = ()
    key_name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", tuple(self.modifiers))

    @property
    def modifier_set(self) -> str:
        return SEPARATOR.join(self.modifiers)

    @property
    def joined(self) -> str:
        """Modifiers and key name re-joined with the separator."""

        if self.key_name is None:
            return self.modifier_set
        return SEPARATOR.join(self.modifiers + (self.key_name,))


@dataclass(frozen=True, slots=True)
class TemplateGroup:
    """Modifier templates crossed with key names during expansion."""

    templates: tuple[str, ...]
    key_names: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "templates", tuple(self.templates))
        object.__setattr__(self, "key_names", tuple(self.key_names))

    @classmethod
    def of(cls, templates: Iterable[str], key_names: Iterable[str]) -> "TemplateGroup":
        return cls(tuple(templates), tuple(key_names))


@dataclass(frozen=True, slots=True)
class ResolvedBinding:
    """Modifier mask and key code pair handed to the key grabber."""

    modifier_mask: int
    key_code: int

    def __post_init__(self) -> None:
        if self.modifier_mask < 0 or self.key_code < 0:
            raise ValueError("modifier_mask and key_code must be unsigned")

    def describe(self) -> str:
        names = [
            MODIFIER_NAMES[token]
            for token, bit in MODIFIER_MASKS.items()
            if self.modifier_mask & bit
        ]
        return "|".join(names) or "0"


__all__ = [
    "Binding",
    "TemplateGroup",
    "ResolvedBinding",
    "SEPARATOR",
    "PLACEHOLDER",
    "MODIFIER_MASKS",
    "MODIFIER_NAMES",
    "VALID_MODIFIERS",
    "FORMAT_HINT",
    "SHIFT_MASK",
    "CONTROL_MASK",
    "MOD1_MASK",
    "MOD4_MASK",
]
