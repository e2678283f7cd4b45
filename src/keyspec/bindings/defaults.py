"""Built-in binding set for a tiling window manager."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import TemplateGroup
from .spec_file import BindingSpec

WORKSPACE_KEYS: tuple[str, ...] = tuple(str(n) for n in range(1, 10))

DEFAULT_LITERALS: tuple[str, ...] = (
    "M-j",
    "M-k",
    "M-S-j",
    "M-S-k",
    "M-S-q",
    "M-Tab",
    "M-bracketright",
    "M-bracketleft",
    "M-S-bracketright",
    "M-S-bracketleft",
    "M-grave",
    "M-S-grave",
    "M-A-Up",
    "M-A-Down",
    "M-A-Right",
    "M-A-Left",
    "M-semicolon",
    "M-Return",
    "M-A-Escape",
)

DEFAULT_TEMPLATES: tuple[TemplateGroup, ...] = (
    TemplateGroup.of(("M-{}", "M-S-{}"), WORKSPACE_KEYS),
)

DEFAULT_SPEC = BindingSpec(literals=DEFAULT_LITERALS, templates=DEFAULT_TEMPLATES)


def load_default_spec(
    *,
    include: Optional[Iterable[str]] = None,
    with_templates: bool = True,
) -> BindingSpec:
    """Return the default spec, optionally limited to some literal bindings."""

    literals = DEFAULT_LITERALS
    if include is not None:
        wanted = set(include)
        literals = tuple(raw for raw in literals if raw in wanted)
    templates = DEFAULT_TEMPLATES if with_templates else ()
    return BindingSpec(literals=literals, templates=templates)


__all__ = [
    "DEFAULT_LITERALS",
    "DEFAULT_SPEC",
    "DEFAULT_TEMPLATES",
    "WORKSPACE_KEYS",
    "load_default_spec",
]
