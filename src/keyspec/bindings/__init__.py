"""Binding grammar, template expansion, validation and resolution."""

from .models import Binding, ResolvedBinding, TemplateGroup
from .errors import (
    BindingValidationError,
    InvalidModifierError,
    TemplateError,
    ValidationIssue,
)
from .grammar import expand_templates, modifier_mask, parse_binding
from .validator import collect_issues, validate_bindings
from .spec_file import BindingSpec, SpecFormatError, load_spec, spec_from_parts
from .resolver import (
    BindingResolver,
    CompiledKeymap,
    compile_bindings,
    parse_key_binding,
)
from .defaults import DEFAULT_SPEC, load_default_spec

__all__ = [
    "Binding",
    "ResolvedBinding",
    "TemplateGroup",
    "BindingValidationError",
    "InvalidModifierError",
    "TemplateError",
    "ValidationIssue",
    "expand_templates",
    "modifier_mask",
    "parse_binding",
    "collect_issues",
    "validate_bindings",
    "BindingSpec",
    "SpecFormatError",
    "load_spec",
    "spec_from_parts",
    "BindingResolver",
    "CompiledKeymap",
    "compile_bindings",
    "parse_key_binding",
    "DEFAULT_SPEC",
    "load_default_spec",
]
