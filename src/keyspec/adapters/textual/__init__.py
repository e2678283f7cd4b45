"""Textual inspector for compiled key bindings."""

from .controller import BindingRow, InspectorController, InspectorHooks

__all__ = ["BindingRow", "InspectorController", "InspectorHooks"]
