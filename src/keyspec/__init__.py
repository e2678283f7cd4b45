"""Keybinding specification compiler for X window managers."""

__all__ = [
    "adapters",
    "bindings",
    "keynames",
    "runtime",
    "config",
    "cli",
]

__version__ = "0.1.0"
