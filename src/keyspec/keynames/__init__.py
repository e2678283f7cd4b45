"""Sources for the system key-name table."""

from .source import (
    DEFAULT_COMMAND,
    FileKeyNameSource,
    KeyNameSource,
    KeyNameSourceError,
    StaticKeyNameSource,
    XmodmapKeyNameSource,
    parse_keymap_lines,
    parse_keymap_text,
)

__all__ = [
    "DEFAULT_COMMAND",
    "FileKeyNameSource",
    "KeyNameSource",
    "KeyNameSourceError",
    "StaticKeyNameSource",
    "XmodmapKeyNameSource",
    "parse_keymap_lines",
    "parse_keymap_text",
]
