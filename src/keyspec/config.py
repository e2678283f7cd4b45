"""Environment-driven settings for the keyspec command line."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from keyspec.keynames import (
    DEFAULT_COMMAND,
    FileKeyNameSource,
    KeyNameSource,
    XmodmapKeyNameSource,
)
from keyspec.runtime.telemetry import ENV_PREFIX


def _split_command(command: Optional[str]) -> tuple[str, ...]:
    parts = tuple(shlex.split(command)) if command else ()
    return parts or DEFAULT_COMMAND


@dataclass(frozen=True)
class Settings:
    """Where the key-name table comes from."""

    xmodmap_command: tuple[str, ...] = DEFAULT_COMMAND
    keymap_file: Optional[str] = None
    logger_name: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            xmodmap_command=_split_command(env.get(f"{ENV_PREFIX}XMODMAP")),
            keymap_file=env.get(f"{ENV_PREFIX}KEYMAP_FILE") or None,
        )

    def override(
        self,
        *,
        xmodmap_command: Optional[str] = None,
        keymap_file: Optional[str] = None,
    ) -> "Settings":
        updated = self
        if xmodmap_command and xmodmap_command.strip():
            updated = replace(
                updated,
                xmodmap_command=_split_command(xmodmap_command),
                keymap_file=None,
            )
        if keymap_file:
            updated = replace(updated, keymap_file=keymap_file)
        return updated

    def key_name_source(self) -> KeyNameSource:
        if self.keymap_file:
            return FileKeyNameSource(self.keymap_file, logger_name=self.logger_name)
        return XmodmapKeyNameSource(
            self.xmodmap_command, logger_name=self.logger_name
        )


__all__ = ["Settings"]
