"""Key-name tables captured from ``xmodmap -pke`` output."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Protocol, Sequence

from keyspec.runtime.telemetry import record_event, span

DEFAULT_COMMAND: tuple[str, ...] = ("xmodmap", "-pke")
# X key codes are a CARD8
MAX_KEY_CODE = 255

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]


class KeyNameSourceError(RuntimeError):
    """Raised when the key-name table cannot be produced."""

    def __init__(self, message: str, *, command: Sequence[str] | None = None) -> None:
        super().__init__(message)
        self.command = tuple(command) if command else None


class KeyNameSource(Protocol):
    """Anything able to hand back a ``name -> key code`` table."""

    def fetch(self) -> Mapping[str, int]:
        ...


def parse_keymap_lines(lines: Iterable[str]) -> dict[str, int]:
    """Build a name table from ``keycode <code> = <names ...>`` lines.

    Every name on a line maps to the line's code; a name repeated on a later
    line takes that later code.
    """

    table: dict[str, int] = {}
    for number, line in enumerate(lines, start=1):
        words = line.split()
        if len(words) < 3 or words[0] != "keycode" or words[2] != "=":
            continue
        try:
            code = int(words[1])
        except ValueError:
            code = -1
        if not 0 <= code <= MAX_KEY_CODE:
            raise KeyNameSourceError(
                f"line {number}: invalid key code {words[1]!r}"
            )
        for name in words[3:]:
            table[name] = code
    return table


def parse_keymap_text(text: str) -> dict[str, int]:
    return parse_keymap_lines(text.splitlines())


def _snapshot(table: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(table))


class XmodmapKeyNameSource:
    """Run xmodmap and parse its keymap expression table."""

    def __init__(
        self,
        command: Sequence[str] | str = DEFAULT_COMMAND,
        *,
        runner: Runner = subprocess.run,
        timeout: float | None = 10.0,
        logger_name: str | None = None,
    ) -> None:
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ValueError("command cannot be empty")
        self.command = tuple(command)
        self._runner = runner
        self._timeout = timeout
        self._logger_name = logger_name

    def fetch(self) -> Mapping[str, int]:
        with span(
            "keynames::fetch",
            logger_name=self._logger_name,
            component="keynames",
            metadata={"command": " ".join(self.command)},
        ) as handle:
            try:
                completed = self._runner(
                    list(self.command),
                    capture_output=True,
                    check=False,
                    timeout=self._timeout,
                )
            except (OSError, subprocess.SubprocessError) as exc:
                self._report("spawn", str(exc))
                raise KeyNameSourceError(
                    f"unable to fetch keycodes via {self.command[0]}: {exc}",
                    command=self.command,
                ) from exc

            if completed.returncode != 0:
                stderr = _decode_quietly(completed.stderr)
                self._report("exit", stderr or str(completed.returncode))
                raise KeyNameSourceError(
                    f"{self.command[0]} exited with status {completed.returncode}"
                    + (f": {stderr}" if stderr else ""),
                    command=self.command,
                )

            try:
                text = completed.stdout.decode("utf-8")
            except UnicodeDecodeError as exc:
                self._report("decode", str(exc))
                raise KeyNameSourceError(
                    f"invalid utf8 from {self.command[0]}: {exc}",
                    command=self.command,
                ) from exc

            table = parse_keymap_text(text)
            handle.add_metadata("names", len(table))
            return _snapshot(table)

    def _report(self, stage: str, reason: str) -> None:
        record_event(
            "keynames.failed",
            level="error",
            data={"stage": stage, "reason": reason, "command": self.command[0]},
            logger_name=self._logger_name,
        )


def _decode_quietly(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace").strip()


class FileKeyNameSource:
    """Parse a previously saved ``xmodmap -pke`` dump."""

    def __init__(self, path: str | Path, *, logger_name: str | None = None) -> None:
        self.path = Path(path)
        self._logger_name = logger_name

    def fetch(self) -> Mapping[str, int]:
        with span(
            "keynames::load",
            logger_name=self._logger_name,
            component="keynames",
            metadata={"path": str(self.path)},
        ) as handle:
            try:
                text = self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise KeyNameSourceError(
                    f"unable to read keymap dump {self.path}: {exc}"
                ) from exc
            table = parse_keymap_text(text)
            handle.add_metadata("names", len(table))
            return _snapshot(table)


class StaticKeyNameSource:
    """Fixed in-memory table."""

    def __init__(self, table: Mapping[str, int]) -> None:
        self._table = _snapshot(table)

    def fetch(self) -> Mapping[str, int]:
        return self._table


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
