from __future__ import annotations

from pathlib import Path

import pytest

XMODMAP_DUMP = """\
keycode   8 =
keycode   9 = Escape NoSymbol Escape
keycode  10 = 1 exclam 1 exclam
keycode  11 = 2 at 2 at
keycode  23 = Tab ISO_Left_Tab Tab ISO_Left_Tab
keycode  36 = Return NoSymbol Return
keycode  44 = j J j J
keycode  45 = k K k K
keycode 111 = Up NoSymbol Up
keycode 116 = Down NoSymbol Down
"""


@pytest.fixture
def known_codes() -> dict[str, int]:
    return {"j": 44, "k": 45, "1": 10, "2": 11, "Up": 111, "Tab": 23}


@pytest.fixture
def keymap_dump(tmp_path: Path) -> Path:
    path = tmp_path / "keymap.txt"
    path.write_text(XMODMAP_DUMP, encoding="utf-8")
    return path


@pytest.fixture
def keymap_text() -> str:
    return XMODMAP_DUMP
