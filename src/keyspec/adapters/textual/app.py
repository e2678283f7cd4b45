"""Executable Textual app for browsing compiled key bindings."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the inspector is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import DataTable, Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use keyspec.adapters.textual.app"
    ) from exc

from keyspec.bindings import BindingSpec, load_default_spec, load_spec
from keyspec.config import Settings

from .controller import BindingRow, InspectorController, InspectorHooks


class KeyspecInspectorApp(App[None]):
    """Compiled binding table plus a live pattern resolver."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#bindings {
		height: 1fr;
		border: round $accent;
	}

	#resolution {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, spec: BindingSpec, settings: Settings) -> None:
        super().__init__()
        self._spec = spec
        self._settings = settings
        self.controller: InspectorController | None = None
        self._table: DataTable | None = None
        self._resolution_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical():
            self._table = DataTable(id="bindings", zebra_stripes=True)
            yield self._table
            yield Input(placeholder="Pattern, e.g. M-S-j", id="pattern")
            self._resolution_widget = Static("", id="resolution")
            yield self._resolution_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        if self._table is not None:
            self._table.add_columns("binding", "mask", "code", "status")
        hooks = InspectorHooks(
            update_rows=self._update_rows,
            update_status=self._update_status,
            show_resolution=self._show_resolution,
        )
        table = self._settings.key_name_source().fetch()
        self.controller = InspectorController(table, hooks)
        self.controller.load_spec(self._spec)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.controller:
            self.controller.resolve(event.value)

    def _update_rows(self, rows: list[BindingRow]) -> None:
        if self._table is None:
            return
        self._table.clear()
        for row in rows:
            self._table.add_row(row.raw, row.mask, row.code, row.status)

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_resolution(self, text: str) -> None:
        if self._resolution_widget:
            self._resolution_widget.update(text)


def run_inspector(spec: BindingSpec, settings: Settings) -> None:
    KeyspecInspectorApp(spec, settings).run()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse compiled key bindings.")
    parser.add_argument("spec", nargs="?", help="JSON binding specification")
    parser.add_argument("--keymap-file", help="Saved 'xmodmap -pke' dump")
    parser.add_argument("--xmodmap", help="Command used to dump the keymap")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    spec = load_spec(args.spec) if args.spec else load_default_spec()
    settings = Settings.from_env().override(
        xmodmap_command=args.xmodmap, keymap_file=args.keymap_file
    )
    run_inspector(spec, settings)


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
