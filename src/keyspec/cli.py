"""Command line front-end: check specs, resolve patterns, list key names."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence, TextIO

from keyspec.bindings import (
    BindingResolver,
    BindingSpec,
    BindingValidationError,
    CompiledKeymap,
    InvalidModifierError,
    SpecFormatError,
    TemplateError,
    compile_bindings,
    load_default_spec,
    load_spec,
)
from keyspec.config import Settings
from keyspec.keynames import KeyNameSourceError
from keyspec.runtime import telemetry

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--keymap-file",
        help="Read key names from a saved 'xmodmap -pke' dump "
        "(default: $KEYSPEC_KEYMAP_FILE)",
    )
    parser.add_argument(
        "--xmodmap",
        help="Command used to dump the keymap (default: $KEYSPEC_XMODMAP or "
        "'xmodmap -pke')",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyspec",
        description="Validate and resolve window-manager key bindings.",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "quiet", "ci"),
        help="telelog preset to use for this run",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Compile a binding spec file")
    check.add_argument("spec", nargs="?", help="JSON binding specification")
    check.add_argument(
        "--defaults", action="store_true", help="Include the built-in bindings"
    )
    check.add_argument("--json", action="store_true", help="Emit JSON")
    _add_source_args(check)

    resolve = sub.add_parser("resolve", help="Resolve patterns like M-S-j")
    resolve.add_argument("patterns", nargs="+")
    _add_source_args(resolve)

    keys = sub.add_parser("keys", help="List known key names")
    keys.add_argument("--grep", help="Only names containing this text")
    _add_source_args(keys)

    inspect = sub.add_parser("inspect", help="Open the Textual inspector")
    inspect.add_argument("spec", nargs="?", help="JSON binding specification")
    _add_source_args(inspect)
    return parser


def _settings(args: argparse.Namespace) -> Settings:
    return Settings.from_env().override(
        xmodmap_command=args.xmodmap, keymap_file=args.keymap_file
    )


def _read_spec(path: Optional[str], with_defaults: bool) -> BindingSpec:
    spec = BindingSpec()
    if with_defaults or not path:
        spec = load_default_spec()
    if path:
        spec = spec.merged(load_spec(path))
    return spec


def _print_keymap(keymap: CompiledKeymap, as_json: bool, out: TextIO) -> None:
    if as_json:
        rows = [
            {"binding": raw, "mask": resolved.modifier_mask, "code": resolved.key_code}
            for raw, resolved in keymap
        ]
        json.dump(rows, out, indent=2)
        out.write("\n")
        return
    width = max((len(raw) for raw, _ in keymap), default=0)
    for raw, resolved in keymap:
        out.write(
            f"{raw:<{width}}  mask={resolved.modifier_mask:<3} "
            f"code={resolved.key_code:<3} ({resolved.describe()})\n"
        )


def _run_check(args: argparse.Namespace, out: TextIO, err: TextIO) -> int:
    spec = _read_spec(args.spec, args.defaults)
    table = _settings(args).key_name_source().fetch()
    try:
        keymap = compile_bindings(spec, table)
    except BindingValidationError as exc:
        err.write(f"{exc}\n")
        return EXIT_INVALID
    _print_keymap(keymap, args.json, out)
    return EXIT_OK


def _run_resolve(args: argparse.Namespace, out: TextIO) -> int:
    resolver = BindingResolver.from_source(_settings(args).key_name_source())
    status = EXIT_OK
    for pattern in args.patterns:
        resolved = resolver.resolve(pattern)
        if resolved is None:
            out.write(f"{pattern}: not found\n")
            status = EXIT_INVALID
        else:
            out.write(
                f"{pattern}: mask={resolved.modifier_mask} code={resolved.key_code}\n"
            )
    return status


def _run_keys(args: argparse.Namespace, out: TextIO) -> int:
    table = _settings(args).key_name_source().fetch()
    for name, code in sorted(table.items(), key=lambda item: (item[1], item[0])):
        if args.grep and args.grep not in name:
            continue
        out.write(f"{code:>4} {name}\n")
    return EXIT_OK


def _run_inspect(args: argparse.Namespace) -> int:
    from keyspec.adapters.textual.app import run_inspector

    run_inspector(_read_spec(args.spec, False), _settings(args))
    return EXIT_OK


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    args = _build_parser().parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    try:
        if args.command == "check":
            return _run_check(args, out, err)
        if args.command == "resolve":
            return _run_resolve(args, out)
        if args.command == "keys":
            return _run_keys(args, out)
        return _run_inspect(args)
    except (
        KeyNameSourceError,
        SpecFormatError,
        TemplateError,
        InvalidModifierError,
        OSError,
    ) as exc:
        err.write(f"keyspec: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
