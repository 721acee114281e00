"""CLI entry point for cssvars.

Two subcommands: `inline` rewrites a stylesheet, `vars` only lists what its
:root rules define.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import ENCODING, MAX_WARNINGS_SHOWN


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="cssvars",
        description="Inline :root CSS custom properties into the declarations that use them.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"cssvars {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_inline = sub.add_parser("inline", help="Inline variables and write the resulting CSS")
    p_inline.add_argument("input", help="CSS file to read ('-' for stdin)")
    p_inline.add_argument("--out", "-o", type=Path, default=None, help="Output file (default: stdout)")
    p_inline.add_argument("--report", type=Path, default=None, help="Write a JSON report of the run")
    p_inline.add_argument("--quiet", "-q", action="store_true", help="Do not print a summary")

    p_vars = sub.add_parser("vars", help="List resolved :root variables")
    p_vars.add_argument("input", help="CSS file to read ('-' for stdin)")

    args = parser.parse_args(argv)

    if args.cmd == "inline":
        return _cmd_inline(args)
    if args.cmd == "vars":
        return _cmd_vars(args)

    parser.print_help()
    return 2


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding=ENCODING)


def _cmd_inline(args: Any) -> int:
    from .inline.transform import inline_css_vars, write_report
    from .parse.reader import parse_css

    try:
        css = _read_input(args.input)
        sheet = parse_css(css)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = inline_css_vars(sheet)
    output = sheet.to_css() if result.changed else css

    try:
        if args.out is not None:
            args.out.write_text(output, encoding=ENCODING)
        else:
            sys.stdout.write(output)
        if args.report is not None:
            write_report(result, args.report)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.quiet:
        return 0

    if result.status == "skipped_complex_root":
        print("Skipped: complex :root selector found", file=sys.stderr)
    elif result.status == "skipped_no_root":
        print("Skipped: no :root rule found", file=sys.stderr)
    else:
        print("✓ Variables inlined", file=sys.stderr)
        print(f"  Variables: {len(result.variables)}", file=sys.stderr)
        print(f"  Removed declarations: {len(result.removed)}", file=sys.stderr)
        print(f"  Passes: {result.passes}", file=sys.stderr)

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):", file=sys.stderr)
        for w in result.warnings[:MAX_WARNINGS_SHOWN]:
            print(f"  - {w}", file=sys.stderr)
        if len(result.warnings) > MAX_WARNINGS_SHOWN:
            print(f"  ... and {len(result.warnings) - MAX_WARNINGS_SHOWN} more", file=sys.stderr)

    return 0


def _cmd_vars(args: Any) -> int:
    from .inline.transform import inline_css_vars
    from .parse.reader import parse_css

    try:
        sheet = parse_css(_read_input(args.input))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = inline_css_vars(sheet)
    if result.status == "skipped_complex_root":
        print(result.warnings[0], file=sys.stderr)
        return 0
    if not result.variables:
        print("No :root variables found")
        return 0

    for name, value in result.variables.items():
        print(f"{name}: {value}")
    return 0


if __name__ == "__main__":
    app()
