"""Command-line entry point.

Usage:
    kitgen [flags] -type T [directory]
    kitgen [flags] -type T files...   # must be a single package
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from kitgen import __version__
from kitgen.application.services import Generator
from kitgen.domain.config import DEFAULT_MARKER, DEFAULT_SUFFIX, GeneratorConfig
from kitgen.domain.exceptions import FormatError, KitgenError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("kitgen")

PROG = "kitgen"

EXIT_OK = 0
EXIT_ERROR = 1

USAGE = f"""\
  {PROG} [flags] -type T [directory]
  {PROG} [flags] -type T files... # must be a single package"""


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser.

    Flags use single-dash long names (-type, -output, ...).
    """
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=USAGE,
        description="Generate Go code from decorated interface declarations.",
        add_help=False,
    )
    parser.add_argument(
        "-type",
        "--type",
        dest="type_names",
        required=True,
        metavar="T",
        help="comma-separated list of type names; must be set",
    )
    parser.add_argument(
        "-suffix",
        default=DEFAULT_SUFFIX,
        help="output file suffix in <type>_<suffix>.go (default %(default)s)",
    )
    parser.add_argument(
        "-output",
        default=None,
        help='output file name (default "<src dir>/<type>_<suffix>.go", "-" for stdout)',
    )
    parser.add_argument(
        "-templates",
        action="append",
        default=[],
        type=Path,
        metavar="DIR",
        help="extra template directory searched before bundled templates (repeatable)",
    )
    parser.add_argument(
        "-marker",
        default=DEFAULT_MARKER,
        help="decorator comment prefix (default %(default)s)",
    )
    parser.add_argument("-debug", action="store_true", help="trace declaration traversal")
    parser.add_argument("-version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-help", "-h", "--help", action="help", help="show usage")
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        metavar="directory|files",
        help="package directory or files (default: current directory)",
    )
    return parser


def split_type_names(raw: str) -> tuple[str, ...]:
    """Split comma-separated type names, dropping empty entries."""
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def configure_logging(console: Console, *, debug: bool) -> None:
    """Route log records to a rich handler on the given console."""
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=f"{PROG}: %(message)s",
        handlers=[handler],
        force=True,
    )


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    """Run kitgen.

    Args:
        argv: Command-line arguments without program name (default sys.argv[1:])
        console: Console for diagnostics (default: stderr)

    Returns:
        Exit code: 0 success, 1 generation error.
        Usage errors exit with status 2 via argparse.
    """
    args_list = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(args_list)

    type_names = split_type_names(args.type_names)
    if not type_names:
        parser.error("-type must name at least one type")

    console = console or Console(stderr=True)
    configure_logging(console, debug=args.debug)

    try:
        config = GeneratorConfig(
            type_names=type_names,
            marker=args.marker,
            template_dirs=tuple(args.templates),
            suffix=args.suffix,
            output=args.output,
            debug=args.debug,
        )
    except ValueError as e:
        parser.error(str(e))

    generator = Generator(config)
    try:
        source = generator.run(args.paths or [Path(".")], args_list)
    except FormatError as e:
        _report(console, f"invalid Go generated: {e.reason}")
        if config.debug:
            console.print(e.raw, markup=False, highlight=False, soft_wrap=True)
        return EXIT_ERROR
    except KitgenError as e:
        _report(console, str(e))
        return EXIT_ERROR

    if config.writes_stdout:
        sys.stdout.write(source)
        return EXIT_OK

    output_path = generator.output_path
    try:
        output_path.write_text(source, encoding="utf-8")
    except OSError as e:
        _report(console, f"writing output: {e}")
        return EXIT_ERROR

    logger.info("wrote %s", output_path)
    return EXIT_OK


def _report(console: Console, message: str) -> None:
    console.print(f"[bold red]{PROG}:[/bold red] {escape(message)}")
