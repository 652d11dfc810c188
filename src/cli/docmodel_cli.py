# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line interface for building module documentation records."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from docmodel.comment import CommentParser, CommentRecord
from docmodel.fileset import collect_module_files
from docmodel.model import ModuleError, ModuleRecord
from docmodel.module_parser import ModuleParser
from docmodel.parsers import DoxCommandParser, DoxJsonParser
from docmodel.parsers.dox import DEFAULT_DOX_COMMAND
from docmodel.processor import ProcessorFactory, load_processor_factory

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES: dict[str, str] = {"dox": ".js", "dox-json": ".json"}


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="docmodel")
    subparsers = parser.add_subparsers(dest="command", required=True)
    parse_parser = subparsers.add_parser("parse")
    parse_parser.add_argument("--path", required=True, help="Root path to document.")
    parse_parser.add_argument(
        "--parser",
        choices=tuple(DEFAULT_SUFFIXES),
        default="dox",
        help="Comment parser: run dox on sources, or read dox JSON dumps.",
    )
    parse_parser.add_argument(
        "--dox-command",
        default=DEFAULT_DOX_COMMAND,
        help="Command reading source on stdin and printing dox JSON.",
    )
    parse_parser.add_argument(
        "--suffix",
        action="append",
        default=None,
        help="Module file suffix; repeatable. Defaults to the parser's suffix.",
    )
    parse_parser.add_argument(
        "--processor",
        action="append",
        default=[],
        help="Processor name or module:attribute reference; repeatable.",
    )
    parse_parser.add_argument(
        "--workers",
        type=int,
        default=10,
        help="Maximum number of modules parsed concurrently.",
    )
    parse_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    parse_parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    parse_parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if getattr(args, "verbose", False):
        logging.getLogger().setLevel(logging.DEBUG)
    if args.command == "parse":
        return _run_parse(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_parse(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run parse command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    root_path = Path(args.path)
    if not root_path.is_dir():
        logger.warning(f"Path is not a directory (path={root_path})")
        stderr.write(f"Path is not a directory: {root_path}\n")
        return 2
    if args.workers <= 0:
        logger.warning(f"Invalid worker count (workers={args.workers})")
        stderr.write("workers must be > 0\n")
        return 2

    try:
        comment_parser = build_comment_parser(args.parser, args.dox_command)
        factories = [load_processor_factory(ref) for ref in args.processor]
    except ValueError as exc:
        logger.warning(f"Invalid parser configuration (error={exc})")
        stderr.write(f"Invalid configuration: {exc}\n")
        return 2

    suffixes = tuple(args.suffix or [DEFAULT_SUFFIXES[args.parser]])
    try:
        files = collect_module_files(root_path, suffixes=suffixes)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to collect module files (path={root_path} error={exc})")
        stderr.write(f"Failed to collect module files: {root_path}\n")
        return 2

    module_parser = ModuleParser(
        comment_parser=comment_parser,
        processors=factories,
        max_workers=args.workers,
    )
    modules, errors = module_parser.parse_all(files)
    _write_errors(errors=errors, stderr=stderr)
    if args.format == "json":
        payload = json.dumps(_json_payload(modules, errors), indent=2, sort_keys=True)
        if args.output:
            output_path = Path(args.output)
            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(payload, encoding="utf-8")
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            console = Console(
                file=stdout, force_terminal=False, color_system="truecolor"
            )
            console.print(payload, markup=False, highlight=False, soft_wrap=True)
    else:
        _write_table(modules=modules, stdout=stdout)
    return 0


def build_comment_parser(name: str, dox_command: str) -> CommentParser:
    """Create the configured comment parser.

    Args:
        name: Parser name, ``dox`` or ``dox-json``.
        dox_command: Command line used by the ``dox`` parser.

    Returns:
        Configured comment parser.

    Raises:
        ValueError: If the parser name is unknown or the command is empty.
    """
    if name == "dox":
        return DoxCommandParser(command=dox_command)
    if name == "dox-json":
        return DoxJsonParser()
    raise ValueError(f"Unsupported comment parser: {name}")


def _json_payload(
    modules: list[ModuleRecord], errors: list[ModuleError]
) -> dict[str, object]:
    return {
        "modules": [asdict(module) for module in modules],
        "errors": [asdict(error) for error in errors],
    }


def _write_errors(errors: list[ModuleError], stderr: TextIO) -> None:
    """Write module errors to stderr.

    Args:
        errors: Modules that could not be read.
        stderr: Standard error stream.
    """
    for error in errors:
        stderr.write(f"module_error: {error}\n")


def _write_table(modules: list[ModuleRecord], stdout: TextIO) -> None:
    """Write one member table per module.

    Args:
        modules: Finished module records.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    for module in modules:
        title = f"{module.name} -> {module.path}"
        if module.is_deprecated:
            title = f"{title} (deprecated)"
        console.rule(title, style=Style(color="cyan"), characters="-")
        table = Table(show_header=True, show_lines=False, expand=True)
        table.add_column("kind", ratio=1, overflow="fold")
        table.add_column("owner", ratio=2, overflow="fold")
        table.add_column("name", ratio=2, overflow="fold")
        table.add_column("summary", ratio=5, overflow="fold")
        rows: list[tuple[str, str, CommentRecord]] = []
        rows.extend(("variable", "", member) for member in module.variables)
        rows.extend(("function", "", member) for member in module.functions)
        for clazz in module.classes:
            owner = clazz.constructor.name
            rows.append(("class", "", clazz.constructor))
            rows.extend(("property", owner, member) for member in clazz.properties)
            rows.extend(("method", owner, member) for member in clazz.methods)
        for mixin in module.mixins:
            owner = mixin.declaration.name
            rows.append(("mixin", "", mixin.declaration))
            rows.extend(("property", owner, member) for member in mixin.properties)
            rows.extend(("method", owner, member) for member in mixin.methods)
        for kind, owner, member in rows:
            table.add_row(kind, owner, member.name, member.description.summary)
        console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
