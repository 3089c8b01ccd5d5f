"""Command-line entry point: ``dialscript FILE [--verbose] [--fix]``."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.text import Text

from dialscript import __version__
from dialscript.output.console import ConsoleReporter
from dialscript.parser.loader import ScriptIOError, ScriptSizeError
from dialscript.reference import EXAMPLE_SCRIPT
from dialscript.service.script_checker import ScriptChecker
from dialscript.settings import Settings

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dialscript",
        description="Validate and auto-fix DialScript (.ds) screenplay files",
    )
    parser.add_argument("file", nargs="?", help="DialScript file to check")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Echo every line with its kind, not just errors")
    parser.add_argument("--fix", action="store_true",
                        help="Apply automatic fixes and write the file back")
    parser.add_argument("--format", choices=["text", "json"], default="text",
                        help="Output format (default: text)")
    parser.add_argument("--example", action="store_true",
                        help="Print an example script and exit")
    parser.add_argument("--version", action="version",
                        version=f"dialscript {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())

    checker = ScriptChecker(settings)
    reporter = ConsoleReporter(classifier=checker.validator.classifier)

    if args.example:
        reporter.print_example(EXAMPLE_SCRIPT)
        return EXIT_OK

    if not args.file:
        parser.error("no input file specified")

    path = Path(args.file)
    errors = Console(stderr=True, highlight=False)

    try:
        if args.fix:
            fix_result = checker.fix_file(path)
            if args.format == "json":
                print(fix_result.model_dump_json(indent=2))
            else:
                reporter.report_fix(fix_result, source=path)
            return EXIT_OK if fix_result.converged else EXIT_ERRORS

        lines = checker.read_file(path)
        result = checker.validate_lines(lines)
        if args.format == "json":
            print(result.model_dump_json(indent=2))
        else:
            reporter.report_validation(result, lines=lines, verbose=args.verbose, source=path)
        return EXIT_OK if result.valid else EXIT_ERRORS
    except (ScriptIOError, ScriptSizeError) as exc:
        errors.print(Text.assemble(("✗ Error: ", "bold red"), str(exc)))
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
