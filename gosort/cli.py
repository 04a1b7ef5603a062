"""CLI entrypoint for gosort."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import FormatterConfig, SortConfig, load_config
from .errors import ConfigError, FileSortError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gosort",
        description="Reorder top-level Go declarations into a canonical, repeatable order.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Go file or directory to sort (defaults to current directory).",
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Recurse into subdirectories (default: on).",
    )
    parser.add_argument(
        "--tests",
        dest="include_tests",
        action="store_const",
        const=True,
        default=None,
        help="Include *_test.go files.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-w",
        "--write",
        dest="write",
        action="store_const",
        const=True,
        default=None,
        help="Write results back to the files (default).",
    )
    mode.add_argument(
        "-n",
        "--dry-run",
        dest="write",
        action="store_const",
        const=False,
        help="Report files that would change without modifying them.",
    )
    parser.add_argument(
        "--keep-going",
        dest="continue_on_error",
        action="store_const",
        const=True,
        default=None,
        help="Continue with the remaining files when one fails.",
    )
    parser.add_argument(
        "--no-format",
        action="store_true",
        help="Skip gofmt; only check that the reordered source still parses.",
    )
    parser.add_argument(
        "--diff",
        action="store_true",
        help="Print a unified diff for every file that changes.",
    )
    return parser


def _apply_overrides(config: SortConfig, args: argparse.Namespace) -> SortConfig:
    overrides: dict[str, object] = {}
    for key in ("recursive", "include_tests", "write", "continue_on_error"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    if getattr(args, "no_format", False):
        overrides["formatter"] = FormatterConfig(command=[])
    return replace(config, **overrides)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gosort."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = _apply_overrides(load_config(Path(args.path)), args)
    except ConfigError as exc:
        parser.exit(1, f"gosort: {exc}\n")

    try:
        result = Orchestrator().run(config)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except FileSortError as exc:
        parser.exit(1, f"{exc}\n")

    for outcome in result.changed:
        rel_path = _relativize(outcome.path)
        print(f"sorted {rel_path}" if outcome.written else f"would sort {rel_path}")
        if args.diff:
            print(outcome.diff(), end="")

    if result.errors:
        for error in result.errors:
            print(error, file=sys.stderr)
        parser.exit(1, f"{len(result.errors)} file(s) failed\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
