"""Command line driver that turns source files into CSV fact tables."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path

from .consumer import SyntaxTree
from .facts import facts
from .wide import WideCsvConsumer


class OnParseError(str, Enum):
    """What to do when a parsed file contains syntax errors."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


class ParseErrorAbort(Exception):
    """Raised when a parse error is found and the policy is ``error``."""


class _FatalError(Exception):
    pass


def handle_parse_errors(path: str, tree: SyntaxTree, on_parse_error: OnParseError) -> None:
    """Report parse errors in ``tree`` according to ``on_parse_error``."""
    if on_parse_error is OnParseError.IGNORE or not tree.root_node.has_error:
        return
    if on_parse_error is OnParseError.WARN:
        print(f"[warn] Parse error in {path}", file=sys.stderr)
        return
    print(f"[error] Parse error in {path}", file=sys.stderr)
    raise ParseErrorAbort(path)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate Datalog facts from source code")
    parser.add_argument(
        "--on-parse-error",
        type=OnParseError,
        choices=list(OnParseError),
        default=OnParseError.WARN,
        metavar="CHOICE",
        help="Behavior on parse errors (ignore, warn, error; default: warn)",
    )
    parser.add_argument(
        "source_files",
        nargs="*",
        metavar="SRC_FILE",
        help="Source code to consume; if empty, parse from stdin",
    )
    return parser


def _read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise _FatalError(f"Failed to read file {path}: {exc}") from exc


def run(parse: Callable[[str], SyntaxTree], argv: Sequence[str] | None = None) -> int:
    """Parse each source file (or stdin) with ``parse`` and write
    ``node.csv``, ``field.csv`` and ``child.csv`` in the current directory.

    Returns the process exit status.
    """
    args = _build_parser().parse_args(argv)
    try:
        with WideCsvConsumer(Path("node.csv"), Path("field.csv"), Path("child.csv")) as fc:
            inputs: list[tuple[str, str]] = []
            if not args.source_files:
                inputs.append(("<stdin>", sys.stdin.read()))
            for path, content in inputs:
                _consume(fc, parse, path, content, args.on_parse_error)
            for path in args.source_files:
                _consume(fc, parse, path, _read_file(path), args.on_parse_error)
    except ParseErrorAbort:
        return 1
    except _FatalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _consume(fc, parse, path: str, content: str, on_parse_error: OnParseError) -> None:
    tree = parse(content)
    handle_parse_errors(path, tree, on_parse_error)
    facts(fc, content.encode("utf-8"), tree)