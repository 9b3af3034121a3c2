"""Command line driver that writes Soufflé declarations for a tree-sitter grammar."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from .souffle import GenConfig, GenError, gen


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Soufflé types and relations from tree-sitter grammars"
    )
    parser.add_argument(
        "--printsize",
        action="store_true",
        help="Emit .printsize directives for each AST relation",
    )
    parser.add_argument("-o", "--output", default=None, help="Output file")
    parser.add_argument(
        "-p", "--prefix", default=None, help="Prefix for generated declarations"
    )
    parser.add_argument(
        "node_types",
        nargs="?",
        default="-",
        metavar="NODE_TYPES",
        help="Path of node-types.json; read from stdin if omitted or '-'",
    )
    return parser


def _read_node_types(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the generator; return the process exit status."""
    args = _build_parser().parse_args(argv)
    config = GenConfig(printsize=args.printsize, prefix=args.prefix)
    try:
        node_types = _read_node_types(args.node_types)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: Failed to read file {args.node_types}: {exc}", file=sys.stderr)
        return 1
    try:
        if args.output is None:
            gen(config, sys.stdout, node_types)
        else:
            try:
                handle = open(args.output, "w", encoding="utf-8")
            except OSError as exc:
                print(
                    f"Error: Failed to write to file {args.output}: {exc}",
                    file=sys.stderr,
                )
                return 1
            with handle:
                gen(config, handle, node_types)
    except GenError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())