"""Consumer writing tree facts in a narrow, one-relation-per-attribute layout."""

from __future__ import annotations

import csv
from pathlib import Path

from .consumer import FactConsumer, SyntaxNode


class NarrowCsvConsumer(FactConsumer):
    """Writes node identifiers to ``node_id.csv`` inside ``dir``."""

    def __init__(self, dir) -> None:
        directory = Path(dir)
        directory.mkdir(parents=True, exist_ok=True)
        self._handle = open(directory / "node_id.csv", "w", newline="", encoding="utf-8")
        self._node_id = csv.writer(self._handle, lineterminator="\n")

    def field(self, parent: SyntaxNode, name: str, child: SyntaxNode) -> None:
        return None

    def child(self, parent: SyntaxNode, child: SyntaxNode) -> None:
        return None

    def node(self, node: SyntaxNode, source: bytes) -> None:
        ident = str(node.id)
        self._node_id.writerow([ident, ident])

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> "NarrowCsvConsumer":
        return self

    def __exit__(self, *args) -> None:
        self.close()