"""Consumer writing tree facts as three wide CSV tables."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import IO

from .consumer import FactConsumer, SyntaxNode


def _node_text(node: SyntaxNode, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8")


class WideCsvConsumer(FactConsumer):
    """Writes ``node``, ``field`` and ``child`` facts to separate CSV files."""

    def __init__(self, node_file_path, field_file_path, child_file_path) -> None:
        self._files: list[IO[str]] = []
        try:
            self._node = self._open(node_file_path)
            self._field = self._open(field_file_path)
            self._child = self._open(child_file_path)
        except BaseException:
            self.close()
            raise

    def _open(self, path) -> "csv._writer":
        handle = open(Path(path), "w", newline="", encoding="utf-8")
        self._files.append(handle)
        return csv.writer(handle, lineterminator="\n")

    def field(self, parent: SyntaxNode, name: str, child: SyntaxNode) -> None:
        self._field.writerow([str(parent.id), name, str(child.id)])

    def child(self, parent: SyntaxNode, child: SyntaxNode) -> None:
        self._child.writerow([str(parent.id), str(child.id)])

    def node(self, node: SyntaxNode, source: bytes) -> None:
        """Write one node row; raise ``UnicodeDecodeError`` if the source is not UTF-8."""
        text = _node_text(node, source).replace("\n", "\\n")
        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        flags = [
            str(bool(value)).lower()
            for value in (node.is_named, node.is_extra, node.is_error, node.is_missing)
        ]
        self._node.writerow(
            [
                str(node.id),
                node.kind,
                *flags,
                str(node.start_byte),
                str(node.end_byte),
                str(start_row),
                str(start_col),
                str(end_row),
                str(end_col),
                text,
            ]
        )

    def close(self) -> None:
        for handle in self._files:
            handle.close()
        self._files = []

    def __enter__(self) -> "WideCsvConsumer":
        return self

    def __exit__(self, *args) -> None:
        self.close()