"""Syntax tree model and the interface for consumers of tree facts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class SyntaxNode:
    """A node of a concrete syntax tree.

    ``field_name`` is the grammar field under which this node appears in its
    parent, if any.
    """

    id: int
    kind: str
    is_named: bool = True
    is_extra: bool = False
    is_error: bool = False
    is_missing: bool = False
    start_byte: int = 0
    end_byte: int = 0
    start_point: tuple[int, int] = (0, 0)
    end_point: tuple[int, int] = (0, 0)
    field_name: str | None = None
    children: list[SyntaxNode] = field(default_factory=list)

    @property
    def named_children(self) -> list[SyntaxNode]:
        return [child for child in self.children if child.is_named]

    @property
    def has_error(self) -> bool:
        """True if this node or any descendant is an error or missing node."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_error or node.is_missing:
                return True
            stack.extend(node.children)
        return False


@dataclass
class SyntaxTree:
    """A parsed syntax tree."""

    root_node: SyntaxNode


class FactConsumer(ABC):
    """Receives facts about a syntax tree as it is walked."""

    @abstractmethod
    def field(self, parent: SyntaxNode, name: str, child: SyntaxNode) -> None:
        """Record that ``child`` is the ``name`` field of ``parent``."""

    @abstractmethod
    def child(self, parent: SyntaxNode, child: SyntaxNode) -> None:
        """Record that ``child`` is a named child of ``parent``."""

    @abstractmethod
    def node(self, node: SyntaxNode, source: bytes) -> None:
        """Record a node together with the source it was parsed from."""