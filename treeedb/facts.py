"""Walk a syntax tree and feed its facts to a consumer."""

from __future__ import annotations

from .consumer import FactConsumer, SyntaxNode, SyntaxTree


def facts(fc: FactConsumer, source: bytes, tree: SyntaxTree) -> None:
    """Emit node, field and child facts for every named node reachable from the root.

    Nodes are visited depth first using an explicit stack, so the last named
    child of a node is visited first. Exceptions raised by the consumer stop
    the walk and propagate.
    """
    stack: list[SyntaxNode] = [tree.root_node]
    while stack:
        node = stack.pop()
        fc.node(node, source)
        for child in node.children:
            if child.field_name is not None:
                fc.field(node, child.field_name, child)
        for child in node.named_children:
            fc.child(node, child)
            stack.append(child)