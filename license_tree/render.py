"""Text and ``rich`` renderings of decoded license trees."""

from __future__ import annotations

from typing import List, Tuple

from rich.text import Text
from rich.tree import Tree

from .node import Node

__all__ = ["describe_node", "render_tree", "to_rich_tree"]


def describe_node(node: Node) -> str:
    """Return a one-line description of *node*'s metadata and aggregates."""

    metadata = " ".join(str(entry) for entry in node.metadata) or "-"
    return f"[meta={metadata}] sum={node.metadata_sum} value={node.value}"


def render_tree(root: Node | None) -> str:
    """Render *root* with two spaces of indentation per level.

    Children appear in stream order beneath their parent.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    stack: List[Tuple[Node, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        lines.append("  " * level + describe_node(node))
        stack.extend((child, level + 1) for child in reversed(node.children))
    return "\n".join(lines)


def to_rich_tree(root: Node, *, label: str = "license") -> Tree:
    """Build a :class:`rich.tree.Tree` mirroring *root* for console output."""

    # Text labels keep the bracketed metadata from being parsed as markup.
    tree = Tree(Text(f"{label} {describe_node(root)}"))
    pending: List[Tuple[Node, Tree]] = [(root, tree)]
    while pending:
        node, branch = pending.pop()
        for child in node.children:
            pending.append((child, branch.add(Text(describe_node(child)))))
    return tree
