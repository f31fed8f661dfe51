from __future__ import annotations

from rich.console import Console
from rich.tree import Tree

from license_tree.render import describe_node, render_tree, to_rich_tree
from license_tree.token_stream import parse_stream
from license_tree.tree_builder import build_tree

CANONICAL = "2 3 0 3 10 11 12 1 1 0 1 99 2 1 1 2"


def test_render_tree_indents_children_in_stream_order() -> None:
    root = build_tree(parse_stream(CANONICAL)).root
    assert render_tree(root) == "\n".join(
        [
            "[meta=1 1 2] sum=138 value=66",
            "  [meta=10 11 12] sum=33 value=33",
            "  [meta=2] sum=101 value=0",
            "    [meta=99] sum=99 value=99",
        ]
    )


def test_render_tree_empty() -> None:
    assert render_tree(None) == "<empty>"


def test_describe_node_without_metadata() -> None:
    root = build_tree(parse_stream("0 0")).root
    assert describe_node(root) == "[meta=-] sum=0 value=0"


def test_to_rich_tree_mirrors_structure() -> None:
    root = build_tree(parse_stream(CANONICAL)).root
    tree = to_rich_tree(root)
    assert isinstance(tree, Tree)
    assert len(tree.children) == 2
    assert len(tree.children[1].children) == 1

    console = Console(width=80, record=True, color_system=None)
    console.print(tree)
    text = console.export_text()
    assert "license [meta=1 1 2] sum=138 value=66" in text
    assert "[meta=99] sum=99 value=99" in text
