"""Immutable license tree nodes with precomputed aggregates.

Nodes are created bottom-up: a ``Node`` can only be constructed once all of its
children exist, so the aggregates are derived in ``__post_init__`` and never
change afterwards.  Every traversal helper walks the tree with an explicit
stack so arbitrarily deep trees never exhaust the interpreter's call stack.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Tuple

from .token_stream import HEADER_LENGTH

__all__ = ["Node", "referenced_value"]


def referenced_value(metadata: Sequence[int], child_values: Sequence[int]) -> int:
    """Return the value of a node given its metadata and its children's values.

    A node without children treats its metadata as plain payload.  Otherwise
    every entry ``m`` with ``1 <= m <= len(child_values)`` selects the ``m``-th
    child (1-based); other entries contribute nothing.
    """

    if not child_values:
        return sum(metadata)
    count = len(child_values)
    return sum(child_values[entry - 1] for entry in metadata if 1 <= entry <= count)


@dataclass(frozen=True, slots=True)
class Node:
    """A decoded license tree node."""

    metadata: Tuple[int, ...]
    children: Tuple["Node", ...] = field(default=(), repr=False)
    metadata_sum: int = field(init=False)
    value: int = field(init=False)
    region_length: int = field(init=False)

    def __post_init__(self) -> None:
        # Accept any sequence from callers while storing tuples.
        object.__setattr__(self, "metadata", tuple(self.metadata))
        object.__setattr__(self, "children", tuple(self.children))
        own_sum = sum(self.metadata)
        object.__setattr__(
            self,
            "metadata_sum",
            own_sum + sum(child.metadata_sum for child in self.children),
        )
        object.__setattr__(
            self,
            "value",
            referenced_value(self.metadata, [child.value for child in self.children]),
        )
        object.__setattr__(
            self,
            "region_length",
            HEADER_LENGTH
            + sum(child.region_length for child in self.children)
            + len(self.metadata),
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield every node of the subtree in pre-order."""

        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def node_count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Return the number of levels in the subtree (a leaf has depth 1)."""

        deepest = 0
        stack: List[Tuple[Node, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def encode(self) -> List[int]:
        """Re-emit the subtree in its flat ``[nchild, nmeta, child*, meta*]`` form."""

        output: List[int] = []
        # Entries are either a node still to open or the metadata closing a node.
        stack: List[Node | Tuple[int, ...]] = [self]
        while stack:
            item = stack.pop()
            if isinstance(item, tuple):
                output.extend(item)
                continue
            output.extend((len(item.children), len(item.metadata)))
            stack.append(item.metadata)
            stack.extend(reversed(item.children))
        return output

    @classmethod
    def leaf(cls, metadata: Iterable[int]) -> "Node":
        return cls(tuple(metadata))
