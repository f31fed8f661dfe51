"""Depth-first reference evaluator for license tree streams.

The evaluator computes both aggregates directly from the stream without
materialising any nodes.  It relies on native recursion, so it serves as the
cross-check for :mod:`license_tree.tree_builder` rather than the production
path for arbitrarily deep trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .node import referenced_value
from .token_stream import HEADER_LENGTH, IntegerStream

__all__ = ["RegionSummary", "evaluate", "metadata_sum", "root_value"]


@dataclass(frozen=True)
class RegionSummary:
    """Aggregates for one node region of the stream."""

    consumed: int
    metadata_sum: int
    value: int


def evaluate(stream: IntegerStream, start_index: int = 0) -> RegionSummary:
    """Evaluate the node region starting at *start_index*.

    Raises:
        TruncatedInputError: when a header or metadata span runs past the end
            of *stream*.
    """

    child_count, meta_count = stream.header_at(start_index)
    cursor = start_index + HEADER_LENGTH

    if child_count == 0:
        metadata = stream.read(cursor, meta_count)
        total = sum(metadata)
        return RegionSummary(HEADER_LENGTH + meta_count, total, total)

    descendant_sum = 0
    child_values: List[int] = []
    for _ in range(child_count):
        child = evaluate(stream, cursor)
        cursor += child.consumed
        descendant_sum += child.metadata_sum
        child_values.append(child.value)

    metadata = stream.read(cursor, meta_count)
    return RegionSummary(
        consumed=cursor + meta_count - start_index,
        metadata_sum=descendant_sum + sum(metadata),
        value=referenced_value(metadata, child_values),
    )


def metadata_sum(stream: IntegerStream) -> int:
    """Return the sum of every metadata entry in the tree rooted at index 0."""

    return evaluate(stream).metadata_sum


def root_value(stream: IntegerStream) -> int:
    """Return the value of the root node at index 0."""

    return evaluate(stream).value
