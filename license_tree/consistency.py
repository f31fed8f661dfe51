"""Cross-validation of the recursive and iterative license tree strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from .errors import AggregateMismatchError, DecodeIssue
from .node import Node
from .recursive_evaluator import RegionSummary, evaluate
from .token_stream import IntegerStream
from .tree_builder import BuildResult, build_tree

logger = logging.getLogger(__name__)

__all__ = ["DecodeReport", "cross_validate"]


@dataclass(frozen=True)
class DecodeReport:
    """Agreed aggregates from both strategies plus the materialised tree.

    ``recursive`` is ``None`` when the tree is too deep for the recursive
    evaluator; a ``recursive_depth_exceeded`` issue is recorded instead.
    """

    build: BuildResult
    recursive: Optional[RegionSummary]
    issues: tuple[DecodeIssue, ...] = field(default_factory=tuple)

    @property
    def root(self) -> Node:
        return self.build.root

    @property
    def metadata_sum(self) -> int:
        return self.build.metadata_sum

    @property
    def value(self) -> int:
        return self.build.value

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def summary_lines(self) -> List[str]:
        """Return the per-strategy result lines printed by the CLI."""

        if self.recursive is None:
            recursive_sum = recursive_value = "skipped (tree too deep)"
        else:
            recursive_sum = str(self.recursive.metadata_sum)
            recursive_value = str(self.recursive.value)
        return [
            f"Part 1 (Stack):     {self.build.metadata_sum}",
            f"Part 1 (Recursive): {recursive_sum}",
            f"Part 2 (Stack):     {self.build.value}",
            f"Part 2 (Recursive): {recursive_value}",
        ]


def cross_validate(stream: IntegerStream, *, strict: bool = False) -> DecodeReport:
    """Run both strategies over *stream* and require identical aggregates.

    The iterative builder always runs.  When the recursive evaluator exceeds
    the interpreter's recursion limit the builder's result is returned with a
    ``recursive_depth_exceeded`` issue.

    Raises
    ------
    AggregateMismatchError
        When the strategies disagree on the metadata sum, the value or the
        length of the root region.
    LicenseTreeError
        Propagated from either strategy when the stream is malformed.
    """

    build = build_tree(stream, strict=strict)
    try:
        recursive = evaluate(stream)
    except RecursionError:
        issue = DecodeIssue(
            code="recursive_depth_exceeded",
            message="Tree is too deep for the recursive evaluator; cross-check skipped",
        )
        logger.warning("%s", issue.message)
        return DecodeReport(build=build, recursive=None, issues=build.issues + (issue,))

    mismatches = [
        f"{label}: stack={stacked} recursive={recursed}"
        for label, stacked, recursed in (
            ("metadata_sum", build.metadata_sum, recursive.metadata_sum),
            ("value", build.value, recursive.value),
            ("consumed", build.consumed, recursive.consumed),
        )
        if stacked != recursed
    ]
    if mismatches:
        raise AggregateMismatchError(
            "License tree strategies produced divergent results: " + "; ".join(mismatches)
        )

    logger.debug(
        "Strategies agree: metadata_sum=%d value=%d", build.metadata_sum, build.value
    )
    return DecodeReport(build=build, recursive=recursive, issues=build.issues)
