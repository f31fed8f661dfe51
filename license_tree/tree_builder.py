"""Iterative license tree builder.

This is the production decoding path.  It materialises the whole tree with an
explicit stack of :class:`WorkFrame` records, so tree depth is bounded by heap
memory instead of the interpreter's recursion limit.  Frames never copy the
stream; they only hold indices into the shared :class:`IntegerStream`.

Transition rules, applied to the top frame until the root is finalised:

* while the frame still expects children, read the next child's header.  A
  childless header becomes a leaf ``Node`` on the spot; any other header pushes
  a new frame for that child and leaves the parent untouched;
* once a frame expects no more children, its metadata starts at
  ``region_start``.  The frame is popped, turned into a ``Node`` and handed to
  the parent, whose ``region_start`` advances past the child's region.  A frame
  without a parent is the root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional

from .errors import DecodeIssue, IncompleteTreeError, LicenseTreeError, TrailingDataError
from .node import Node
from .token_stream import HEADER_LENGTH, IntegerStream

logger = logging.getLogger(__name__)

__all__ = ["BuildResult", "WorkFrame", "build_tree"]


@dataclass(slots=True)
class WorkFrame:
    """Pending node whose children are still being decoded."""

    region_start: int
    remaining_children: int
    meta_count: int
    children: List[Node] = field(default_factory=list)

    def attach(self, child: Node) -> None:
        """Record a finished child and move past its region."""

        if self.remaining_children <= 0:
            raise LicenseTreeError(
                "WorkFrame received more children than its header declared"
            )
        self.children.append(child)
        self.remaining_children -= 1
        self.region_start += child.region_length


@dataclass(frozen=True)
class BuildResult:
    """Outcome of an iterative build."""

    root: Node
    consumed: int
    issues: tuple[DecodeIssue, ...] = ()

    @property
    def metadata_sum(self) -> int:
        return self.root.metadata_sum

    @property
    def value(self) -> int:
        return self.root.value

    @property
    def is_clean(self) -> bool:
        return not self.issues


def _open_frame(stream: IntegerStream, index: int) -> WorkFrame:
    child_count, meta_count = stream.header_at(index)
    return WorkFrame(
        region_start=index + HEADER_LENGTH,
        remaining_children=child_count,
        meta_count=meta_count,
    )


def _finalize(stream: IntegerStream, frame: WorkFrame) -> Node:
    metadata = stream.read(frame.region_start, frame.meta_count)
    return Node(metadata, tuple(frame.children))


def _trailing_issue(stream: IntegerStream, consumed: int) -> Optional[DecodeIssue]:
    trailing = len(stream) - consumed
    if trailing <= 0:
        return None
    return DecodeIssue(
        code="trailing_data",
        message=f"{trailing} integer(s) follow the root region and were ignored",
        positions=tuple(range(consumed, len(stream))),
    )


def build_tree(stream: IntegerStream, *, strict: bool = False) -> BuildResult:
    """Decode *stream* into a ``Node`` tree without native recursion.

    Parameters
    ----------
    stream:
        The integer stream holding the encoded tree at index 0.
    strict:
        When ``True`` integers left over after the root raise
        :class:`TrailingDataError`.  By default they are reported as a
        ``trailing_data`` issue and the root is still returned.

    Raises
    ------
    TruncatedInputError
        A header or metadata span runs past the end of the stream.
    IncompleteTreeError
        The stream ends exactly where another child header was expected.
    """

    stack: List[WorkFrame] = [_open_frame(stream, 0)]
    max_stack = 1

    while True:
        frame = stack[-1]
        if frame.remaining_children > 0:
            if frame.region_start >= len(stream):
                raise IncompleteTreeError(
                    open_frames=len(stack),
                    remaining_children=sum(item.remaining_children for item in stack),
                )
            child = _open_frame(stream, frame.region_start)
            if child.remaining_children == 0:
                frame.attach(_finalize(stream, child))
            else:
                stack.append(child)
                max_stack = max(max_stack, len(stack))
            continue

        node = _finalize(stream, stack.pop())
        if not stack:
            break
        stack[-1].attach(node)

    consumed = node.region_length
    logger.debug(
        "Built license tree: consumed=%d max_stack=%d metadata_sum=%d value=%d",
        consumed,
        max_stack,
        node.metadata_sum,
        node.value,
    )

    issues: List[DecodeIssue] = []
    issue = _trailing_issue(stream, consumed)
    if issue is not None:
        if strict:
            raise TrailingDataError(consumed, len(stream) - consumed)
        logger.warning("%s", issue.message)
        issues.append(issue)

    return BuildResult(root=node, consumed=consumed, issues=tuple(issues))
