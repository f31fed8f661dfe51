from __future__ import annotations

import logging

import pytest

from license_tree.errors import (
    IncompleteTreeError,
    LicenseTreeError,
    TrailingDataError,
    TruncatedInputError,
)
from license_tree.node import Node
from license_tree.token_stream import IntegerStream, parse_stream
from license_tree.tree_builder import BuildResult, WorkFrame, build_tree

CANONICAL = "2 3 0 3 10 11 12 1 1 0 1 99 2 1 1 2"


def chain_stream(depth: int) -> IntegerStream:
    """Return a stream nesting ``depth`` nodes, each with a single child."""

    values = [1, 1] * (depth - 1) + [0, 1, 7] + [1] * (depth - 1)
    return IntegerStream.from_values(values)


def test_build_tree_canonical_license() -> None:
    result = build_tree(parse_stream(CANONICAL))
    assert isinstance(result, BuildResult)
    assert result.metadata_sum == 138
    assert result.value == 66
    assert result.consumed == 16
    assert result.is_clean
    assert result.root.metadata == (1, 1, 2)
    assert [child.metadata for child in result.root.children] == [(10, 11, 12), (2,)]
    assert result.root.children[1].children[0].metadata == (99,)


def test_build_tree_single_leaf() -> None:
    result = build_tree(parse_stream("0 3 1 2 3"))
    assert result.root.is_leaf
    assert result.value == result.metadata_sum == 6


def test_build_tree_handles_trees_deeper_than_the_recursion_limit() -> None:
    depth = 5000
    stream = chain_stream(depth)
    result = build_tree(stream)
    assert result.consumed == len(stream)
    assert result.metadata_sum == 7 + (depth - 1)
    assert result.value == 7
    assert result.root.depth() == depth
    assert result.root.encode() == list(stream)


def test_trailing_data_is_reported_but_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="license_tree.tree_builder"):
        result = build_tree(parse_stream("0 1 5 9"))
    assert result.value == result.metadata_sum == 5
    assert result.consumed == 3
    assert not result.is_clean
    (issue,) = result.issues
    assert issue.code == "trailing_data"
    assert issue.positions == (3,)
    assert issue.to_dict()["positions"] == [3]
    assert "follow the root region" in caplog.text


def test_strict_mode_rejects_trailing_data() -> None:
    with pytest.raises(TrailingDataError) as excinfo:
        build_tree(parse_stream("0 1 5 9 9"), strict=True)
    assert excinfo.value.consumed == 3
    assert excinfo.value.trailing == 2


@pytest.mark.parametrize("text", ["", "7", "1 1 0 1", "1 2 0 1 5 1", "2 1 1 1 0"])
def test_build_tree_rejects_truncated_streams(text: str) -> None:
    with pytest.raises(TruncatedInputError):
        build_tree(parse_stream(text))


@pytest.mark.parametrize(
    "text,open_frames",
    [
        ("1 0", 1),
        ("2 1 0 1 5", 1),
        ("1 1 1 1", 2),
    ],
)
def test_build_tree_reports_incomplete_tree(text: str, open_frames: int) -> None:
    with pytest.raises(IncompleteTreeError) as excinfo:
        build_tree(parse_stream(text))
    assert excinfo.value.open_frames == open_frames


def test_work_frame_attach_advances_region() -> None:
    frame = WorkFrame(region_start=2, remaining_children=1, meta_count=1)
    frame.attach(Node.leaf((1, 2)))
    assert frame.region_start == 6
    assert frame.remaining_children == 0
    with pytest.raises(LicenseTreeError):
        frame.attach(Node.leaf(()))
