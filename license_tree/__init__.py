"""License tree decoding toolkit."""

from .consistency import DecodeReport, cross_validate
from .errors import (
    AggregateMismatchError,
    DecodeIssue,
    IncompleteTreeError,
    LicenseTreeError,
    MalformedNumberError,
    TrailingDataError,
    TruncatedInputError,
)
from .node import Node, referenced_value
from .recursive_evaluator import RegionSummary, evaluate, metadata_sum, root_value
from .render import describe_node, render_tree, to_rich_tree
from .token_stream import HEADER_LENGTH, MAX_VALUE, IntegerStream, load_stream, parse_stream
from .tree_builder import BuildResult, WorkFrame, build_tree

__all__ = [
    "AggregateMismatchError",
    "BuildResult",
    "DecodeIssue",
    "DecodeReport",
    "HEADER_LENGTH",
    "IncompleteTreeError",
    "IntegerStream",
    "LicenseTreeError",
    "MAX_VALUE",
    "MalformedNumberError",
    "Node",
    "RegionSummary",
    "TrailingDataError",
    "TruncatedInputError",
    "WorkFrame",
    "build_tree",
    "cross_validate",
    "describe_node",
    "evaluate",
    "load_stream",
    "metadata_sum",
    "parse_stream",
    "referenced_value",
    "render_tree",
    "root_value",
    "to_rich_tree",
]
