"""Command line report for license tree streams.

The script reads a whitespace-delimited license file, decodes it with both the
iterative tree builder and the recursive reference evaluator, and prints the
metadata sum (part 1) and root value (part 2) reported by each strategy.  The
two strategies are cross-validated before anything is printed, so a divergent
result surfaces as an error instead of as mismatched output lines.

When no input path is supplied the script reads ``input/license.txt``; pass
``--sample`` to decode the built-in sample license instead.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Sequence

from rich.console import Console

from license_tree import (
    AggregateMismatchError,
    IntegerStream,
    LicenseTreeError,
    cross_validate,
    load_stream,
    parse_stream,
    to_rich_tree,
)

logger = logging.getLogger(__name__)

DEFAULT_INPUT_PATH = Path("input/license.txt")
SAMPLE_LICENSE = "2 3 0 3 10 11 12 1 1 0 1 99 2 1 1 2"


def _read_input(source: str, *, sample: bool) -> IntegerStream:
    """Return the stream named by *source* (a path or ``-``) or the sample."""

    if sample:
        logger.info("Decoding the built-in sample license")
        return parse_stream(SAMPLE_LICENSE)
    if source == "-":
        return parse_stream(sys.stdin.read())
    return load_stream(Path(source))


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point printing both strategies' aggregates."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "input",
        nargs="?",
        default=str(DEFAULT_INPUT_PATH),
        help=f"License file to decode; use '-' for stdin. Defaults to {DEFAULT_INPUT_PATH}.",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Decode the built-in sample license instead of reading input.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when integers remain after the root node instead of warning.",
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        help="Print the decoded tree after the aggregate lines.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        stream = _read_input(args.input, sample=args.sample)
        report = cross_validate(stream, strict=args.strict)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read license input: %s", exc)
        return 1
    except (LicenseTreeError, AggregateMismatchError) as exc:
        logger.error("Failed to decode license tree: %s", exc)
        return 1

    for line in report.summary_lines():
        print(line)

    if args.show_tree:
        Console(file=sys.stdout, highlight=False).print(to_rich_tree(report.root))

    return 0


__all__ = ["DEFAULT_INPUT_PATH", "SAMPLE_LICENSE", "main"]


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
