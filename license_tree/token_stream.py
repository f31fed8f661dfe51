"""Whitespace-delimited integer streams backing the license tree decoders."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable, Iterator

from .errors import MalformedNumberError, TruncatedInputError

logger = logging.getLogger(__name__)

MAX_VALUE = 255
HEADER_LENGTH = 2

Header = tuple[int, int]

__all__ = [
    "HEADER_LENGTH",
    "Header",
    "IntegerStream",
    "MAX_VALUE",
    "load_stream",
    "parse_stream",
]


def _parse_token(token: str, position: int) -> int:
    if not (token.isascii() and token.isdigit()):
        raise MalformedNumberError(token, position, "not a non-negative decimal integer")
    number = int(token)
    if number > MAX_VALUE:
        raise MalformedNumberError(token, position, f"exceeds {MAX_VALUE}")
    return number


@dataclass(frozen=True, slots=True)
class IntegerStream:
    """Immutable, 0-indexed sequence of integers in the ``0..255`` range."""

    values: tuple[int, ...]

    @classmethod
    def from_values(cls, values: Iterable[int]) -> "IntegerStream":
        """Validate in-memory *values* and wrap them in a stream."""

        validated: list[int] = []
        for position, item in enumerate(values):
            if not isinstance(item, int) or isinstance(item, bool):
                raise MalformedNumberError(repr(item), position, "not an integer")
            if item < 0 or item > MAX_VALUE:
                raise MalformedNumberError(str(item), position, f"outside 0..{MAX_VALUE}")
            validated.append(item)
        return cls(tuple(validated))

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        return self.values[index]

    def read(self, start: int, count: int) -> tuple[int, ...]:
        """Return ``count`` integers from ``start`` or raise when the span is short."""

        end = start + count
        if start < 0 or end > len(self.values):
            raise TruncatedInputError(start, count, len(self.values))
        return self.values[start:end]

    def header_at(self, index: int) -> Header:
        """Return the ``(child_count, meta_count)`` pair starting at *index*."""

        child_count, meta_count = self.read(index, HEADER_LENGTH)
        return child_count, meta_count


def parse_stream(text: str) -> IntegerStream:
    """Split *text* on whitespace and parse every token as an 8-bit integer.

    Empty input produces an empty stream; decoders reject it later because no
    header is available.
    """

    numbers = tuple(_parse_token(token, position) for position, token in enumerate(text.split()))
    logger.debug("Parsed %d integer(s) from %d character(s)", len(numbers), len(text))
    return IntegerStream(numbers)


def load_stream(path: Path) -> IntegerStream:
    """Read a UTF-8 license file from *path* and parse its contents."""

    return parse_stream(path.read_text(encoding="utf-8"))
