"""Error kinds raised while decoding license trees.

Every structural or parsing failure derives from :class:`LicenseTreeError` so
callers can surface a single terminal failure.  Conditions that leave the root
result valid (such as trailing integers after the root) are reported through
:class:`DecodeIssue` records instead of exceptions unless strict validation is
requested.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "AggregateMismatchError",
    "DecodeIssue",
    "IncompleteTreeError",
    "LicenseTreeError",
    "MalformedNumberError",
    "TrailingDataError",
    "TruncatedInputError",
]


class LicenseTreeError(ValueError):
    """Base class for license tree decoding failures."""


class MalformedNumberError(LicenseTreeError):
    """Raised when a token is not a decimal integer in the 0-255 range."""

    def __init__(self, token: str, position: int, reason: str) -> None:
        super().__init__(f"Malformed number {token!r} at position {position}: {reason}")
        self.token = token
        self.position = position


class TruncatedInputError(LicenseTreeError):
    """Raised when a header or metadata span runs past the end of the stream."""

    def __init__(self, index: int, needed: int, available: int) -> None:
        super().__init__(
            f"Truncated input: needed {needed} integer(s) at index {index}"
            f" but the stream holds {available}"
        )
        self.index = index
        self.needed = needed
        self.available = available


class IncompleteTreeError(LicenseTreeError):
    """Raised when input is exhausted while nodes still expect children."""

    def __init__(self, open_frames: int, remaining_children: int) -> None:
        super().__init__(
            f"Incomplete tree: input ended with {open_frames} unresolved node(s)"
            f" still expecting {remaining_children} child(ren)"
        )
        self.open_frames = open_frames
        self.remaining_children = remaining_children


class TrailingDataError(LicenseTreeError):
    """Raised in strict mode when integers remain after the root resolves."""

    def __init__(self, consumed: int, trailing: int) -> None:
        super().__init__(
            f"Trailing data: {trailing} integer(s) follow the root region"
            f" ending at index {consumed}"
        )
        self.consumed = consumed
        self.trailing = trailing


class AggregateMismatchError(AssertionError):
    """Raised when the recursive and iterative strategies disagree."""


@dataclass(frozen=True)
class DecodeIssue:
    """A non-fatal condition observed during decoding."""

    code: str
    message: str
    positions: tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "positions": list(self.positions),
        }
