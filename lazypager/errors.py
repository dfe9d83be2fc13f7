"""Exception taxonomy for the pager core.

``EncodingError`` is fatal and surfaces before the interactive session starts.
``IndexOutOfRange`` marks a broken internal invariant, never user input.
``NoMatches`` is raised by search navigation and absorbed by the dispatcher.
"""

from __future__ import annotations


class PagerError(Exception):
    """Base class for every error raised by lazypager."""


class EncodingError(PagerError, ValueError):
    """Input bytes are not valid UTF-8."""

    def __init__(self, offset: int, reason: str = "invalid utf-8") -> None:
        super().__init__(f"input is not valid UTF-8 at byte {offset}: {reason}")
        self.offset = offset
        self.reason = reason


class IndexOutOfRange(PagerError, IndexError):
    """A line index outside ``[0, line_count)`` was requested."""

    def __init__(self, index: int, line_count: int) -> None:
        super().__init__(f"line index {index} out of range for {line_count} lines")
        self.index = index
        self.line_count = line_count


class NoMatches(PagerError, LookupError):
    """Search navigation was requested while the match sequence is empty."""
