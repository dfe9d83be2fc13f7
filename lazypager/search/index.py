"""Match computation and cyclic match navigation.

Matching is literal, case-sensitive and leftmost-first with a
non-overlapping advance by match length. Offsets are code points, so a
column counts Unicode scalar values rather than encoded bytes.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass

from ..buffer import LineBuffer
from ..errors import NoMatches

logger = logging.getLogger(__name__)

Position = tuple[int, int]


@dataclass(frozen=True, order=True)
class MatchSpan:
    line: int
    start: int  # inclusive
    end: int  # exclusive

    @property
    def position(self) -> Position:
        return (self.line, self.start)


def find_line_matches(text: str, query: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` column pairs for ``query`` in one line."""
    if not query:
        return []
    out: list[tuple[int, int]] = []
    step = len(query)
    idx = text.find(query)
    while idx != -1:
        out.append((idx, idx + step))
        idx = text.find(query, idx + step)
    return out


def find_matches(buffer: LineBuffer, query: str) -> list[MatchSpan]:
    """Scan every line of ``buffer`` and return spans sorted by position."""
    if not query:
        return []
    spans: list[MatchSpan] = []
    for line_no, text in enumerate(buffer):
        for start, end in find_line_matches(text, query):
            spans.append(MatchSpan(line_no, start, end))
    return spans


class SearchIndex:
    """Cache of match spans for one query plus wrap-around navigation."""

    def __init__(self, buffer: LineBuffer) -> None:
        self.buffer = buffer
        self.query = ""
        self._matches: tuple[MatchSpan, ...] = ()
        self._positions: list[Position] = []

    @property
    def matches(self) -> tuple[MatchSpan, ...]:
        return self._matches

    def __len__(self) -> int:
        return len(self._matches)

    def recompute(self, query: str) -> tuple[MatchSpan, ...]:
        """Index ``query`` against the buffer, reusing the cache when unchanged."""
        if query == self.query:
            return self._matches
        self.load(query, tuple(find_matches(self.buffer, query)))
        logger.debug("indexed %r: %d matches", query, len(self._matches))
        return self._matches

    def load(self, query: str, matches: tuple[MatchSpan, ...]) -> None:
        """Install a previously computed match set for ``query``."""
        self.query = query
        self._matches = matches
        self._positions = [span.position for span in matches]

    def next_match(self, after: Position | None = None) -> MatchSpan:
        """Return the first match strictly after ``after``, wrapping to the first.

        ``after=None`` is treated as a position before every match.
        """
        if not self._matches:
            raise NoMatches(self.query)
        if after is None:
            return self._matches[0]
        idx = bisect.bisect_right(self._positions, after)
        if idx >= len(self._matches):
            idx = 0
        return self._matches[idx]

    def prev_match(self, before: Position | None = None) -> MatchSpan:
        """Return the last match strictly before ``before``, wrapping to the last.

        ``before=None`` is treated as a position after every match.
        """
        if not self._matches:
            raise NoMatches(self.query)
        if before is None:
            return self._matches[-1]
        idx = bisect.bisect_left(self._positions, before) - 1
        if idx < 0:
            idx = len(self._matches) - 1
        return self._matches[idx]

    def index_of(self, span: MatchSpan) -> int | None:
        idx = bisect.bisect_left(self._positions, span.position)
        if idx < len(self._matches) and self._matches[idx] == span:
            return idx
        return None

    def spans_for_line(self, line: int) -> tuple[MatchSpan, ...]:
        lo = bisect.bisect_left(self._positions, (line, -1))
        hi = bisect.bisect_left(self._positions, (line + 1, -1))
        return self._matches[lo:hi]
