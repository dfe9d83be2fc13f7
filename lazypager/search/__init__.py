"""Literal substring search over the line buffer.

Exports the match-span type, the pure scanner and the cached index used
for highlighting and ``n``/``N`` navigation.
"""

from __future__ import annotations

from .index import MatchSpan, Position, SearchIndex, find_line_matches, find_matches

__all__ = [
    "MatchSpan",
    "Position",
    "SearchIndex",
    "find_line_matches",
    "find_matches",
]
