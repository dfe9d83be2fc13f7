"""Captured input as an immutable, ordered sequence of text lines.

The whole stream is read and decoded before the interactive session starts.
Decoding is strict UTF-8; the pager never guesses another encoding.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import BinaryIO

from .errors import EncodingError, IndexOutOfRange

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split ``text`` on line terminators.

    A single trailing terminator does not produce a phantom empty line, while
    any further empty lines are kept. ``\\r\\n`` counts as one terminator.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class LineBuffer:
    """Read-only line store shared by the search index, viewport and dispatcher."""

    __slots__ = ("_lines", "_text")

    def __init__(self, lines: Sequence[str] = (), text: str | None = None) -> None:
        self._lines: tuple[str, ...] = tuple(lines)
        self._text = text

    @classmethod
    def from_text(cls, text: str) -> LineBuffer:
        return cls(split_lines(text), text=text)

    @property
    def text(self) -> str:
        """The decoded content exactly as ingested, terminators included."""
        if self._text is None:
            return "".join(f"{line}\n" for line in self._lines)
        return self._text

    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            raise IndexOutOfRange(index, len(self._lines))
        return self._lines[index]

    def lines_between(self, start: int, stop: int) -> tuple[str, ...]:
        """Return lines in ``[start, stop)`` clipped to the buffer bounds."""
        start = max(0, start)
        stop = min(len(self._lines), stop)
        if stop <= start:
            return ()
        return self._lines[start:stop]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)

    def __repr__(self) -> str:
        return f"LineBuffer(line_count={len(self._lines)})"


def decode_utf8(data: bytes) -> str:
    """Decode ``data`` strictly, translating failures into ``EncodingError``."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(exc.start, exc.reason) from exc


def ingest(stream: BinaryIO) -> LineBuffer:
    """Consume ``stream`` to end-of-stream and build a ``LineBuffer``."""
    data = stream.read()
    text = decode_utf8(data)
    buffer = LineBuffer.from_text(text)
    logger.debug("ingested %d bytes into %d lines", len(data), buffer.line_count())
    return buffer
