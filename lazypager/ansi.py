"""Display-width aware measurement and truncation of plain text lines.

Lines are truncated, never wrapped. Tabs expand to 8-column stops, East Asian
wide characters take two cells, and control bytes are shown escaped so they
cannot move the cursor or ring the bell.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8


def is_control_char(ch: str) -> bool:
    """C0 controls, DEL and C1 controls (tab excluded)."""
    code = ord(ch)
    if ch == "\t":
        return False
    return code < 32 or code == 127 or 0x80 <= code <= 0x9F


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    East Asian wide/fullwidth characters consume two and control bytes take the
    width of their ``\\xNN`` escape.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if is_control_char(ch):
        return 4
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def visible_form(ch: str, col: int) -> str:
    """Return the text actually written for ``ch`` at column ``col``."""
    if ch == "\t":
        return " " * char_display_width(ch, col)
    if is_control_char(ch):
        return f"\\x{ord(ch):02x}"
    return ch


def layout_cells(text: str, max_cols: int) -> list[tuple[int, str]]:
    """Lay ``text`` out into at most ``max_cols`` columns.

    Returns ``(char_index, visible_text)`` pairs for every character that fits.
    A tab straddling the edge is cut to the remaining columns; a wide glyph that
    would straddle it is dropped.
    """
    cells: list[tuple[int, str]] = []
    if max_cols <= 0:
        return cells
    col = 0
    for idx, ch in enumerate(text):
        if col >= max_cols:
            break
        w = char_display_width(ch, col)
        if col + w > max_cols:
            if ch == "\t":
                cells.append((idx, " " * (max_cols - col)))
            break
        cells.append((idx, visible_form(ch, col)))
        col += w
    return cells


def clip_line(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    return "".join(cell for _, cell in layout_cells(text, max_cols))


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col
