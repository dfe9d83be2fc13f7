"""Render adapter: turns a dispatcher ``Frame`` into one ANSI screen payload.

Rendering only reads the immutable frame, so it never observes a half-applied
event. Rows are truncated to the terminal width; nothing is wrapped.
"""

from __future__ import annotations

import os

from .ansi import clip_line, display_width, layout_cells
from .dispatcher import Frame, FrameRow, Mode
from .search import MatchSpan
from .ui_theme import UITheme

CURSOR_HOME = "\033[H"
CLEAR_LINE = "\033[2K"


def _cell_style(
    idx: int,
    spans: tuple[MatchSpan, ...],
    span_pos: int,
    current: MatchSpan | None,
    theme: UITheme,
) -> tuple[str, int]:
    """Return the SGR for character ``idx`` and the advanced span cursor."""
    while span_pos < len(spans) and spans[span_pos].end <= idx:
        span_pos += 1
    if span_pos >= len(spans) or spans[span_pos].start > idx:
        return "", span_pos
    if spans[span_pos] == current:
        return theme.current_match, span_pos
    return theme.match, span_pos


def render_row(row: FrameRow, width: int, theme: UITheme, current: MatchSpan | None = None) -> str:
    """Render one content row with its match spans highlighted."""
    out: list[str] = []
    active = ""
    span_pos = 0
    for idx, cell in layout_cells(row.text, width):
        style, span_pos = _cell_style(idx, row.spans, span_pos, current, theme)
        if style != active:
            out.append(theme.reset if active else "")
            out.append(style)
            active = style
        out.append(cell)
    if active:
        out.append(theme.reset)
    return "".join(out)


def position_label(frame: Frame) -> str:
    """Describe the visible line range, plus the match count when searching."""
    if frame.line_count == 0:
        label = "(empty)"
    else:
        first = frame.top_line + 1
        last = frame.top_line + len(frame.rows)
        label = f"{first}-{last}/{frame.line_count}"
    if frame.match_count:
        noun = "match" if frame.match_count == 1 else "matches"
        label = f"{frame.match_count} {noun}  {label}"
    return label


def render_prompt(frame: Frame, width: int, theme: UITheme) -> str:
    """Render the bottom prompt row: ``:`` in normal mode, ``/`` while editing."""
    prefix = frame.prompt_char
    right = position_label(frame)
    text_style = theme.message if frame.message else theme.prompt_query
    budget = max(0, width - len(prefix))
    text = clip_line(frame.prompt_text, budget)
    used = len(prefix) + display_width(text)
    out = [theme.prompt, prefix, theme.reset if theme.prompt else "", text_style, text]
    if text_style:
        out.append(theme.reset)
    gap = width - used - len(right)
    if frame.mode is Mode.NORMAL and gap >= 2:
        out.append(" " * gap)
        out.append(theme.status)
        out.append(right)
        if theme.status:
            out.append(theme.reset)
    return "".join(out)


def render_frame(frame: Frame, theme: UITheme) -> str:
    """Compose the full screen payload for ``frame``."""
    width = max(1, frame.width)
    out: list[str] = [CURSOR_HOME]
    for row_no in range(frame.height):
        out.append(CLEAR_LINE)
        if row_no < len(frame.rows):
            out.append(render_row(frame.rows[row_no], width, theme, frame.current_match))
        elif frame.line_count:
            out.append(f"{theme.filler}~{theme.reset if theme.filler else ''}")
        out.append("\r\n")
    out.append(CLEAR_LINE)
    out.append(render_prompt(frame, width, theme))
    return "".join(out)


def paint(payload: str, fd: int) -> None:
    os.write(fd, payload.encode("utf-8", errors="replace"))
