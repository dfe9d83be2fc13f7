"""Two-mode key dispatcher driving the viewport and search index.

Normal mode interprets keys as navigation; search-edit mode edits the pending
query and refreshes match highlighting on every keystroke. Highlight updates
and viewport moves live in separate methods called from disjoint arms: typing
or committing a query never scrolls, only ``n``/``N`` do.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from . import events
from .buffer import LineBuffer
from .errors import NoMatches
from .events import Event, Resize
from .keymap import KeyComboBinding, KeyComboRegistry
from .search import MatchSpan, Position, SearchIndex
from .viewport import Viewport

logger = logging.getLogger(__name__)

PROMPT_ROWS = 1
MSG_QUERY_NOT_SET = "search query is not set"


class Mode(Enum):
    NORMAL = "normal"
    SEARCH_EDIT = "search_edit"


PROMPT_CHARS = {
    Mode.NORMAL: ":",
    Mode.SEARCH_EDIT: "/",
}


@dataclass(frozen=True)
class SearchState:
    """Committed search state.

    ``matches`` always belongs to ``query``; ``pending`` is only meaningful
    while editing and replaces ``query`` on commit.
    """

    query: str = ""
    pending: str = ""
    matches: tuple[MatchSpan, ...] = ()
    cursor: int | None = None

    def current_match(self) -> MatchSpan | None:
        if self.cursor is None or not (0 <= self.cursor < len(self.matches)):
            return None
        return self.matches[self.cursor]


@dataclass(frozen=True)
class FrameRow:
    line: int
    text: str
    spans: tuple[MatchSpan, ...]


@dataclass(frozen=True)
class Frame:
    """Consistent snapshot of everything the render adapter needs."""

    rows: tuple[FrameRow, ...]
    mode: Mode
    prompt_text: str
    message: str
    current_match: MatchSpan | None
    top_line: int
    height: int
    width: int
    line_count: int
    match_count: int

    @property
    def prompt_char(self) -> str:
        return PROMPT_CHARS[self.mode]


def content_rows(terminal_rows: int) -> int:
    """Rows available to content once the prompt row is reserved."""
    return max(1, terminal_rows - PROMPT_ROWS)


class Dispatcher:
    """Single-writer owner of ``SearchState`` and the viewport."""

    def __init__(self, buffer: LineBuffer, width: int, height: int) -> None:
        self.buffer = buffer
        self.width = max(1, width)
        self.index = SearchIndex(buffer)
        self.viewport = Viewport(buffer.line_count(), content_rows(height))
        self.mode = Mode.NORMAL
        self.search = SearchState()
        self.message = ""
        self._normal_keys = self._build_normal_keys()
        self._handlers: dict[Mode, Callable[[str], None]] = {
            Mode.NORMAL: self._handle_normal_key,
            Mode.SEARCH_EDIT: self._handle_search_edit_key,
        }

    def _build_normal_keys(self) -> KeyComboRegistry:
        vp = self.viewport
        return KeyComboRegistry().register_bindings(
            KeyComboBinding((events.DOWN, "j", events.ENTER), lambda: vp.scroll_by(1)),
            KeyComboBinding((events.UP, "k"), lambda: vp.scroll_by(-1)),
            KeyComboBinding(("f", "d", events.SPACE, events.PAGE_DOWN), vp.half_page_down),
            KeyComboBinding(("b", "u", events.PAGE_UP), vp.half_page_up),
            KeyComboBinding(("g", events.HOME), vp.goto_start),
            KeyComboBinding(("G", events.END), vp.goto_end),
            KeyComboBinding(("n",), self.jump_next),
            KeyComboBinding(("N",), self.jump_prev),
            KeyComboBinding(("/",), self.begin_search),
        )

    def dispatch(self, event: Event) -> Frame:
        """Apply one event to completion and return the resulting frame."""
        self.message = ""
        if isinstance(event, Resize):
            self.resize(event.width, event.height)
        else:
            self._handlers[self.mode](event)
        return self.snapshot()

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, width)
        self.viewport.resize(content_rows(height))

    # Normal mode

    def _handle_normal_key(self, key: str) -> None:
        self._normal_keys.dispatch(key)

    def begin_search(self) -> None:
        self.search = replace(self.search, pending=self.search.query)
        self.mode = Mode.SEARCH_EDIT
        logger.debug("search edit started with %r", self.search.pending)

    def _anchor(self) -> Position | None:
        """Current match position while the viewport still sits where the jump left it."""
        current = self.search.current_match()
        if current is None:
            return None
        if self.viewport.top_line != min(current.line, self.viewport.max_top()):
            return None
        return current.position

    def jump_next(self) -> None:
        anchor = self._anchor()
        after = anchor if anchor is not None else (self.viewport.top_line, -1)
        self._jump(lambda: self.index.next_match(after))

    def jump_prev(self) -> None:
        anchor = self._anchor()
        before = anchor if anchor is not None else (self.viewport.top_line, 0)
        self._jump(lambda: self.index.prev_match(before))

    def _jump(self, locate: Callable[[], MatchSpan]) -> None:
        try:
            span = locate()
        except NoMatches:
            if self.search.query:
                self.message = f"pattern not found: {self.search.query}"
            else:
                self.message = MSG_QUERY_NOT_SET
            return
        self._move_viewport_to(span)

    def _move_viewport_to(self, span: MatchSpan) -> None:
        self.search = replace(self.search, cursor=self.index.index_of(span))
        self.viewport.scroll_to(span.line)

    # Search-edit mode

    def _handle_search_edit_key(self, key: str) -> None:
        if key == events.ENTER:
            self.commit_search()
        elif key in {"q", events.ESC}:
            self.cancel_search()
        elif key == events.BACKSPACE:
            self._update_highlight(self.search.pending[:-1])
        elif events.is_printable_key(key):
            self._update_highlight(self.search.pending + key)

    def _update_highlight(self, pending: str) -> None:
        self.search = replace(self.search, pending=pending)
        self.index.recompute(pending)

    def commit_search(self) -> None:
        query = self.search.pending
        matches = self.index.recompute(query)
        self.search = SearchState(query=query, pending="", matches=matches, cursor=None)
        self.mode = Mode.NORMAL
        logger.debug("committed query %r with %d matches", query, len(matches))

    def cancel_search(self) -> None:
        self.index.load(self.search.query, self.search.matches)
        self.search = replace(self.search, pending="")
        self.mode = Mode.NORMAL
        logger.debug("search edit cancelled, kept %r", self.search.query)

    # Rendering

    def snapshot(self) -> Frame:
        rows = tuple(
            FrameRow(line, self.buffer.line_at(line), self.index.spans_for_line(line))
            for line in self.viewport.visible_range()
        )
        if self.mode is Mode.SEARCH_EDIT:
            prompt_text = self.search.pending
            current = None
        else:
            prompt_text = self.message or self.search.query
            current = self.search.current_match()
        return Frame(
            rows=rows,
            mode=self.mode,
            prompt_text=prompt_text,
            message=self.message,
            current_match=current,
            top_line=self.viewport.top_line,
            height=self.viewport.height,
            width=self.width,
            line_count=self.buffer.line_count(),
            match_count=len(self.index),
        )
