"""Vertical scroll model for the content area.

Every operation clamps instead of wrapping or failing, so repeated moves at
either edge are no-ops.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ViewportState:
    top_line: int = 0
    height: int = 1


class Viewport:
    """Track the first visible line for a buffer of ``line_count`` lines."""

    def __init__(self, line_count: int, height: int) -> None:
        self.line_count = max(0, line_count)
        self.state = ViewportState(top_line=0, height=max(1, height))

    @property
    def top_line(self) -> int:
        return self.state.top_line

    @property
    def height(self) -> int:
        return self.state.height

    def max_top(self) -> int:
        """Return the largest top line that still fills the last page."""
        return max(0, self.line_count - self.state.height)

    def _clamp(self, top_line: int) -> int:
        return max(0, min(top_line, self.max_top()))

    def half_page(self) -> int:
        return max(1, self.state.height // 2)

    def scroll_to(self, target_line: int) -> None:
        self.state.top_line = self._clamp(target_line)

    def scroll_by(self, delta_lines: int) -> None:
        self.scroll_to(self.state.top_line + delta_lines)

    def half_page_down(self) -> None:
        self.scroll_by(self.half_page())

    def half_page_up(self) -> None:
        self.scroll_by(-self.half_page())

    def goto_start(self) -> None:
        self.state.top_line = 0

    def goto_end(self) -> None:
        self.state.top_line = self.max_top()

    def resize(self, height: int) -> None:
        """Change the visible height and re-clamp the current top line."""
        self.state.height = max(1, height)
        self.state.top_line = self._clamp(self.state.top_line)

    def visible_range(self) -> range:
        top = self.state.top_line
        return range(top, min(self.line_count, top + self.state.height))
