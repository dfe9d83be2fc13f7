"""Terminal control helpers for the pager session.

Owns the raw-mode lifecycle and alternate-screen switching. The saved tty
attributes live on one controller object and are restored on every exit path.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"
ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one input/output descriptor pair."""

    def __init__(self, input_fd: int, output_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.input_fd = input_fd
        self.output_fd = output_fd
        self._saved_tty_state = termios.tcgetattr(input_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.input_fd, termios.TCSAFLUSH)
        os.write(self.output_fd, ENTER_SCREEN)
        self._active = True
        logger.debug("terminal raw mode enabled")

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer, cursor and saved tty attributes."""
        os.write(self.output_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._active = False
        logger.debug("terminal restored")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


@contextlib.contextmanager
def open_tty(path: str = TTY_PATH):
    """Open the controlling terminal for reading keys and writing frames.

    Standard input carries the paged content, so keys come from the tty.
    """
    fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
    try:
        yield fd
    finally:
        os.close(fd)
