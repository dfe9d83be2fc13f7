"""Pager bootstrap: builds the core objects and runs the loop inside a tty session."""

from __future__ import annotations

import logging
import os
import shutil
import sys

from ..buffer import LineBuffer
from ..dispatcher import Dispatcher, Frame
from ..highlight import apply_style
from ..input import read_key
from ..render import paint, render_frame
from ..terminal import TTY_PATH, TerminalController, open_tty
from ..ui_theme import UITheme, resolve_theme
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop

logger = logging.getLogger(__name__)


def terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def build_theme(theme_name: str | None, style: str | None, no_color: bool) -> UITheme:
    return apply_style(resolve_theme(theme_name, no_color=no_color), style)


def write_through(buffer: LineBuffer) -> None:
    """Print the content unchanged when no interactive session is possible."""
    sys.stdout.write(buffer.text)
    sys.stdout.flush()


def run_pager(
    buffer: LineBuffer,
    style: str | None = None,
    theme_name: str | None = None,
    no_color: bool = False,
    nopager: bool = False,
    tty_path: str = TTY_PATH,
) -> None:
    """Page ``buffer`` interactively, or print it when stdout is not a terminal."""
    if nopager or not os.isatty(sys.stdout.fileno()):
        write_through(buffer)
        return

    theme = build_theme(theme_name, style, no_color)
    columns, lines = terminal_size()
    dispatcher = Dispatcher(buffer, columns, lines)
    logger.info("paging %d lines at %sx%s", buffer.line_count(), columns, lines)

    with open_tty(tty_path) as tty_fd:
        terminal = TerminalController(tty_fd, tty_fd)

        def paint_frame(frame: Frame) -> None:
            paint(render_frame(frame, theme), tty_fd)

        callbacks = RuntimeLoopCallbacks(
            read_key=lambda timeout_ms: read_key(tty_fd, timeout_ms=timeout_ms),
            terminal_size=terminal_size,
            paint=paint_frame,
        )
        with terminal.raw_mode():
            run_main_loop(dispatcher, callbacks, RuntimeLoopTiming())
