"""Main interactive event loop.

Serializes resize notices and key events into the dispatcher one at a time and
paints the frame produced by each. Ending the session is decided here, never
inside the dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .. import events
from ..dispatcher import Dispatcher, Frame, Mode
from ..input import ENTER_CR, ENTER_LF, EOF

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({EOF, events.CTRL_C})


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    Keeping terminal I/O behind callbacks lets tests drive the loop with a
    scripted key list and a recorded frame list.
    """

    read_key: Callable[[int], str]
    terminal_size: Callable[[], tuple[int, int]]
    paint: Callable[[Frame], None]


def should_quit(key: str, mode: Mode) -> bool:
    """Return whether ``key`` ends the session in ``mode``."""
    if key in QUIT_KEYS:
        return True
    return key == "q" and mode is Mode.NORMAL


def run_main_loop(
    dispatcher: Dispatcher,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run the interactive loop until the key source ends or the user quits.

    Each iteration polls the terminal size (a change becomes a ``Resize``
    event), then waits up to ``key_poll_ms`` for the next key.
    """
    size = callbacks.terminal_size()
    callbacks.paint(dispatcher.dispatch(events.Resize(*size)))
    skip_next_lf = False

    while True:
        current_size = callbacks.terminal_size()
        if current_size != size:
            size = current_size
            logger.debug("terminal resized to %sx%s", *size)
            callbacks.paint(dispatcher.dispatch(events.Resize(*size)))

        key = callbacks.read_key(timing.key_poll_ms)
        if key == "":
            continue
        if skip_next_lf and key == ENTER_LF:
            skip_next_lf = False
            continue
        skip_next_lf = key == ENTER_CR
        if key in {ENTER_CR, ENTER_LF}:
            key = events.ENTER

        if should_quit(key, dispatcher.mode):
            logger.info("session ended by %s", key)
            break
        callbacks.paint(dispatcher.dispatch(key))
