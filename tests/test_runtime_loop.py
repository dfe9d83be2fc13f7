"""Event loop tests with scripted keys and recorded frames."""

from __future__ import annotations

import unittest

from lazypager import events
from lazypager.buffer import LineBuffer
from lazypager.dispatcher import Dispatcher, Frame, Mode
from lazypager.input import ENTER_CR, ENTER_LF, EOF
from lazypager.runtime import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from lazypager.runtime.loop import should_quit


class _Script:
    """Feeds keys and terminal sizes to the loop and records painted frames."""

    def __init__(self, keys: list[str], sizes: list[tuple[int, int]] | None = None) -> None:
        self.keys = list(keys)
        self.sizes = list(sizes or [(80, 5)])
        self.frames: list[Frame] = []
        self.timeouts: list[int] = []

    def read_key(self, timeout_ms: int) -> str:
        self.timeouts.append(timeout_ms)
        if not self.keys:
            return EOF
        return self.keys.pop(0)

    def terminal_size(self) -> tuple[int, int]:
        if len(self.sizes) > 1:
            return self.sizes.pop(0)
        return self.sizes[0]

    def paint(self, frame: Frame) -> None:
        self.frames.append(frame)

    def callbacks(self) -> RuntimeLoopCallbacks:
        return RuntimeLoopCallbacks(
            read_key=self.read_key,
            terminal_size=self.terminal_size,
            paint=self.paint,
        )


def _dispatcher(count: int = 10) -> Dispatcher:
    return Dispatcher(LineBuffer([f"line {idx}" for idx in range(count)]), 80, 5)


class RuntimeLoopTests(unittest.TestCase):
    def test_initial_frame_is_painted_before_first_key(self) -> None:
        script = _Script([])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertEqual(len(script.frames), 1)
        self.assertEqual(script.frames[0].top_line, 0)
        self.assertEqual(script.timeouts, [RuntimeLoopTiming().key_poll_ms])

    def test_q_in_normal_mode_ends_session(self) -> None:
        script = _Script(["G", "q", "j"])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertEqual(len(script.frames), 2)
        self.assertEqual(script.frames[-1].top_line, 6)
        self.assertEqual(script.keys, ["j"])

    def test_q_in_search_edit_cancels_instead_of_quitting(self) -> None:
        script = _Script(["/", "x", "q", "j"])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertIs(script.frames[-2].mode, Mode.NORMAL)
        self.assertEqual(script.frames[-1].top_line, 1)

    def test_ctrl_c_ends_session(self) -> None:
        script = _Script([events.CTRL_C, "j"])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertEqual(len(script.frames), 1)

    def test_crlf_pair_counts_as_one_enter(self) -> None:
        script = _Script([ENTER_CR, ENTER_LF, ENTER_LF])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertEqual([frame.top_line for frame in script.frames], [0, 1, 2])

    def test_idle_timeouts_do_not_repaint(self) -> None:
        script = _Script(["", "", "j"])

        run_main_loop(_dispatcher(), script.callbacks())

        self.assertEqual(len(script.frames), 2)

    def test_size_change_becomes_resize_event(self) -> None:
        script = _Script(["", "G", ""], sizes=[(80, 5), (80, 5), (40, 3), (40, 3)])

        run_main_loop(_dispatcher(), script.callbacks())

        resized = script.frames[1]
        self.assertEqual((resized.width, resized.height), (40, 2))
        self.assertEqual(script.frames[-1].top_line, 8)

    def test_should_quit_rules(self) -> None:
        self.assertTrue(should_quit("q", Mode.NORMAL))
        self.assertFalse(should_quit("q", Mode.SEARCH_EDIT))
        self.assertTrue(should_quit(EOF, Mode.SEARCH_EDIT))
        self.assertFalse(should_quit("j", Mode.NORMAL))


if __name__ == "__main__":
    unittest.main()
