"""Tests for terminal mode control sequences and tty lifecycle.

Verifies raw-mode lifecycle safety and expected escape-command payloads.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from lazypager import terminal as terminal_mod
from lazypager.terminal import TerminalController, open_tty


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("lazypager.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "lazypager.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("lazypager.terminal.os.write") as write_mock, mock.patch(
            "lazypager.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(input_fd=5, output_fd=6)
            controller.enable_tui_mode()
            self.assertTrue(controller.active)
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(5, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (6, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (6, b"\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(5, termios.TCSAFLUSH, saved_state)
        self.assertFalse(controller.active)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("lazypager.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(input_fd=0, output_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_raw_mode_restores_terminal_on_keyboard_interrupt(self) -> None:
        with mock.patch("lazypager.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(input_fd=0, output_fd=1)

        with mock.patch.object(controller, "enable_tui_mode"), mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(KeyboardInterrupt):
                with controller.raw_mode():
                    raise KeyboardInterrupt

        disable_mock.assert_called_once()

    def test_open_tty_closes_descriptor(self) -> None:
        with mock.patch("lazypager.terminal.os.open", return_value=11) as open_mock, mock.patch(
            "lazypager.terminal.os.close"
        ) as close_mock:
            with open_tty() as fd:
                self.assertEqual(fd, 11)
                close_mock.assert_not_called()

        self.assertEqual(open_mock.call_args.args[0], terminal_mod.TTY_PATH)
        close_mock.assert_called_once_with(11)


if __name__ == "__main__":
    unittest.main()
