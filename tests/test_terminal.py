"""Tests for terminal mode transitions and the terminal render sink.

Verifies raw-mode lifecycle safety, the escape sequences written on entry and
exit, and that terminal failures surface as ``PickError``.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from fuzzypicker.errors import PickError
from fuzzypicker.render import RenderLine, RenderPlan
from fuzzypicker.terminal import TerminalController, TerminalRenderSink
from fuzzypicker.ui_theme import PLAIN_THEME


def _write_all(_fd: int, data: bytes) -> int:
    return len(data)


class TerminalControllerTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_and_mouse_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("fuzzypicker.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "fuzzypicker.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("fuzzypicker.terminal.os.write") as write_mock, mock.patch(
            "fuzzypicker.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_mouse_reporting_is_skipped_when_disabled(self) -> None:
        with mock.patch("fuzzypicker.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "fuzzypicker.terminal.tty.setraw"
        ), mock.patch("fuzzypicker.terminal.os.write") as write_mock, mock.patch(
            "fuzzypicker.terminal.termios.tcsetattr"
        ):
            controller = TerminalController(stdin_fd=0, stdout_fd=1, mouse=False)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        self.assertEqual(
            write_mock.call_args_list,
            [
                mock.call(1, b"\x1b[?1049h\x1b[?25l"),
                mock.call(1, b"\x1b[?25h\x1b[?1049l"),
            ],
        )

    def test_disable_restores_tty_attributes_even_when_write_fails(self) -> None:
        with mock.patch("fuzzypicker.terminal.termios.tcgetattr", return_value=[9]), mock.patch(
            "fuzzypicker.terminal.tty.setraw"
        ), mock.patch("fuzzypicker.terminal.os.write") as write_mock, mock.patch(
            "fuzzypicker.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            write_mock.side_effect = OSError("gone")

            with self.assertRaises(OSError):
                controller.disable_tui_mode()

        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, [9])

    def test_write_loops_until_everything_is_written(self) -> None:
        chunks: list[bytes] = []

        def short_write(_fd: int, data: bytes) -> int:
            chunks.append(data)
            return min(2, len(data))

        with mock.patch("fuzzypicker.terminal.os.write", side_effect=short_write):
            TerminalController(stdin_fd=0, stdout_fd=1).write("abcde")

        self.assertEqual(chunks, [b"abcde", b"cde", b"e"])

    def test_size_falls_back_when_descriptor_is_not_a_terminal(self) -> None:
        with mock.patch("fuzzypicker.terminal.os.get_terminal_size", side_effect=OSError("not a tty")):
            self.assertEqual(TerminalController(stdin_fd=0, stdout_fd=1).size(), (80, 24))


class TerminalRenderSinkTests(unittest.TestCase):
    def test_render_paints_plan_with_theme(self) -> None:
        controller = TerminalController(stdin_fd=0, stdout_fd=1)
        sink = TerminalRenderSink(controller, PLAIN_THEME)
        plan = RenderPlan(lines=(RenderLine(text="> ", kind="prompt"),), width=10, height=3, cursor_col=2)

        with mock.patch("fuzzypicker.terminal.os.write", side_effect=_write_all) as write_mock:
            sink.render(plan)

        self.assertEqual(write_mock.call_args.args, (1, b"\x1b[?25l\x1b[H\x1b[J> \x1b[1;3H\x1b[?25h"))

    def test_enter_failure_surfaces_as_pick_error(self) -> None:
        sink = TerminalRenderSink(TerminalController(stdin_fd=0, stdout_fd=1))

        with mock.patch(
            "fuzzypicker.terminal.termios.tcgetattr",
            side_effect=termios.error(25, "Inappropriate ioctl for device"),
        ):
            with self.assertRaises(PickError) as ctx:
                sink.enter()

        self.assertIsInstance(ctx.exception.__cause__, termios.error)

    def test_write_failure_surfaces_as_pick_error(self) -> None:
        sink = TerminalRenderSink(TerminalController(stdin_fd=0, stdout_fd=1))
        plan = RenderPlan(lines=(), width=1, height=1)

        with mock.patch("fuzzypicker.terminal.os.write", side_effect=OSError("broken pipe")):
            with self.assertRaises(PickError):
                sink.render(plan)

    def test_sink_opens_and_closes_controlling_tty_around_session(self) -> None:
        sink = TerminalRenderSink(mouse=False)

        with mock.patch("fuzzypicker.terminal.open_tty", return_value=7) as open_mock, mock.patch(
            "fuzzypicker.terminal.termios.tcgetattr", return_value=[0]
        ), mock.patch("fuzzypicker.terminal.tty.setraw") as setraw_mock, mock.patch(
            "fuzzypicker.terminal.os.write"
        ), mock.patch(
            "fuzzypicker.terminal.termios.tcsetattr"
        ), mock.patch(
            "fuzzypicker.terminal.os.close"
        ) as close_mock:
            sink.enter()
            self.assertEqual(sink.controller.stdin_fd, 7)
            self.assertFalse(sink.controller.mouse)
            sink.leave()

        open_mock.assert_called_once_with("/dev/tty")
        setraw_mock.assert_called_once_with(7, termios.TCSAFLUSH)
        close_mock.assert_called_once_with(7)
        self.assertIsNone(sink.controller)

    def test_sink_does_not_touch_terminal_before_enter(self) -> None:
        with mock.patch("fuzzypicker.terminal.open_tty") as open_mock:
            sink = TerminalRenderSink()
            events = sink.events()

            with self.assertRaises(PickError):
                sink.size()

        open_mock.assert_not_called()
        events.close()

    def test_events_read_keys_from_the_entered_terminal(self) -> None:
        controller = TerminalController(stdin_fd=5, stdout_fd=5)
        sink = TerminalRenderSink(controller)
        tokens = iter(["x", "EOF"])

        with mock.patch(
            "fuzzypicker.terminal.KeyReader.read_key",
            autospec=True,
            side_effect=lambda _self, timeout_ms=None: next(tokens),
        ), mock.patch.object(controller, "size", return_value=(80, 24)):
            keys = [event.key for event in sink.events()]

        self.assertEqual(keys, ["x"])


if __name__ == "__main__":
    unittest.main()
