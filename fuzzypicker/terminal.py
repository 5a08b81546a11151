"""Terminal control helpers for the pick session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse reporting, and
provides the terminal-backed render sink used by ``FuzzyPicker``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty
from collections.abc import Iterator

from .errors import PickError
from .input.events import InputEvent, TerminalInputSource
from .input.reader import KeyReader
from .render import RenderPlan
from .render.ansi import paint_render_plan
from .ui_theme import DEFAULT_THEME, UITheme

TTY_PATH = "/dev/tty"
FALLBACK_SIZE = (80, 24)


def open_tty(path: str = TTY_PATH) -> int:
    """Open the controlling terminal for reading keys and drawing frames."""
    return os.open(path, os.O_RDWR | os.O_NOCTTY)


@contextlib.contextmanager
def io_errors(action: str) -> Iterator[None]:
    """Re-raise terminal I/O failures as :class:`PickError`."""
    try:
        yield
    except (OSError, termios.error) as exc:
        raise PickError(f"terminal {action} failed: {exc}") from exc


class TerminalController:
    """Manage terminal mode transitions and raw frame output."""

    def __init__(self, stdin_fd: int, stdout_fd: int, *, mouse: bool = True) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.mouse = mouse
        self._saved_tty_state: list | None = None
        self._mouse_reporting_enabled = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode, with mouse reporting when enabled."""
        self._saved_tty_state = termios.tcgetattr(self.stdin_fd)
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        sequence = b"\x1b[?1049h\x1b[?25l"
        if self.mouse:
            sequence += b"\x1b[?1000h\x1b[?1006h"
            self._mouse_reporting_enabled = True
        os.write(self.stdout_fd, sequence)

    def disable_tui_mode(self) -> None:
        """Restore the main screen and the tty attributes saved on entry."""
        sequence = b""
        if self._mouse_reporting_enabled:
            sequence += b"\x1b[?1000l\x1b[?1006l"
            self._mouse_reporting_enabled = False
        sequence += b"\x1b[?25h\x1b[?1049l"
        try:
            os.write(self.stdout_fd, sequence)
        finally:
            if self._saved_tty_state is not None:
                termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
                self._saved_tty_state = None

    def write(self, text: str) -> None:
        data = text.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    def size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return FALLBACK_SIZE
        return size.columns, size.lines


class TerminalRenderSink:
    """Render sink that paints plans onto a terminal with a UI theme.

    Without an explicit controller the sink opens the controlling tty on
    :meth:`enter` and closes it again on :meth:`leave`, so nothing touches the
    terminal until a session actually starts. :meth:`events` yields input from
    the same tty.
    """

    def __init__(
        self,
        controller: TerminalController | None = None,
        theme: UITheme = DEFAULT_THEME,
        *,
        mouse: bool = True,
        tty_path: str = TTY_PATH,
    ) -> None:
        self.controller = controller
        self.theme = theme
        self.mouse = mouse
        self.tty_path = tty_path
        self._owned_fd: int | None = None

    def _require_controller(self) -> TerminalController:
        if self.controller is None:
            raise PickError("terminal session has not been entered")
        return self.controller

    def enter(self) -> None:
        with io_errors("enter"):
            if self.controller is None:
                self._owned_fd = open_tty(self.tty_path)
                self.controller = TerminalController(self._owned_fd, self._owned_fd, mouse=self.mouse)
            self.controller.enable_tui_mode()

    def leave(self) -> None:
        controller = self._require_controller()
        try:
            with io_errors("restore"):
                controller.disable_tui_mode()
        finally:
            if self._owned_fd is not None:
                fd = self._owned_fd
                self._owned_fd = None
                self.controller = None
                with io_errors("close"):
                    os.close(fd)

    def size(self) -> tuple[int, int]:
        return self._require_controller().size()

    def render(self, plan: RenderPlan) -> None:
        controller = self._require_controller()
        with io_errors("write"):
            controller.write(paint_render_plan(plan, self.theme))

    def events(self) -> Iterator[InputEvent]:
        """Yield input events from the entered terminal."""
        controller = self._require_controller()
        source = TerminalInputSource(KeyReader(controller.stdin_fd), self.size)
        with io_errors("read"):
            yield from source
