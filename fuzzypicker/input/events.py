"""Input events consumed by the interaction loop.

``InputEvent`` is the capability-neutral event type: scripted sources in tests
build them directly, while ``TerminalInputSource`` produces them from a tty.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .reader import KeyReader

RESIZE = "RESIZE"
DEFAULT_POLL_MS = 120


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


@dataclass(frozen=True)
class InputEvent:
    """One discrete input: a key token plus optional coordinates.

    Mouse events carry 1-based terminal ``col``/``row``; resize events carry the
    new terminal size as ``col`` (columns) and ``row`` (lines).
    """

    key: str
    col: int | None = None
    row: int | None = None

    @classmethod
    def from_token(cls, token: str) -> InputEvent:
        if token.startswith("MOUSE_") and ":" in token:
            col, row = parse_mouse_col_row(token)
            return cls(key=token.split(":", 1)[0], col=col, row=row)
        return cls(key=token)

    @classmethod
    def resize(cls, columns: int, lines: int) -> InputEvent:
        return cls(key=RESIZE, col=columns, row=lines)

    @property
    def is_text(self) -> bool:
        return len(self.key) == 1 and self.key.isprintable()


class TerminalInputSource:
    """Iterable of :class:`InputEvent` read from a terminal.

    Polls the reader with a short timeout so size changes surface as resize
    events between keystrokes. CR/LF pairs collapse into a single ``ENTER``.
    Iteration ends when the terminal reports end of file.
    """

    def __init__(
        self,
        reader: KeyReader,
        terminal_size: Callable[[], tuple[int, int]],
        poll_ms: int = DEFAULT_POLL_MS,
    ) -> None:
        self.reader = reader
        self.terminal_size = terminal_size
        self.poll_ms = poll_ms

    def __iter__(self) -> Iterator[InputEvent]:
        last_size = self.terminal_size()
        skip_next_lf = False
        while True:
            token = self.reader.read_key(timeout_ms=self.poll_ms)
            if token == "":
                size = self.terminal_size()
                if size != last_size:
                    last_size = size
                    yield InputEvent.resize(*size)
                continue
            if token == "EOF":
                return
            if skip_next_lf and token == "ENTER_LF":
                skip_next_lf = False
                continue
            if token == "ENTER_CR":
                token = "ENTER"
                skip_next_lf = True
            elif token == "ENTER_LF":
                token = "ENTER"
                skip_next_lf = False
            else:
                skip_next_lf = False
            yield InputEvent.from_token(token)
