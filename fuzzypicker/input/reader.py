"""Low-level terminal input decoding.

Reads raw bytes from a tty descriptor and translates them into normalized key
tokens. Handles ESC-sequence timing, multi-byte UTF-8 characters, cursor and
editing keys, and SGR mouse events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x01": "CTRL_A",
    b"\x02": "CTRL_B",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x05": "CTRL_E",
    b"\x06": "CTRL_F",
    b"\x07": "CTRL_G",
    b"\x08": "BACKSPACE",
    b"\t": "TAB",
    b"\n": "ENTER_LF",
    b"\x0b": "CTRL_K",
    b"\r": "ENTER_CR",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\x7f": "BACKSPACE",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "7": "HOME",
    "4": "END",
    "8": "END",
    "3": "DELETE",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
}

_SGR_BUTTON_MASK = 0b11
_SGR_MOTION_FLAG = 0b0010_0000
_SGR_WHEEL_FLAG = 0b0100_0000
_SGR_WHEEL_KEYS = {0: "MOUSE_WHEEL_UP", 1: "MOUSE_WHEEL_DOWN"}


def _utf8_continuation_count(lead: int) -> int:
    if lead & 0b1110_0000 == 0b1100_0000:
        return 1
    if lead & 0b1111_0000 == 0b1110_0000:
        return 2
    if lead & 0b1111_1000 == 0b1111_0000:
        return 3
    return 0


class KeyReader:
    """Decode key tokens from one file descriptor.

    Bytes read ahead while disambiguating a lone ESC are kept per reader and
    replayed on the next call.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token.

        Returns ``""`` when ``timeout_ms`` elapses without input and ``"EOF"``
        when the descriptor is closed.
        """
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return "EOF"

        control = _CONTROL_KEYS.get(ch)
        if control is not None:
            return control
        if ch == b"\x1b":
            return self._read_escape_sequence()

        extra = _utf8_continuation_count(ch[0])
        data = bytearray(ch)
        for _ in range(extra):
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                break
            data.extend(part)
        return bytes(data).decode("utf-8", errors="replace")

    def _read_escape_sequence(self) -> str:
        # Only a lone ESC is the Escape key; anything else after it is a sequence.
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"\x1b":
            self._pending.append(seq)
            return "ESC"
        if seq == b"O":
            # SS3 cursor keys sent in application mode.
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return UNKNOWN_KEY
            return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)
        if seq != b"[":
            # Alt+key combinations are not bound.
            return UNKNOWN_KEY

        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return UNKNOWN_KEY
        if seq in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[seq]
        if seq == b"<":
            return self._read_sgr_mouse()
        if not seq.isdigit():
            return UNKNOWN_KEY

        params = bytearray(seq)
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return UNKNOWN_KEY
            if part.isdigit() or part == b";":
                params.extend(part)
                if len(params) > 16:
                    return UNKNOWN_KEY
                continue
            final = part
            break

        fields = params.decode("ascii").split(";")
        if final == b"~":
            return _CSI_TILDE_KEYS.get(fields[0], UNKNOWN_KEY)
        base = _CSI_FINAL_KEYS.get(final)
        if base is None:
            return UNKNOWN_KEY
        # Modified keys arrive as ESC [ 1 ; <mod> <final>; only Ctrl+Home/End are distinguished.
        modifier = fields[1] if len(fields) > 1 else ""
        if modifier == "5" and base in {"HOME", "END"}:
            return f"CTRL_{base}"
        return base

    def _read_sgr_mouse(self) -> str:
        """Decode ``ESC [ < btn ; col ; row`` terminated by ``M`` (press) or ``m`` (release)."""
        raw = bytearray()
        while True:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None or len(raw) > 64:
                return UNKNOWN_KEY
            if part == b"M" or part == b"m":
                pressed = part == b"M"
                break
            raw.extend(part)
        fields = raw.decode("ascii", errors="replace").split(";")
        if len(fields) != 3 or not all(field.isdigit() for field in fields):
            return UNKNOWN_KEY
        code, col, row = (int(field) for field in fields)
        if code & _SGR_WHEEL_FLAG:
            wheel = _SGR_WHEEL_KEYS.get(code & _SGR_BUTTON_MASK)
            return f"{wheel}:{col}:{row}" if wheel else "MOUSE"
        if code & _SGR_MOTION_FLAG or code & _SGR_BUTTON_MASK:
            return "MOUSE"
        return f"MOUSE_LEFT_{'DOWN' if pressed else 'UP'}:{col}:{row}"
