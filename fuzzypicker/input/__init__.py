"""Input-layer public API for key decoding and picker event handling.

Exports are split between low-level terminal decoding (``KeyReader``), the
capability-neutral event type, and the picker-mode handler used by the loop.
"""

from .events import RESIZE, InputEvent, TerminalInputSource, parse_mouse_col_row
from .key_picker import (
    DOUBLE_CLICK_SECONDS,
    PickerKeyContext,
    build_picker_key_registry,
    handle_picker_event,
)
from .key_registry import KeyBinding, KeyRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, KeyReader

__all__ = [
    "DOUBLE_CLICK_SECONDS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "RESIZE",
    "UNKNOWN_KEY",
    "InputEvent",
    "KeyBinding",
    "KeyReader",
    "KeyRegistry",
    "PickerKeyContext",
    "TerminalInputSource",
    "build_picker_key_registry",
    "handle_picker_event",
    "parse_mouse_col_row",
]
