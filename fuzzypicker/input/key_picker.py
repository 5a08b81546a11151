"""Picker-mode input handling."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..picker_panel.controller import PickerController
from ..render import HEADER_ROWS, result_rows
from ..state import Phase
from .events import RESIZE, InputEvent
from .key_registry import KeyBinding, KeyRegistry

logger = logging.getLogger(__name__)

DOUBLE_CLICK_SECONDS = 0.35


def build_picker_key_registry(controller: PickerController) -> KeyRegistry:
    """Bind the default picker keys to ``controller`` operations."""
    return KeyRegistry().register_bindings(
        KeyBinding(("ESC", "CTRL_C", "CTRL_G"), controller.cancel),
        KeyBinding(("ENTER",), controller.confirm),
        KeyBinding(("UP", "CTRL_P", "CTRL_K"), lambda: controller.move_selection(-1)),
        KeyBinding(("DOWN", "CTRL_N"), lambda: controller.move_selection(1)),
        KeyBinding(("PAGE_UP",), lambda: controller.page(-1)),
        KeyBinding(("PAGE_DOWN",), lambda: controller.page(1)),
        KeyBinding(("CTRL_HOME",), controller.select_first),
        KeyBinding(("CTRL_END",), controller.select_last),
        KeyBinding(("LEFT", "CTRL_B"), lambda: controller.move_cursor(-1)),
        KeyBinding(("RIGHT", "CTRL_F"), lambda: controller.move_cursor(1)),
        KeyBinding(("HOME", "CTRL_A"), controller.cursor_home),
        KeyBinding(("END", "CTRL_E"), controller.cursor_end),
        KeyBinding(("BACKSPACE",), controller.delete_backward, edits_query=True),
        KeyBinding(("DELETE",), controller.delete_forward, edits_query=True),
        KeyBinding(("CTRL_W",), controller.delete_word_backward, edits_query=True),
        KeyBinding(("CTRL_U",), controller.delete_to_start, edits_query=True),
        KeyBinding(("TAB",), lambda: None),
    )


@dataclass(frozen=True)
class PickerKeyContext:
    """Dependencies for picker event handling beyond the controller itself."""

    registry: KeyRegistry
    double_click_seconds: float = DOUBLE_CLICK_SECONDS
    clock: Callable[[], float] = time.monotonic


def _handle_mouse(event: InputEvent, controller: PickerController, context: PickerKeyContext) -> None:
    if event.key == "MOUSE_WHEEL_UP":
        controller.move_selection(-1)
        return
    if event.key == "MOUSE_WHEEL_DOWN":
        controller.move_selection(1)
        return
    if event.key == "MOUSE_LEFT_DOWN" and event.row is not None:
        controller.click_row(
            event.row - HEADER_ROWS - 1,
            context.clock(),
            context.double_click_seconds,
        )


def handle_picker_event(
    event: InputEvent,
    controller: PickerController,
    context: PickerKeyContext,
) -> bool:
    """Apply one input event to an active picker session.

    Returns whether the query text changed, in which case the caller must
    re-rank candidates. Unrecognized events are ignored.
    """
    if controller.phase is not Phase.ACTIVE:
        return False

    key = event.key
    if event.is_text:
        return controller.insert_text(key)
    if key == "CTRL_D":
        if not controller.session.query:
            controller.cancel()
            return False
        return controller.delete_forward()
    if key == RESIZE:
        if event.row is not None:
            controller.set_visible_rows(result_rows(event.row))
        return False
    if key.startswith("MOUSE_"):
        _handle_mouse(event, controller, context)
        return False

    handled, query_changed = context.registry.dispatch(key)
    if not handled:
        logger.debug("ignoring unrecognized input %r", key)
    return query_changed
