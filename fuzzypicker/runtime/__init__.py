"""Public runtime entry points.

Groups the interaction loop with its capability protocols and the persisted
picker options it is configured with.
"""

from __future__ import annotations

from .config import PickerOptions, load_picker_options
from .loop import InputSource, RenderSink, run_pick_loop

__all__ = [
    "InputSource",
    "PickerOptions",
    "RenderSink",
    "load_picker_options",
    "run_pick_loop",
]
