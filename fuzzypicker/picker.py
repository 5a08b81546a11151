"""Public picker facade.

``FuzzyPicker`` holds the candidates between sessions and runs interactive
sessions over injected or terminal-backed input/render capabilities.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from .input.events import InputEvent
from .picker_panel.controller import PickerController
from .runtime.config import PickerOptions, load_picker_options
from .runtime.loop import InputSource, RenderSink, run_pick_loop
from .state import Phase
from .store import CandidateStore
from .terminal import TerminalRenderSink
from .ui_theme import resolve_theme

T = TypeVar("T")


class FuzzyPicker(Generic[T]):
    """Interactive fuzzy selection over a list of items.

    Items only need a display form (``str(item)`` unless ``display`` is given)
    and must support ``copy.copy``; :meth:`pick` returns a copy of the chosen
    item. With no capabilities injected, sessions run on the controlling
    terminal using options from the user config file.
    """

    def __init__(
        self,
        *,
        input_source: InputSource | None = None,
        render_sink: RenderSink | None = None,
        display: Callable[[T], str] | None = None,
        options: PickerOptions | None = None,
    ) -> None:
        if render_sink is not None and input_source is None:
            raise ValueError("a custom render sink needs an explicit input source")
        self._store = CandidateStore(display)
        self._controller = PickerController()
        self._input_source = input_source
        self._render_sink = render_sink
        self._options = options

    @property
    def num_of_items(self) -> int:
        return len(self._store)

    @property
    def phase(self) -> Phase:
        return self._controller.phase

    @property
    def options(self) -> PickerOptions:
        if self._options is None:
            self._options = load_picker_options()
        return self._options

    def set_items(self, items: Iterable[T]) -> None:
        """Replace the candidates; any finished session state is discarded."""
        self._store.set_items(items)
        self._controller.reset()

    def reset(self) -> None:
        """Drop all candidates and return to the freshly constructed state."""
        self._store.reset()
        self._controller.reset()

    def _terminal_sink(self, options: PickerOptions) -> TerminalRenderSink:
        theme = resolve_theme(options.theme, no_color=options.no_color)
        return TerminalRenderSink(theme=theme, mouse=options.mouse)

    def pick(self) -> T | None:
        """Run an interactive session.

        Returns a copy of the confirmed item, or ``None`` when the user cancels
        or there is nothing to pick from. Raises
        :class:`~fuzzypicker.errors.PickError` when terminal I/O fails.
        """
        options = self.options
        sink: RenderSink
        events: Iterable[InputEvent]
        if self._render_sink is not None and self._input_source is not None:
            sink = self._render_sink
            events = self._input_source
        else:
            terminal_sink = self._terminal_sink(options)
            sink = terminal_sink
            events = self._input_source if self._input_source is not None else terminal_sink.events()
        index = run_pick_loop(self._store, self._controller, events, sink, options)
        if index is None:
            return None
        return self._store.item_copy(index)
