"""Main interactive event loop for a pick session.

Each iteration renders the current session, blocks for the next input event,
dispatches it, and re-ranks candidates when the query changed. The render sink
is entered once per session and left on every exit path.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from typing import Protocol

from ..errors import EmptyStoreError, PickError
from ..input.events import RESIZE, InputEvent
from ..input.key_picker import PickerKeyContext, build_picker_key_registry, handle_picker_event
from ..picker_panel.controller import PickerController
from ..render import RenderPlan, build_render_plan, result_rows
from ..state import Phase, PickerSession
from ..store import CandidateStore
from .config import PickerOptions

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    """Lazy stream of input events; exhaustion ends the session as a cancel."""

    def __iter__(self) -> Iterator[InputEvent]: ...


class RenderSink(Protocol):
    """Paints render plans and brackets the session with enter/leave."""

    def enter(self) -> None: ...

    def leave(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def render(self, plan: RenderPlan) -> None: ...


def _leave_quietly(sink: RenderSink) -> None:
    """Best-effort restore while another error is already propagating."""
    try:
        sink.leave()
    except Exception as exc:
        logger.warning("terminal restore failed during abort: %r", exc)


def run_pick_loop(
    store: CandidateStore,
    controller: PickerController,
    events: Iterable[InputEvent],
    sink: RenderSink,
    options: PickerOptions | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> int | None:
    """Run one pick session and return the confirmed candidate index.

    Returns ``None`` when the session is cancelled, including the immediate
    cancel for an empty store, where no input is consumed and the sink is never
    entered. Terminal I/O failures surface as :class:`PickError`.
    """
    options = options if options is not None else PickerOptions()
    try:
        store.require_candidates()
    except EmptyStoreError:
        logger.debug("pick requested with no candidates; cancelling")
        controller.session = PickerSession(phase=Phase.CANCELLED)
        return None

    context = PickerKeyContext(
        registry=build_picker_key_registry(controller),
        double_click_seconds=options.double_click_seconds,
        clock=clock,
    )

    try:
        sink.enter()
    except OSError as exc:
        _leave_quietly(sink)
        raise PickError(f"could not enter interactive mode: {exc}") from exc
    except PickError:
        # Entering may fail after the terminal was already switched to raw mode.
        _leave_quietly(sink)
        raise

    try:
        columns, lines = sink.size()
        controller.start(store.rank(""), result_rows(lines))
        stream = iter(events)
        while not controller.phase.is_terminal:
            sink.render(
                build_render_plan(
                    controller.session,
                    store.labels,
                    columns=columns,
                    lines=lines,
                    prompt=options.prompt,
                )
            )
            event = next(stream, None)
            if event is None:
                logger.debug("input source exhausted; cancelling")
                controller.cancel()
                break
            if event.key == RESIZE and event.col is not None and event.row is not None:
                columns, lines = event.col, event.row
            if handle_picker_event(event, controller, context):
                view = store.rank(controller.session.query)
                logger.debug("query %r ranked %d of %d candidates", controller.session.query, len(view), len(store))
                controller.apply_view(view)
    except OSError as exc:
        controller.cancel()
        _leave_quietly(sink)
        raise PickError(f"pick session aborted: {exc}") from exc
    except BaseException:
        controller.cancel()
        _leave_quietly(sink)
        raise

    try:
        sink.leave()
    except OSError as exc:
        raise PickError(f"could not restore terminal: {exc}") from exc

    logger.debug("pick session finished in phase %s", controller.phase.value)
    return controller.session.confirmed_index
