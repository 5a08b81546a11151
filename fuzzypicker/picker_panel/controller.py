"""Picker lifecycle and session transitions.

The controller owns one :class:`PickerSession` and implements every transition
of the picker: query editing, query-cursor motion, clamped selection motion,
visible-window scrolling, mouse row selection, confirm, and cancel. Ranking is
not performed here; edits report whether the query changed and the runtime loop
feeds the new ranked view back through :meth:`PickerController.apply_view`.
"""

from __future__ import annotations

import logging

from ..search.fuzzy import ScoredMatch
from ..state import Phase, PickerSession

logger = logging.getLogger(__name__)


def _previous_word_start(query: str, cursor: int) -> int:
    """Return the offset where the word before ``cursor`` starts."""
    idx = cursor
    while idx > 0 and query[idx - 1].isspace():
        idx -= 1
    while idx > 0 and not query[idx - 1].isspace():
        idx -= 1
    return idx


class PickerController:
    """State-bound picker operations used by key handlers and the runtime loop."""

    def __init__(self, session: PickerSession | None = None) -> None:
        self.session = session if session is not None else PickerSession()

    @property
    def phase(self) -> Phase:
        return self.session.phase

    @property
    def selected_match(self) -> ScoredMatch | None:
        view = self.session.view
        if not view:
            return None
        return view[self.session.selected]

    def start(self, view: tuple[ScoredMatch, ...], visible_rows: int) -> None:
        """Enter the active phase with an empty query and ``view`` ranked for it."""
        self.session = PickerSession(
            phase=Phase.ACTIVE,
            view=view,
            visible_rows=max(1, visible_rows),
        )
        logger.debug("picker session started with %d ranked candidates", len(view))

    def reset(self) -> None:
        self.session = PickerSession()

    def _require_active(self) -> bool:
        return self.session.phase is Phase.ACTIVE

    # Query editing. Each method returns whether the query text changed.

    def _replace_query(self, query: str, cursor: int) -> bool:
        session = self.session
        changed = query != session.query
        session.query = query
        session.query_cursor = max(0, min(cursor, len(query)))
        return changed

    def insert_text(self, text: str) -> bool:
        if not self._require_active() or not text:
            return False
        session = self.session
        cursor = session.query_cursor
        query = session.query[:cursor] + text + session.query[cursor:]
        return self._replace_query(query, cursor + len(text))

    def delete_backward(self) -> bool:
        if not self._require_active():
            return False
        session = self.session
        cursor = session.query_cursor
        if cursor == 0:
            return False
        return self._replace_query(session.query[: cursor - 1] + session.query[cursor:], cursor - 1)

    def delete_forward(self) -> bool:
        if not self._require_active():
            return False
        session = self.session
        cursor = session.query_cursor
        if cursor >= len(session.query):
            return False
        return self._replace_query(session.query[:cursor] + session.query[cursor + 1 :], cursor)

    def delete_word_backward(self) -> bool:
        if not self._require_active():
            return False
        session = self.session
        start = _previous_word_start(session.query, session.query_cursor)
        return self._replace_query(session.query[:start] + session.query[session.query_cursor :], start)

    def delete_to_start(self) -> bool:
        if not self._require_active():
            return False
        session = self.session
        return self._replace_query(session.query[session.query_cursor :], 0)

    # Query cursor motion.

    def move_cursor(self, delta: int) -> bool:
        if not self._require_active():
            return False
        session = self.session
        prev = session.query_cursor
        session.query_cursor = max(0, min(len(session.query), prev + delta))
        return session.query_cursor != prev

    def cursor_home(self) -> bool:
        return self.move_cursor(-len(self.session.query))

    def cursor_end(self) -> bool:
        return self.move_cursor(len(self.session.query))

    # Selection motion. Clamped, never wrapping.

    def _scroll_to_selection(self) -> None:
        session = self.session
        rows = max(1, session.visible_rows)
        if session.selected < session.list_start:
            session.list_start = session.selected
        elif session.selected >= session.list_start + rows:
            session.list_start = session.selected - rows + 1
        max_start = max(0, len(session.view) - rows)
        session.list_start = max(0, min(session.list_start, max_start))

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` while clamping to ranked-view bounds."""
        if not self._require_active() or not self.session.view:
            return False
        session = self.session
        prev = session.selected
        session.selected = max(0, min(len(session.view) - 1, prev + delta))
        self._scroll_to_selection()
        return session.selected != prev

    def page(self, direction: int) -> bool:
        return self.move_selection(direction * max(1, self.session.visible_rows))

    def select_first(self) -> bool:
        return self.move_selection(-len(self.session.view))

    def select_last(self) -> bool:
        return self.move_selection(len(self.session.view))

    def set_visible_rows(self, rows: int) -> None:
        self.session.visible_rows = max(1, rows)
        if self.session.view:
            self._scroll_to_selection()
        else:
            self.session.list_start = 0

    def click_row(self, row_offset: int, now: float, double_click_seconds: float) -> bool:
        """Select the result drawn ``row_offset`` rows below the window top.

        A second click on the same result within ``double_click_seconds``
        confirms it. Returns whether the session reached a terminal phase.
        """
        if not self._require_active():
            return False
        session = self.session
        if not (0 <= row_offset < session.visible_rows):
            return False
        clicked_idx = session.list_start + row_offset
        if not (0 <= clicked_idx < len(session.view)):
            return False
        session.selected = clicked_idx
        is_double = (
            clicked_idx == session.last_click_idx
            and (now - session.last_click_time) <= double_click_seconds
        )
        session.last_click_idx = clicked_idx
        session.last_click_time = now
        if not is_double:
            return False
        self.confirm()
        return True

    # Ranking feedback.

    def apply_view(self, view: tuple[ScoredMatch, ...]) -> None:
        """Install a freshly ranked view after a query change."""
        session = self.session
        session.view = view
        session.selected = 0
        session.list_start = 0
        session.last_click_idx = -1

    # Terminal transitions.

    def confirm(self) -> None:
        if not self._require_active():
            return
        match = self.selected_match
        if match is None:
            # Nothing to confirm on an empty view.
            self.cancel()
            return
        self.session.confirmed_index = match.index
        self.session.phase = Phase.CONFIRMED
        logger.debug("picker confirmed candidate %d", match.index)

    def cancel(self) -> None:
        if not self._require_active():
            return
        self.session.confirmed_index = None
        self.session.phase = Phase.CANCELLED
        logger.debug("picker cancelled")
