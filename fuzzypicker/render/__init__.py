"""Render plans for the picker frame.

A render plan is a terminal-independent description of one frame: the prompt
row, an info row with match counts, and the visible window of ranked results
with highlight spans over matched characters. Painting a plan to ANSI output
lives in :mod:`fuzzypicker.render.ansi`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..search.fuzzy import highlight_spans
from ..state import PickerSession
from .ansi import clip_text, text_display_width

HEADER_ROWS = 2
ITEM_GUTTER = 2
NO_MATCHES_MESSAGE = "  no matches"


@dataclass(frozen=True)
class RenderLine:
    """One screen row.

    ``spans`` are half-open character ranges of ``text`` to highlight.
    """

    text: str
    kind: str = "item"
    spans: tuple[tuple[int, int], ...] = ()
    selected: bool = False


@dataclass(frozen=True)
class RenderPlan:
    lines: tuple[RenderLine, ...]
    width: int
    height: int
    cursor_row: int = 0
    cursor_col: int = 0


def result_rows(lines: int) -> int:
    """Return how many result rows fit below the header for ``lines`` rows."""
    return max(1, lines - HEADER_ROWS)


def _sanitize(label: str) -> str:
    # Replace per character so match offsets stay valid.
    return "".join(" " if ch == "\t" else (ch if ch.isprintable() else "?") for ch in label)


def _clip_spans(spans: tuple[tuple[int, int], ...], offset: int, limit: int) -> tuple[tuple[int, int], ...]:
    clipped: list[tuple[int, int]] = []
    for start, end in spans:
        start += offset
        end = min(end + offset, limit)
        if start < end:
            clipped.append((start, end))
    return tuple(clipped)


def build_render_plan(
    session: PickerSession,
    labels: Sequence[str],
    *,
    columns: int,
    lines: int,
    prompt: str = "> ",
) -> RenderPlan:
    """Describe the frame for ``session`` on a ``columns`` x ``lines`` screen."""
    width = max(1, columns)
    query = _sanitize(session.query)
    prompt_text = clip_text(prompt + query, width)
    cursor_col = text_display_width(prompt + query[: session.query_cursor])
    rows: list[RenderLine] = [RenderLine(text=prompt_text, kind="prompt")]
    rows.append(RenderLine(text=clip_text(f"  {len(session.view)}/{len(labels)}", width), kind="info"))

    visible = result_rows(lines)
    window = session.view[session.list_start : session.list_start + visible]
    if not window and session.query:
        rows.append(RenderLine(text=clip_text(NO_MATCHES_MESSAGE, width), kind="message"))
    for offset, match in enumerate(window):
        is_selected = session.list_start + offset == session.selected
        gutter = "> " if is_selected else " " * ITEM_GUTTER
        text = clip_text(gutter + _sanitize(labels[match.index]), width)
        rows.append(
            RenderLine(
                text=text,
                kind="item",
                spans=_clip_spans(highlight_spans(match.positions), ITEM_GUTTER, len(text)),
                selected=is_selected,
            )
        )

    height = max(1, lines)
    # Rows below the bottom of a short screen are dropped.
    return RenderPlan(
        lines=tuple(rows[:height]),
        width=width,
        height=height,
        cursor_row=0,
        cursor_col=min(cursor_col, width - 1),
    )


__all__ = [
    "HEADER_ROWS",
    "ITEM_GUTTER",
    "NO_MATCHES_MESSAGE",
    "RenderLine",
    "RenderPlan",
    "build_render_plan",
    "result_rows",
]
