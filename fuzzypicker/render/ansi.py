"""Display-width measurement and ANSI painting of render plans.

Measurement treats combining marks as zero columns and East Asian wide or
fullwidth characters as two, so clipping stays aligned with terminal cells.
"""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

from ..ui_theme import UITheme

if TYPE_CHECKING:
    from . import RenderLine, RenderPlan


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def text_display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    col = 0
    for idx, ch in enumerate(text):
        w = char_display_width(ch)
        if col + w > max_cols:
            return text[:idx]
        col += w
    return text


def _line_style(line: RenderLine, theme: UITheme) -> str:
    if line.selected:
        return theme.selected
    if line.kind == "prompt":
        return theme.prompt
    if line.kind == "info":
        return theme.info
    if line.kind == "message":
        return theme.message
    return theme.item


def paint_line(line: RenderLine, theme: UITheme, width: int) -> str:
    """Render one plan line to a styled string, highlighting its spans."""
    base = _line_style(line, theme)
    text = line.text
    if line.selected:
        # Pad so the selection bar covers the whole row.
        text = text + " " * max(0, width - text_display_width(text))
    out = [base]
    cursor = 0
    for start, end in line.spans:
        out.append(text[cursor:start])
        out.append(theme.match)
        out.append(text[start:end])
        out.append(theme.reset)
        out.append(base)
        cursor = end
    out.append(text[cursor:])
    out.append(theme.reset)
    return "".join(out)


def paint_render_plan(plan: RenderPlan, theme: UITheme) -> str:
    """Serialize a full frame: clear, draw every line, then park the cursor."""
    out: list[str] = ["\033[?25l\033[H\033[J"]
    for row, line in enumerate(plan.lines):
        if row:
            out.append("\r\n")
        out.append(paint_line(line, theme, plan.width))
    out.append(f"\033[{plan.cursor_row + 1};{plan.cursor_col + 1}H\033[?25h")
    return "".join(out)
