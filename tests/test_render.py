from __future__ import annotations

import unittest

from fuzzypicker.render import (
    NO_MATCHES_MESSAGE,
    RenderLine,
    RenderPlan,
    build_render_plan,
    result_rows,
)
from fuzzypicker.render.ansi import (
    char_display_width,
    clip_text,
    paint_line,
    paint_render_plan,
    text_display_width,
)
from fuzzypicker.search.fuzzy import ScoredMatch, rank_labels
from fuzzypicker.state import Phase, PickerSession
from fuzzypicker.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _session(query: str, labels: list[str], **overrides) -> PickerSession:
    session = PickerSession(
        phase=Phase.ACTIVE,
        query=query,
        query_cursor=len(query),
        view=rank_labels(query, labels),
    )
    for name, value in overrides.items():
        setattr(session, name, value)
    return session


class DisplayWidthTests(unittest.TestCase):
    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(char_display_width("a"), 1)
        self.assertEqual(char_display_width("日"), 2)
        self.assertEqual(char_display_width("\u0301"), 0)
        self.assertEqual(text_display_width("\u00e9日"), 3)

    def test_clip_text_respects_display_columns(self) -> None:
        self.assertEqual(clip_text("日本語", 5), "日本")
        self.assertEqual(clip_text("abcdef", 3), "abc")
        self.assertEqual(clip_text("abc", 0), "")
        self.assertEqual(clip_text("abc", 10), "abc")


class BuildRenderPlanTests(unittest.TestCase):
    def test_result_rows_leaves_room_for_header(self) -> None:
        self.assertEqual(result_rows(24), 22)
        self.assertEqual(result_rows(1), 1)

    def test_plan_shows_prompt_counts_and_highlighted_match(self) -> None:
        labels = ["apple", "banana", "cherry"]

        plan = build_render_plan(_session("an", labels), labels, columns=40, lines=10)

        self.assertEqual(
            plan.lines,
            (
                RenderLine(text="> an", kind="prompt"),
                RenderLine(text="  1/3", kind="info"),
                RenderLine(text="> banana", kind="item", spans=((3, 5),), selected=True),
            ),
        )
        self.assertEqual((plan.cursor_row, plan.cursor_col), (0, 4))
        self.assertEqual((plan.width, plan.height), (40, 10))

    def test_short_screen_never_gets_more_rows_than_its_height(self) -> None:
        labels = ["apple", "banana", "cherry"]
        session = _session("", labels)

        two = build_render_plan(session, labels, columns=20, lines=2)
        one = build_render_plan(session, labels, columns=20, lines=1)

        self.assertEqual([line.kind for line in two.lines], ["prompt", "info"])
        self.assertEqual([line.kind for line in one.lines], ["prompt"])
        self.assertEqual((two.height, one.height), (2, 1))

    def test_custom_prompt_moves_cursor(self) -> None:
        labels = ["apple"]
        session = _session("ap", labels, query_cursor=1)

        plan = build_render_plan(session, labels, columns=40, lines=10, prompt="pick: ")

        self.assertEqual(plan.lines[0].text, "pick: ap")
        self.assertEqual(plan.cursor_col, 7)

    def test_no_matches_message_when_query_filters_everything(self) -> None:
        labels = ["apple", "banana"]

        plan = build_render_plan(_session("zz", labels), labels, columns=40, lines=10)

        self.assertEqual(plan.lines[1].text, "  0/2")
        self.assertEqual(plan.lines[2], RenderLine(text=NO_MATCHES_MESSAGE, kind="message"))

    def test_only_the_visible_window_is_drawn(self) -> None:
        labels = [f"item{idx}" for idx in range(10)]
        session = _session("", labels, list_start=3, selected=4)

        plan = build_render_plan(session, labels, columns=40, lines=5)

        items = plan.lines[2:]
        self.assertEqual([line.text for line in items], ["  item3", "> item4", "  item5"])
        self.assertEqual([line.selected for line in items], [False, True, False])

    def test_long_labels_and_spans_are_clipped_to_width(self) -> None:
        labels = ["abcdefgh"]

        plan = build_render_plan(_session("bh", labels), labels, columns=6, lines=5)

        self.assertEqual(plan.lines[2].text, "> abcd")
        self.assertEqual(plan.lines[2].spans, ((3, 4),))

    def test_control_characters_in_labels_are_replaced(self) -> None:
        labels = ["a\tb\x07"]

        plan = build_render_plan(_session("", labels), labels, columns=40, lines=5)

        self.assertEqual(plan.lines[2].text, "> a b?")

    def test_cursor_col_is_clamped_to_width(self) -> None:
        labels = ["x"]

        plan = build_render_plan(_session("abcdefghij", labels), labels, columns=5, lines=5)

        self.assertEqual(plan.cursor_col, 4)


class PaintTests(unittest.TestCase):
    def test_plain_theme_frame(self) -> None:
        plan = RenderPlan(
            lines=(
                RenderLine(text="> an", kind="prompt"),
                RenderLine(text="  1/3", kind="info"),
                RenderLine(text="> banana", spans=((3, 5),), selected=True),
            ),
            width=10,
            height=5,
            cursor_col=4,
        )

        painted = paint_render_plan(plan, PLAIN_THEME)

        self.assertEqual(
            painted,
            "\033[?25l\033[H\033[J> an\r\n  1/3\r\n> banana  \033[1;5H\033[?25h",
        )

    def test_match_spans_use_theme_match_style(self) -> None:
        line = RenderLine(text="  banana", spans=((3, 5),))

        painted = paint_line(line, DEFAULT_THEME, 20)

        item = DEFAULT_THEME.item
        reset = DEFAULT_THEME.reset
        self.assertEqual(painted, f"{item}  b{DEFAULT_THEME.match}an{reset}{item}ana{reset}")

    def test_selected_line_uses_selected_style(self) -> None:
        line = RenderLine(text="> x", selected=True)

        painted = paint_line(line, DEFAULT_THEME, 5)

        self.assertTrue(painted.startswith(DEFAULT_THEME.selected))
        self.assertIn("> x  ", painted)

    def test_scored_match_positions_survive_into_spans(self) -> None:
        labels = ["banana"]
        session = _session("", labels, view=(ScoredMatch(index=0, score=1, positions=(0, 5)),))

        plan = build_render_plan(session, labels, columns=40, lines=5)

        self.assertEqual(plan.lines[2].spans, ((2, 3), (7, 8)))


if __name__ == "__main__":
    unittest.main()
