"""Tests for frame layout and line styling."""

from __future__ import annotations

import unittest
from unittest import mock

from cag.ansi import ANSI_ESCAPE_RE
from cag.query_input import QueryInput
from cag.render import (
    HIGHLIGHT_END,
    HIGHLIGHT_START,
    RenderContext,
    build_frame,
    compute_layout,
    format_main_line,
    render_frame,
)
from cag.state import Active, Editing, Paging


def _context(**overrides) -> RenderContext:
    values = dict(
        mode=Paging(),
        lines=["first", "second"],
        context=None,
        highlight_term=None,
        width=40,
        height=10,
        position=0,
        total_lines=2,
        input_complete=True,
        no_color=True,
    )
    values.update(overrides)
    return RenderContext(**values)


class ComputeLayoutTests(unittest.TestCase):
    def test_no_context_gives_main_pane_everything_but_status(self) -> None:
        layout = compute_layout(24, 0, searching=False)
        self.assertEqual((layout.context_rows, layout.main_rows, layout.search_rows), (0, 23, 0))

    def test_context_panel_includes_separator_row(self) -> None:
        layout = compute_layout(24, 3, searching=False)
        self.assertEqual((layout.context_rows, layout.main_rows), (4, 19))

    def test_context_panel_is_capped(self) -> None:
        layout = compute_layout(24, 40, searching=False)
        self.assertEqual((layout.context_rows, layout.main_rows), (7, 16))

    def test_search_box_takes_three_rows(self) -> None:
        layout = compute_layout(24, 0, searching=True)
        self.assertEqual((layout.main_rows, layout.search_rows), (20, 3))

    def test_tiny_terminal_keeps_one_main_row(self) -> None:
        layout = compute_layout(2, 6, searching=True)
        self.assertEqual(layout.context_rows, 0)
        self.assertEqual(layout.main_rows, 1)


class FormatMainLineTests(unittest.TestCase):
    def test_matches_are_bold_case_insensitively(self) -> None:
        text = format_main_line("xABy ab", "ab", "monokai", no_color=True)
        self.assertEqual(
            text,
            f"x{HIGHLIGHT_START}AB{HIGHLIGHT_END}y {HIGHLIGHT_START}ab{HIGHLIGHT_END}",
        )

    def test_plain_text_without_color(self) -> None:
        self.assertEqual(format_main_line("+added\r", None, "monokai", no_color=True), "+added")

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(format_main_line("a\x07b", None, "monokai", no_color=True), "a\\x07b")

    def test_diff_coloring_keeps_text(self) -> None:
        text = format_main_line("+added", None, "monokai", no_color=False)
        self.assertIn("\x1b[", text)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", text), "+added")

    def test_unknown_style_falls_back(self) -> None:
        text = format_main_line("-removed", None, "no-such-style", no_color=False)
        self.assertEqual(ANSI_ESCAPE_RE.sub("", text), "-removed")


class BuildFrameTests(unittest.TestCase):
    def test_frame_lists_lines_and_status(self) -> None:
        frame, main_rows = build_frame(_context())
        self.assertEqual(main_rows, 9)
        self.assertTrue(frame.startswith("\033[H\033[J"))
        self.assertIn("first\r\nsecond\r\n", frame)
        self.assertIn(" 1-2/2 ", frame)
        self.assertIn("q quit", frame)

    def test_context_panel_is_drawn_above_separator(self) -> None:
        frame, main_rows = build_frame(_context(context=["commit abc", "Author: someone"]))
        self.assertEqual(main_rows, 6)
        header, _, body = frame.partition("═")
        self.assertIn("commit abc", header)
        self.assertIn("Author: someone", header)
        self.assertIn("first", body)

    def test_streaming_total_is_marked(self) -> None:
        frame, _ = build_frame(_context(input_complete=False, total_lines=50))
        self.assertIn("/50+", frame)

    def test_editing_shows_search_box_with_query(self) -> None:
        mode = Editing(QueryInput("sec"))
        frame, main_rows = build_frame(_context(mode=mode, highlight_term="sec"))
        self.assertEqual(main_rows, 6)
        self.assertIn("┌─ Search", frame)
        self.assertIn("│sec", frame)
        self.assertIn(f"{HIGHLIGHT_START}sec{HIGHLIGHT_END}ond", frame)
        self.assertIn("Enter search", frame)

    def test_active_search_shows_term_and_hint(self) -> None:
        frame, _ = build_frame(_context(mode=Active(term="first", base=0), highlight_term="first"))
        self.assertIn("│first", frame)
        self.assertIn("n/N", frame)

    def test_long_lines_are_clipped(self) -> None:
        frame, _ = build_frame(_context(width=6, lines=["abcdefghij"]))
        self.assertIn("abcde\r\n", frame)
        self.assertNotIn("abcdef", frame)

    def test_render_frame_writes_payload(self) -> None:
        writes: list[bytes] = []

        def capture(_fd: int, data: bytes) -> int:
            writes.append(data)
            return len(data)

        with mock.patch("cag.render.os.write", side_effect=capture):
            main_rows = render_frame(_context(), 1)

        self.assertEqual(main_rows, 9)
        self.assertEqual(len(writes), 1)
        self.assertIn(b"second", writes[0])


if __name__ == "__main__":
    unittest.main()
