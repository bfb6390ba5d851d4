"""Tests for ANSI-aware width measurement and clipping."""

import unittest

from cag import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_take_no_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("\x1b[31mred\x1b[0m"), 3)

    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("ab\tc"), 9)


class ClipAnsiLineTests(unittest.TestCase):
    def test_plain_text_is_truncated(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abcdef", 3), "abc")

    def test_short_text_is_unchanged(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 10), "abc")

    def test_escapes_are_kept_and_not_counted(self) -> None:
        clipped = ansi_mod.clip_ansi_line("\x1b[1mabcdef\x1b[22m", 2)
        self.assertEqual(clipped, "\x1b[1mab")

    def test_trailing_reset_after_last_cell_is_kept(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("ab\x1b[0mcd", 2), "ab\x1b[0m")

    def test_wide_character_that_does_not_fit_is_dropped(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日", 2), "a")

    def test_tabs_become_spaces(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("\tx", 10), " " * 8 + "x")

    def test_non_positive_width_yields_empty(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")


if __name__ == "__main__":
    unittest.main()
