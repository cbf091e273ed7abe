"""Regression tests for ANSI-aware width and clipping helpers."""

import unittest

from gitsi import ansi as ansi_mod


class ClipAnsiLineTests(unittest.TestCase):
    def test_escape_sequences_do_not_count_toward_width(self) -> None:
        clipped = ansi_mod.clip_ansi_line("\033[32mabcdef\033[0m", 3)

        self.assertEqual(clipped, "\033[32mabc")

    def test_wide_characters_are_not_split(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a漢字", 2), "a")
        self.assertEqual(ansi_mod.display_width("a漢字"), 5)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("ab\tc", 10), "ab      c")

    def test_non_positive_width_gives_empty_string(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")


class PadAnsiLineTests(unittest.TestCase):
    def test_pads_styled_text_to_width(self) -> None:
        padded = ansi_mod.pad_ansi_line("\033[31mab\033[0m", 5)

        self.assertEqual(ansi_mod.display_width(padded), 5)
        self.assertTrue(padded.endswith("   "))

    def test_long_text_is_clipped(self) -> None:
        self.assertEqual(ansi_mod.pad_ansi_line("abcdef", 4), "abcd")


if __name__ == "__main__":
    unittest.main()
