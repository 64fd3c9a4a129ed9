"""Tests for ANSI-aware clipping and padding helpers."""

from __future__ import annotations

import unittest

from lazybindiff.ansi import char_display_width, clip_ansi_line, display_width, pad_ansi_line, strip_ansi


class AnsiClipTests(unittest.TestCase):
    def test_clip_keeps_escape_sequences_and_counts_visible_cells(self) -> None:
        text = "\033[31mabc\033[0mdef"
        self.assertEqual(clip_ansi_line(text, 4), "\033[31mabc\033[0md")

    def test_clip_non_positive_width_is_empty(self) -> None:
        self.assertEqual(clip_ansi_line("abc", 0), "")
        self.assertEqual(clip_ansi_line("", 5), "")

    def test_wide_characters_do_not_split(self) -> None:
        self.assertEqual(char_display_width("界"), 2)
        self.assertEqual(clip_ansi_line("a界b", 2), "a")
        self.assertEqual(display_width("a界b"), 4)

    def test_pad_fills_to_exact_width(self) -> None:
        padded = pad_ansi_line("\033[1mab\033[0m", 5)
        self.assertEqual(strip_ansi(padded), "ab   ")
        self.assertEqual(display_width(pad_ansi_line("abcdefgh", 3)), 3)


if __name__ == "__main__":
    unittest.main()
