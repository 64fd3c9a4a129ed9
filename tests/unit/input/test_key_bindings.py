"""Tests for the default key map."""

from __future__ import annotations

import unittest

from lazybindiff.input import EOF_KEY, UNKNOWN_KEY
from lazybindiff.keys import (
    ACTION_CYCLE_THEME,
    ACTION_QUIT,
    KeyComboBinding,
    KeyComboRegistry,
    build_key_registry,
)
from lazybindiff.navigation import (
    NEXT_DIFFERENCE,
    STEP_BYTE,
    STEP_LINE,
    STEP_PAGE,
    TARGET_BOTH,
    TARGET_BOTTOM,
    TARGET_TOP,
    MoveCommand,
)


class DefaultKeyMapTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = build_key_registry()

    def test_plain_movement_keys_move_both_views(self) -> None:
        self.assertEqual(self.registry.dispatch("RIGHT"), MoveCommand(STEP_BYTE, True, TARGET_BOTH))
        self.assertEqual(self.registry.dispatch("UP"), MoveCommand(STEP_LINE, False, TARGET_BOTH))
        self.assertEqual(self.registry.dispatch("PAGE_DOWN"), MoveCommand(STEP_PAGE, True, TARGET_BOTH))

    def test_alt_moves_bottom_and_ctrl_moves_top(self) -> None:
        self.assertEqual(self.registry.dispatch("ALT_DOWN"), MoveCommand(STEP_LINE, True, TARGET_BOTTOM))
        self.assertEqual(self.registry.dispatch("CTRL_LEFT"), MoveCommand(STEP_BYTE, False, TARGET_TOP))
        self.assertEqual(self.registry.dispatch("CTRL_PAGE_UP"), MoveCommand(STEP_PAGE, False, TARGET_TOP))

    def test_space_and_b_page_both_views(self) -> None:
        self.assertEqual(self.registry.dispatch(" "), MoveCommand(STEP_PAGE, True, TARGET_BOTH))
        self.assertEqual(self.registry.dispatch("b"), MoveCommand(STEP_PAGE, False, TARGET_BOTH))

    def test_enter_jumps_to_next_difference(self) -> None:
        self.assertIs(self.registry.dispatch("ENTER_CR"), NEXT_DIFFERENCE)
        self.assertIs(self.registry.dispatch("ENTER_LF"), NEXT_DIFFERENCE)

    def test_quit_and_theme_actions(self) -> None:
        for key in ("ESC", "CTRL_C", "q", "Q"):
            self.assertEqual(self.registry.dispatch(key), ACTION_QUIT)
        self.assertEqual(self.registry.dispatch("t"), ACTION_CYCLE_THEME)

    def test_unbound_key_returns_none(self) -> None:
        self.assertIsNone(self.registry.dispatch("SHIFT_UP"))
        self.assertIsNone(self.registry.dispatch("x"))

    def test_unrecognized_and_alt_letter_tokens_are_unbound(self) -> None:
        for key in (UNKNOWN_KEY, EOF_KEY, "ALT_x", "ALT_q"):
            self.assertIsNone(self.registry.dispatch(key))


class KeyComboRegistryTests(unittest.TestCase):
    def test_later_binding_overrides_earlier(self) -> None:
        registry = KeyComboRegistry()
        registry.register_bindings(
            KeyComboBinding(("k",), lambda: ACTION_QUIT),
            KeyComboBinding(("k",), lambda: ACTION_CYCLE_THEME),
        )
        self.assertEqual(registry.dispatch("k"), ACTION_CYCLE_THEME)


if __name__ == "__main__":
    unittest.main()
