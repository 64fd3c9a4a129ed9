"""Key-token bindings for the comparison view.

Maps decoded key tokens onto navigator commands and session actions. Plain
movement keys move both files; Alt moves only the bottom file (the top one
stays frozen) and Ctrl moves only the top file.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .navigation import (
    NEXT_DIFFERENCE,
    STEP_BYTE,
    STEP_LINE,
    STEP_PAGE,
    TARGET_BOTH,
    TARGET_BOTTOM,
    TARGET_TOP,
    Command,
    MoveCommand,
)

ACTION_QUIT = "quit"
ACTION_CYCLE_THEME = "cycle_theme"

KeyResult = Command | str

_MOVEMENT_KEYS: tuple[tuple[str, str, bool], ...] = (
    ("RIGHT", STEP_BYTE, True),
    ("LEFT", STEP_BYTE, False),
    ("DOWN", STEP_LINE, True),
    ("UP", STEP_LINE, False),
    ("PAGE_DOWN", STEP_PAGE, True),
    ("PAGE_UP", STEP_PAGE, False),
)

_MODIFIER_TARGETS: tuple[tuple[str, str], ...] = (
    ("", TARGET_BOTH),
    ("ALT_", TARGET_BOTTOM),
    ("CTRL_", TARGET_TOP),
)


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], KeyResult]


class KeyComboRegistry:
    """Dispatch table from key tokens to bound commands and actions."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], KeyResult]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register bindings in order; a later binding wins for a shared token."""
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> KeyResult | None:
        """Return the bound command or action for ``key``, if any."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


def _constant(result: KeyResult) -> Callable[[], KeyResult]:
    return lambda: result


def movement_bindings() -> list[KeyComboBinding]:
    """Arrow/page keys in their plain, Alt, and Ctrl variants."""
    bindings: list[KeyComboBinding] = []
    for prefix, target in _MODIFIER_TARGETS:
        for key, step, forward in _MOVEMENT_KEYS:
            command = MoveCommand(step=step, forward=forward, target=target)
            bindings.append(KeyComboBinding((prefix + key,), _constant(command)))
    return bindings


def build_key_registry() -> KeyComboRegistry:
    """Return the default key map for the interactive session."""
    registry = KeyComboRegistry()
    registry.register_bindings(*movement_bindings())
    registry.register_bindings(
        KeyComboBinding((" ",), _constant(MoveCommand(step=STEP_PAGE, forward=True))),
        KeyComboBinding(("b",), _constant(MoveCommand(step=STEP_PAGE, forward=False))),
        KeyComboBinding(("ENTER_CR", "ENTER_LF"), _constant(NEXT_DIFFERENCE)),
        KeyComboBinding(("t",), _constant(ACTION_CYCLE_THEME)),
        KeyComboBinding(("ESC", "CTRL_C", "q", "Q"), _constant(ACTION_QUIT)),
    )
    return registry
