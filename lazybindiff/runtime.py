"""Interactive event loop for the comparison view.

Wires key decoding, key bindings, the navigator, and screen painting.
This module is intentionally wiring-heavy; comparison logic lives in
``navigation`` and ``difference``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from .config import save_theme_name
from .highlight import apply_style
from .input import EOF_KEY, read_key
from .keys import ACTION_CYCLE_THEME, ACTION_QUIT, KeyComboRegistry, build_key_registry
from .navigation import Frame, Navigator
from .render import ScreenSize, render_screen
from .terminal import TerminalController
from .ui_theme import UITheme, next_theme_name, resolve_theme

logger = logging.getLogger(__name__)

RESIZE_POLL_MS = 200


def current_screen_size() -> ScreenSize:
    term = shutil.get_terminal_size((80, 24))
    return ScreenSize(columns=term.columns, lines=term.lines)


class ScreenPainter:
    """Render callback handed to the navigator.

    Keeps the last frame so theme changes and terminal resizes can repaint
    without touching navigator state.
    """

    def __init__(
        self,
        stdout_fd: int,
        theme: UITheme,
        size_provider: Callable[[], ScreenSize] = current_screen_size,
    ) -> None:
        self.stdout_fd = stdout_fd
        self.theme = theme
        self._size_provider = size_provider
        self._size = size_provider()
        self.last_frame: Frame | None = None

    def __call__(self, frame: Frame) -> None:
        self.last_frame = frame
        self.repaint()

    def repaint(self) -> None:
        if self.last_frame is None:
            return
        self._size = self._size_provider()
        render_screen(self.last_frame, self.theme, self._size, self.stdout_fd)

    def repaint_if_resized(self) -> bool:
        """Repaint when the terminal size changed since the last paint."""
        if self._size_provider() == self._size:
            return False
        self.repaint()
        return True


class ThemeCycler:
    """Switch to the next UI theme, persist it, and repaint."""

    def __init__(self, painter: ScreenPainter, theme_name: str, style_name: str | None, no_color: bool) -> None:
        self.painter = painter
        self.theme_name = theme_name
        self.style_name = style_name
        self.no_color = no_color

    def __call__(self) -> None:
        if self.no_color:
            return
        self.theme_name = next_theme_name(self.theme_name)
        save_theme_name(self.theme_name)
        self.painter.theme = build_theme(self.theme_name, self.style_name, no_color=False)
        self.painter.repaint()


def build_theme(theme_name: str | None, style_name: str | None, *, no_color: bool) -> UITheme:
    """Resolve a UI theme and layer an optional Pygments column palette on it."""
    return apply_style(resolve_theme(theme_name, no_color=no_color), style_name)


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    painter: ScreenPainter,
    registry: KeyComboRegistry,
    cycle_theme: Callable[[], None],
) -> None:
    """Run the interactive loop until a quit key arrives or stdin closes.

    The navigator must already use ``painter`` as its renderer.
    """
    with terminal.raw_mode():
        navigator.redraw()
        while True:
            key = read_key(stdin_fd, timeout_ms=RESIZE_POLL_MS)
            if key == EOF_KEY:
                logger.info("input closed; leaving session")
                return
            if not key:
                painter.repaint_if_resized()
                continue
            result = registry.dispatch(key)
            if result is None:
                continue
            if isinstance(result, str):
                if result == ACTION_QUIT:
                    return
                if result == ACTION_CYCLE_THEME:
                    cycle_theme()
                continue
            navigator.handle_command(result)


def run_session(
    navigator: Navigator,
    stdin_fd: int,
    stdout_fd: int,
    *,
    theme_name: str,
    style_name: str | None,
    no_color: bool,
) -> None:
    """Take over the terminal and run one comparison session."""
    painter = ScreenPainter(stdout_fd, build_theme(theme_name, style_name, no_color=no_color))
    navigator.set_renderer(painter)
    terminal = TerminalController(stdin_fd, stdout_fd)
    cycle_theme = ThemeCycler(painter, theme_name, style_name, no_color)
    logger.info("session started")
    try:
        run_main_loop(navigator, terminal, stdin_fd, painter, build_key_registry(), cycle_theme)
    finally:
        navigator.set_renderer(None)
        logger.info("session ended")
