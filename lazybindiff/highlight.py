"""Pygments-style column palettes for the hex view.

The offset, hex, and ASCII columns use the colors a Pygments style assigns to
the token types emitted by ``HexdumpLexer``. Diff highlighting and chrome stay
with the UI theme.
"""

from __future__ import annotations

import logging

from pygments.styles import get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

from .ui_theme import UITheme

logger = logging.getLogger(__name__)

OFFSET_TOKEN = Token.Name.Label
HEX_TOKEN = Token.Number.Hex
ASCII_TOKEN = Token.String

_PALETTE_CACHE: dict[str, tuple[str, str, str] | None] = {}


def _sgr_for_token(style, token) -> str:
    """Build a foreground SGR sequence for ``token`` under ``style``."""
    info = style.style_for_token(token)
    params: list[str] = []
    if info.get("bold"):
        params.append("1")
    color = info.get("color")
    # Styles built on ANSI color names ("ansired") have no RGB value to use.
    if color and len(color) == 6 and not color.startswith("ansi"):
        red, green, blue = int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)
        params.append(f"38;2;{red};{green};{blue}")
    if not params:
        return ""
    return f"\033[{';'.join(params)}m"


def column_palette(style_name: str) -> tuple[str, str, str] | None:
    """Return ``(offset, hex, ascii)`` SGR strings for a Pygments style.

    Unknown style names yield ``None`` and are remembered so the lookup is not
    retried on every frame.
    """
    if style_name in _PALETTE_CACHE:
        return _PALETTE_CACHE[style_name]
    try:
        style = get_style_by_name(style_name)
    except ClassNotFound:
        logger.debug("unknown pygments style %r; keeping theme colors", style_name)
        palette = None
    else:
        palette = (
            _sgr_for_token(style, OFFSET_TOKEN),
            _sgr_for_token(style, HEX_TOKEN),
            _sgr_for_token(style, ASCII_TOKEN),
        )
    _PALETTE_CACHE[style_name] = palette
    return palette


def apply_style(theme: UITheme, style_name: str | None) -> UITheme:
    """Recolor the data columns of ``theme`` with a Pygments style.

    Plain themes (``--no-color``) and missing or unknown styles return the
    theme unchanged. Column colors are layered over the theme background so
    the window color stays consistent.
    """
    if not style_name or not theme.reset:
        return theme
    palette = column_palette(style_name)
    if palette is None:
        return theme
    offset, hex_bytes, ascii_bytes = palette
    return theme.with_columns(
        offset=theme.offset + offset,
        hex_bytes=theme.hex_bytes + hex_bytes,
        ascii_bytes=theme.ascii_bytes + ascii_bytes,
    )
