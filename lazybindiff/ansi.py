"""ANSI-aware width measurement and clipping for screen rows.

Hex rows carry diff highlighting as SGR sequences; clipping must keep those
sequences intact and count only visible cells against the terminal width.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal cell width of one character.

    Combining marks take no cells; East Asian wide/fullwidth characters take
    two. File names are the only place such characters show up.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Visible cell width of ``text`` with escape sequences ignored."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled row to at most ``max_cols`` visible cells.

    Escape sequences are copied through verbatim and never counted.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        w = char_display_width(text[i])
        if col + w > max_cols:
            break
        out.append(text[i])
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` with spaces to exactly ``width`` cells."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
