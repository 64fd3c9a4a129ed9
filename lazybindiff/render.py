"""Screen composition for the stacked hex/ASCII comparison view.

Turns a navigator ``Frame`` into styled terminal rows: a file name bar and
hex rows per file, a status row, and key help. Rendering never touches
navigator state; it only reads the frame it is given.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .ansi import pad_ansi_line
from .difference import DifferenceMask
from .navigation import Frame
from .ui_theme import UITheme

GROUP_SIZE = 8

HELP_ROWS: tuple[tuple[tuple[str, str], ...], ...] = (
    (
        ("Right", "forward 1 byte"),
        ("Down", "forward 1 line"),
        ("PgDn", "forward 1 page"),
        ("Enter", "next difference"),
        ("Alt", "freeze top"),
    ),
    (
        ("Left", "back 1 byte"),
        ("Up", "back 1 line"),
        ("PgUp", "back 1 page"),
        ("Esc/q", "quit"),
        ("Ctrl", "freeze bottom"),
        ("t", "theme"),
    ),
)


@dataclass(frozen=True)
class ScreenSize:
    columns: int
    lines: int


def format_offset(offset: int) -> str:
    """Render a file offset as two 16-bit hex halves, e.g. ``0001 0A20:``."""
    return f"{offset >> 16:04X} {offset & 0xFFFF:04X}:"


def printable_char(value: int) -> str:
    return chr(value) if 0x20 <= value < 0x7F else "."


def hex_row(
    data: bytes,
    flags: Sequence[bool],
    offset: int,
    bytes_per_line: int,
    theme: UITheme,
) -> str:
    """Format one display row of hex pairs and ASCII characters.

    ``data`` holds the row's valid bytes (possibly fewer than
    ``bytes_per_line``); ``flags`` marks differing columns. Flagged columns
    past the end of ``data`` still get the diff color so missing bytes show.
    """
    hex_parts: list[str] = [theme.offset, format_offset(offset), theme.hex_bytes]
    ascii_parts: list[str] = [theme.ascii_bytes]
    for col in range(bytes_per_line):
        if col % GROUP_SIZE == 0:
            hex_parts.append(" ")
            if col:
                ascii_parts.append(" ")
        if col < len(data):
            cell = f"{data[col]:02X}"
            char = printable_char(data[col])
        else:
            cell = "  "
            char = " "
        if col < len(flags) and flags[col]:
            hex_parts.append(f"{theme.diff}{cell}{theme.hex_bytes}")
            ascii_parts.append(f"{theme.diff}{char}{theme.ascii_bytes}")
        else:
            hex_parts.append(cell)
            ascii_parts.append(char)
        hex_parts.append(" ")
    return "".join(hex_parts) + " " + "".join(ascii_parts) + theme.background


def view_rows(data: bytes, base_offset: int, frame: Frame, theme: UITheme) -> list[str]:
    """Format every display row for one file window."""
    geometry = frame.geometry
    rows: list[str] = []
    for row in range(geometry.lines_per_view):
        span = geometry.row_range(row)
        rows.append(
            hex_row(
                data[span.start : span.stop],
                frame.mask.flags[span.start : span.stop],
                base_offset + span.start,
                geometry.bytes_per_line,
                theme,
            )
        )
    return rows


def file_name_row(path: Path, theme: UITheme) -> str:
    return f"{theme.file_name}{path}{theme.background}"


def status_text(mask: DifferenceMask) -> str:
    if mask.both_empty:
        return "Both files exhausted"
    if mask.diff_count == 0:
        return "No differences on this page"
    if mask.diff_count == 1:
        return "1 difference on this page"
    return f"{mask.diff_count} differences on this page"


def status_row(frame: Frame, theme: UITheme) -> str:
    color = theme.status_alert if frame.mask.has_differences else theme.status
    offsets = f"top 0x{frame.top_offset:08X}  bottom 0x{frame.bottom_offset:08X}"
    return f"{color}{status_text(frame.mask)}{theme.status}  {offsets}{theme.background}"


def help_rows(theme: UITheme) -> list[str]:
    rows: list[str] = []
    for entries in HELP_ROWS:
        parts = [f"{theme.help_key}{key}{theme.help_dim} {label}" for key, label in entries]
        rows.append(" " + "  ".join(parts) + theme.background)
    return rows


def screen_rows(frame: Frame, theme: UITheme, size: ScreenSize, show_help: bool = True) -> list[str]:
    """Compose the full screen as rows padded to ``size.columns``.

    When the terminal is too short, help rows are dropped first and the rest
    is cut from the bottom.
    """
    body: list[str] = [file_name_row(frame.top_path, theme)]
    body.extend(view_rows(frame.top, frame.top_offset, frame, theme))
    body.append(theme.background)
    body.append(file_name_row(frame.bottom_path, theme))
    body.extend(view_rows(frame.bottom, frame.bottom_offset, frame, theme))
    body.append(theme.background)
    body.append(status_row(frame, theme))
    if show_help and len(body) + len(HELP_ROWS) <= size.lines:
        body.extend(help_rows(theme))

    width = max(1, size.columns)
    out: list[str] = []
    for text in body[: max(1, size.lines)]:
        row = pad_ansi_line(theme.background + text, width)
        out.append(row + theme.reset)
    return out


def render_screen(frame: Frame, theme: UITheme, size: ScreenSize, fd: int) -> None:
    """Clear the terminal and write one fully composed frame to ``fd``."""
    rows = screen_rows(frame, theme, size)
    # Last row omits the newline so the terminal never scrolls.
    payload = "\033[H\033[J" + "\r\n".join(rows)
    os.write(fd, payload.encode("utf-8", errors="replace"))


def render_plain(frame: Frame, theme: UITheme, columns: int) -> str:
    """Render one frame for non-interactive output (no help, no clearing)."""
    size = ScreenSize(columns=columns, lines=2 * frame.geometry.lines_per_view + 5)
    rows = screen_rows(frame, theme, size, show_help=False)
    if not theme.reset:
        rows = [row.rstrip() for row in rows]
    return "\n".join(rows) + "\n"
