"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the hex view chrome and diff highlighting. A
Pygments style, when selected, only recolors the offset/hex/ASCII columns.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    background: str
    file_name: str
    offset: str
    hex_bytes: str
    ascii_bytes: str
    diff: str
    status: str
    status_alert: str
    help_key: str
    help_dim: str

    def with_columns(self, offset: str, hex_bytes: str, ascii_bytes: str) -> UITheme:
        """Return a copy with the three data-column colors replaced."""
        return replace(self, offset=offset, hex_bytes=hex_bytes, ascii_bytes=ascii_bytes)


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    background="\033[0;37;44m",
    file_name="\033[0;30;47m",
    offset="\033[0;37;44m",
    hex_bytes="\033[0;97;44m",
    ascii_bytes="\033[0;97;44m",
    diff="\033[1;91;44m",
    status="\033[0;37;44m",
    status_alert="\033[1;93;44m",
    help_key="\033[1;97;44m",
    help_dim="\033[0;37;44m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    background="\033[0m",
    file_name="\033[1;38;5;16;48;5;45m",
    offset="\033[0;38;5;73m",
    hex_bytes="\033[0;38;5;153m",
    ascii_bytes="\033[0;38;5;117m",
    diff="\033[1;38;5;215;48;5;52m",
    status="\033[0;38;5;110m",
    status_alert="\033[1;38;5;215m",
    help_key="\033[0;38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    background="",
    file_name="",
    offset="",
    hex_bytes="",
    ascii_bytes="",
    diff="",
    status="",
    status_alert="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def next_theme_name(name: str | None) -> str:
    """Return the theme after ``name`` in sorted order, wrapping around."""
    names = available_theme_names()
    current = normalize_theme_name(name)
    return names[(names.index(current) + 1) % len(names)]


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "next_theme_name",
    "normalize_theme_name",
    "resolve_theme",
]
