"""Command-line front door for lazybindiff.

Parses CLI options, merges them with persisted config, opens both files, and
then either prints one screen (``--nopager``) or starts the interactive view.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .config import MAX_LINES_PER_VIEW, load_lines_per_view, load_style_name, load_theme_name
from .file_view import ViewGeometry
from .navigation import Navigator
from .render import render_plain
from .runtime import build_theme, run_session
from .ui_theme import available_theme_names, normalize_theme_name

EXIT_OK = 0
EXIT_FAILURE = 1
PACKAGE_LOGGER = "lazybindiff"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ArgumentParser(argparse.ArgumentParser):
    """argparse variant whose usage errors exit with status 1."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _lines_per_view(value: str) -> int:
    """argparse type for the hex rows shown per file."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 1 or parsed > MAX_LINES_PER_VIEW:
        raise argparse.ArgumentTypeError(f"value must be between 1 and {MAX_LINES_PER_VIEW}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="lazybindiff",
        description="Compare two binary files side by side in hex and ASCII.",
    )
    parser.add_argument("file1", type=Path, help="File shown in the top view.")
    parser.add_argument("file2", type=Path, help="File shown in the bottom view.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style used to color offset/hex/ASCII columns.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--lines",
        type=_lines_per_view,
        default=None,
        help="Hex rows shown per file (default: config value or 9).",
    )
    parser.add_argument("--nopager", action="store_true", help="Print the first screen and exit.")
    parser.add_argument("--log-file", type=Path, default=None, help="Append diagnostic log records to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Minimum level written to --log-file.",
    )
    return parser


def configure_logging(log_file: Path | None, level: str) -> None:
    """Send log records to ``log_file``; without one, logging stays unconfigured.

    The interactive view owns the terminal, so records never go to stderr.
    """
    if log_file is None:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level))


def _open_failure_message(exc: OSError, fallback: Path) -> str:
    target = exc.filename if exc.filename is not None else fallback
    reason = exc.strerror or str(exc)
    return f"lazybindiff: cannot open {target}: {reason}"


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run a comparison; returns the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    theme_name = normalize_theme_name(args.theme or load_theme_name())
    style_name = args.style or load_style_name()
    lines = args.lines if args.lines is not None else load_lines_per_view()
    geometry = ViewGeometry(lines_per_view=lines)

    try:
        navigator = Navigator.open(args.file1, args.file2, geometry)
    except OSError as exc:
        sys.stderr.write(_open_failure_message(exc, args.file1) + "\n")
        return EXIT_FAILURE

    with navigator:
        interactive = sys.stdin.isatty() and sys.stdout.isatty()
        if args.nopager or not interactive:
            navigator.redraw()
            no_color = args.no_color or not sys.stdout.isatty()
            theme = build_theme(theme_name, style_name, no_color=no_color)
            columns = shutil.get_terminal_size((80, 24)).columns
            sys.stdout.write(render_plain(navigator.frame(), theme, columns))
            return EXIT_OK

        run_session(
            navigator,
            sys.stdin.fileno(),
            sys.stdout.fileno(),
            theme_name=theme_name,
            style_name=style_name,
            no_color=args.no_color,
        )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
