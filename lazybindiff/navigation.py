"""Movement commands and the two-view navigation session.

``Navigator`` owns both file views and the current difference mask. Every
command mutates one or both views, recomputes the mask, corrects for
scrolling past the end of both files, and hands a ``Frame`` to the renderer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .difference import DifferenceEngine, DifferenceMask
from .file_view import BufferedFileView, StreamOpener, ViewGeometry, open_binary

logger = logging.getLogger(__name__)

STEP_BYTE = "byte"
STEP_LINE = "line"
STEP_PAGE = "page"

TARGET_TOP = "top"
TARGET_BOTTOM = "bottom"
TARGET_BOTH = "both"

_STEPS = frozenset({STEP_BYTE, STEP_LINE, STEP_PAGE})
_TARGETS = frozenset({TARGET_TOP, TARGET_BOTTOM, TARGET_BOTH})


@dataclass(frozen=True)
class MoveCommand:
    """Move one or both views by a byte, line, or page."""

    step: str = STEP_LINE
    forward: bool = True
    target: str = TARGET_BOTH

    def __post_init__(self) -> None:
        if self.step not in _STEPS:
            raise ValueError(f"unknown step size: {self.step!r}")
        if self.target not in _TARGETS:
            raise ValueError(f"unknown move target: {self.target!r}")

    @property
    def moves_top(self) -> bool:
        return self.target in {TARGET_TOP, TARGET_BOTH}

    @property
    def moves_bottom(self) -> bool:
        return self.target in {TARGET_BOTTOM, TARGET_BOTH}


@dataclass(frozen=True)
class NextDifferenceCommand:
    """Page both views forward until a page with differences shows up."""


NEXT_DIFFERENCE = NextDifferenceCommand()

Command = MoveCommand | NextDifferenceCommand


@dataclass(frozen=True)
class Frame:
    """Immutable snapshot of everything the screen needs to draw."""

    top_path: Path
    bottom_path: Path
    top: bytes
    bottom: bytes
    mask: DifferenceMask
    top_offset: int
    bottom_offset: int
    geometry: ViewGeometry


Renderer = Callable[[Frame], None]


def step_delta(command: MoveCommand, geometry: ViewGeometry) -> int:
    """Resolve the signed byte delta for ``command``."""
    if command.step == STEP_BYTE:
        size = 1
    elif command.step == STEP_LINE:
        size = geometry.bytes_per_line
    else:
        size = geometry.page_step
    return size if command.forward else -size


class Navigator:
    """Session object for one pair of files."""

    def __init__(
        self,
        top: BufferedFileView,
        bottom: BufferedFileView,
        geometry: ViewGeometry,
        renderer: Renderer | None = None,
    ) -> None:
        self._top = top
        self._bottom = bottom
        self._geometry = geometry
        self._engine = DifferenceEngine(geometry)
        self._renderer = renderer
        self._mask = self._engine.compute(top, bottom)

    @classmethod
    def open(
        cls,
        top_path: Path,
        bottom_path: Path,
        geometry: ViewGeometry | None = None,
        renderer: Renderer | None = None,
        opener: StreamOpener = open_binary,
    ) -> Navigator:
        """Open both files; ``OSError`` propagates with nothing left open."""
        geometry = geometry or ViewGeometry()
        top = BufferedFileView.open(top_path, geometry, opener)
        try:
            bottom = BufferedFileView.open(bottom_path, geometry, opener)
        except BaseException:
            top.close()
            raise
        logger.info("comparing %s with %s", top_path, bottom_path)
        return cls(top, bottom, geometry, renderer)

    @property
    def top(self) -> BufferedFileView:
        return self._top

    @property
    def bottom(self) -> BufferedFileView:
        return self._bottom

    @property
    def geometry(self) -> ViewGeometry:
        return self._geometry

    @property
    def mask(self) -> DifferenceMask:
        return self._mask

    def set_renderer(self, renderer: Renderer | None) -> None:
        self._renderer = renderer

    def handle_command(self, command: Command) -> DifferenceMask:
        """Apply ``command``, recompute differences, and redraw."""
        if isinstance(command, MoveCommand):
            delta = step_delta(command, self._geometry)
            if command.moves_top:
                self._top.move(delta)
            if command.moves_bottom:
                self._bottom.move(delta)
        elif isinstance(command, NextDifferenceCommand):
            self._scan_to_next_difference()
        else:
            raise TypeError(f"unsupported command: {command!r}")
        return self.redraw()

    def redraw(self) -> DifferenceMask:
        """Recompute the mask with boundary correction and notify the renderer."""
        self._recompute()
        self._correct_past_end()
        if self._renderer is not None:
            self._renderer(self.frame())
        return self._mask

    def frame(self) -> Frame:
        return Frame(
            top_path=self._top.path,
            bottom_path=self._bottom.path,
            top=self._top.valid_bytes(),
            bottom=self._bottom.valid_bytes(),
            mask=self._mask,
            top_offset=self._top.base_offset,
            bottom_offset=self._bottom.base_offset,
            geometry=self._geometry,
        )

    def shutdown(self) -> None:
        """Release both streams; later calls are no-ops."""
        try:
            self._top.close()
        finally:
            self._bottom.close()

    def __enter__(self) -> Navigator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _recompute(self) -> DifferenceMask:
        self._mask = self._engine.compute(self._top, self._bottom)
        return self._mask

    def _scan_to_next_difference(self) -> None:
        # Full-page scan: stops on any difference or when both files run out.
        capacity = self._geometry.capacity
        pages = 0
        while True:
            self._top.move(capacity)
            self._bottom.move(capacity)
            pages += 1
            if self._recompute().diff_count != 0:
                break
        logger.debug("next-difference scan advanced %d page(s), diff_count=%d", pages, self._mask.diff_count)

    def _correct_past_end(self) -> None:
        """Step both views back a page at a time while both windows are empty."""
        page = self._geometry.page_step
        while self._mask.both_empty:
            if self._top.base_offset == 0 and self._bottom.base_offset == 0:
                # Both files are empty; there is nothing earlier to show.
                break
            self._top.move(-page)
            self._bottom.move(-page)
            logger.debug(
                "both views past end; stepped back to %d/%d",
                self._top.base_offset,
                self._bottom.base_offset,
            )
            self._recompute()
