"""Fixed-capacity read windows onto binary files.

``BufferedFileView`` owns one open stream plus the bytes currently visible.
``ViewGeometry`` describes how that flat buffer maps onto display rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

DEFAULT_LINES_PER_VIEW = 9
DEFAULT_BYTES_PER_LINE = 16

StreamOpener = Callable[[Path], BinaryIO]


@dataclass(frozen=True)
class ViewGeometry:
    """Row/column shape shared by both views and the difference mask."""

    lines_per_view: int = DEFAULT_LINES_PER_VIEW
    bytes_per_line: int = DEFAULT_BYTES_PER_LINE

    def __post_init__(self) -> None:
        if self.lines_per_view < 1:
            raise ValueError(f"lines_per_view must be >= 1, got {self.lines_per_view}")
        if self.bytes_per_line < 1:
            raise ValueError(f"bytes_per_line must be >= 1, got {self.bytes_per_line}")

    @property
    def capacity(self) -> int:
        """Total bytes held by one view buffer."""
        return self.lines_per_view * self.bytes_per_line

    @property
    def page_step(self) -> int:
        """Bytes moved by one page; one line stays visible across the jump."""
        return max(1, self.capacity - self.bytes_per_line)

    def row_col(self, index: int) -> tuple[int, int]:
        """Map a flat buffer index onto its display ``(row, column)``."""
        return divmod(index, self.bytes_per_line)

    def row_range(self, row: int) -> range:
        """Return flat buffer indices covered by display ``row``."""
        start = row * self.bytes_per_line
        return range(start, start + self.bytes_per_line)


def open_binary(path: Path) -> BinaryIO:
    """Default stream opener: buffered binary read mode."""
    return open(path, "rb")


class BufferedFileView:
    """One file's visible window: stream handle, base offset, and buffer.

    The buffer always has exactly ``geometry.capacity`` bytes. Only the first
    ``valid_length`` of them came from the last read; the rest are zeroed.
    """

    def __init__(self, path: Path, stream: BinaryIO, geometry: ViewGeometry) -> None:
        self.path = path
        self.geometry = geometry
        self._stream: BinaryIO | None = stream
        self._buffer = bytearray(geometry.capacity)
        self._base_offset = 0
        self._valid_length = 0

    @classmethod
    def open(
        cls,
        path: Path,
        geometry: ViewGeometry | None = None,
        opener: StreamOpener = open_binary,
    ) -> BufferedFileView:
        """Open ``path`` and read its first window.

        ``OSError`` from the opener propagates unchanged; callers treat it as
        fatal for the session.
        """
        stream = opener(path)
        view = cls(path, stream, geometry or ViewGeometry())
        view._fill()
        logger.debug("opened %s (%d bytes in first window)", path, view._valid_length)
        return view

    @property
    def base_offset(self) -> int:
        return self._base_offset

    @property
    def closed(self) -> bool:
        return self._stream is None

    def get_buffer(self) -> memoryview:
        """Return a read-only view of the whole fixed-capacity buffer."""
        return memoryview(self._buffer).toreadonly()

    def get_valid_length(self) -> int:
        return self._valid_length

    def valid_bytes(self) -> bytes:
        """Copy of the bytes populated by the last read."""
        return bytes(self._buffer[: self._valid_length])

    def move(self, delta: int) -> None:
        """Shift the window by ``delta`` bytes and refill the buffer.

        The resulting offset is clamped at zero. Read failures leave an empty
        window instead of raising.
        """
        self._base_offset = max(self._base_offset + delta, 0)
        self._fill()

    def close(self) -> None:
        """Release the stream. Safe to call more than once."""
        stream = self._stream
        self._stream = None
        if stream is not None:
            stream.close()

    def _fill(self) -> None:
        """Seek to the base offset and read up to capacity bytes."""
        count = 0
        if self._stream is not None:
            try:
                self._stream.seek(self._base_offset)
                count = self._stream.readinto(self._buffer) or 0
            except (OSError, ValueError) as exc:
                logger.warning("read failed for %s at offset %d: %s", self.path, self._base_offset, exc)
                count = 0
        count = max(0, min(count, len(self._buffer)))
        self._buffer[count:] = bytes(len(self._buffer) - count)
        self._valid_length = count

    def __repr__(self) -> str:
        return (
            f"BufferedFileView(path={str(self.path)!r}, base_offset={self._base_offset}, "
            f"valid_length={self._valid_length})"
        )
