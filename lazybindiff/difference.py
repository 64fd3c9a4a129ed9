"""Offset-aligned byte comparison between two file views."""

from __future__ import annotations

from dataclasses import dataclass

from .file_view import BufferedFileView, ViewGeometry

BOTH_EMPTY = -1


@dataclass(frozen=True)
class DifferenceMask:
    """Per-position difference flags for the current pair of windows.

    ``diff_count`` is ``BOTH_EMPTY`` when neither view holds any bytes.
    """

    flags: tuple[bool, ...]
    diff_count: int

    @property
    def both_empty(self) -> bool:
        return self.diff_count == BOTH_EMPTY

    @property
    def has_differences(self) -> bool:
        return self.diff_count > 0

    def is_different(self, index: int) -> bool:
        return 0 <= index < len(self.flags) and self.flags[index]

    @classmethod
    def empty(cls, capacity: int) -> DifferenceMask:
        return cls(flags=(False,) * capacity, diff_count=BOTH_EMPTY)


class DifferenceEngine:
    """Builds a fresh ``DifferenceMask`` from two views on every call."""

    def __init__(self, geometry: ViewGeometry) -> None:
        self.geometry = geometry

    def compute(self, view_a: BufferedFileView, view_b: BufferedFileView) -> DifferenceMask:
        flags = [False] * self.geometry.capacity
        buf_a = view_a.get_buffer()
        buf_b = view_b.get_buffer()
        len_a = view_a.get_valid_length()
        len_b = view_b.get_valid_length()

        different = 0
        overlap = min(len_a, len_b)
        for i in range(overlap):
            if buf_a[i] != buf_b[i]:
                flags[i] = True
                different += 1

        # Bytes present in only one view always count as different.
        tail_end = max(len_a, len_b)
        for i in range(overlap, tail_end):
            flags[i] = True
        different += tail_end - overlap

        if tail_end == 0:
            different = BOTH_EMPTY
        return DifferenceMask(flags=tuple(flags), diff_count=different)
