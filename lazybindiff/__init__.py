"""Public package surface for lazybindiff.

Exports ``main`` for programmatic CLI invocation plus the comparison core:
``BufferedFileView``, ``DifferenceEngine``, and ``Navigator``.
"""

from __future__ import annotations

from .difference import BOTH_EMPTY, DifferenceEngine, DifferenceMask
from .file_view import BufferedFileView, ViewGeometry
from .navigation import NEXT_DIFFERENCE, Frame, MoveCommand, Navigator


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "BOTH_EMPTY",
    "BufferedFileView",
    "DifferenceEngine",
    "DifferenceMask",
    "Frame",
    "MoveCommand",
    "NEXT_DIFFERENCE",
    "Navigator",
    "ViewGeometry",
    "main",
]
