"""Traversal engine and its output stream."""

from ipldsel.kernel.traversal.engine import SelectorEngine, Traversal
from ipldsel.kernel.traversal.frames import Frame, Pass, PassStatus, RecursionContext
from ipldsel.kernel.traversal.selection import Selection, SelectionOutcome, SelectionResult

__all__ = [
    "Frame",
    "Pass",
    "PassStatus",
    "RecursionContext",
    "Selection",
    "SelectionOutcome",
    "SelectionResult",
    "SelectorEngine",
    "Traversal",
]
