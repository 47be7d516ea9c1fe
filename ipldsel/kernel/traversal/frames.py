"""Bookkeeping structures of a traversal: passes, frames, recursion contexts."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum

from ipldsel.kernel.domain.node import Node
from ipldsel.kernel.domain.selectors import RecursiveSelector, SelectorProgram


@dataclass(frozen=True, slots=True)
class RecursionContext:
    """An active recursive selector on the current branch.

    Attributes
    ----------
    selector:
        The recursive selector whose ``follow`` program is being repeated.
    depth:
        Passes left, counting the one in progress. ``None`` means unlimited.
    outer:
        Instructions following the recursive selector, applied once the
        recursion halts.
    """

    selector: RecursiveSelector
    depth: int | None
    outer: SelectorProgram

    @property
    def exhausted(self) -> bool:
        return self.depth is not None and self.depth <= 0

    def after_pass(self) -> RecursionContext:
        """Context for the next pass (one depth unit spent)."""
        if self.depth is None:
            return self
        return replace(self, depth=self.depth - 1)


@dataclass(slots=True)
class Frame:
    """Pending sibling nodes, with the state they were discovered in."""

    nodes: deque[Node]
    program: SelectorProgram
    recursion: RecursionContext | None = None


class PassStatus(Enum):
    RUNNING = "running"
    MATCHED = "matched"
    NO_MATCH = "no_match"
    RECURSE = "recurse"


@dataclass(slots=True)
class Pass:
    """Mutable state of one non-recursive step over a program copy.

    ``program`` shrinks as instructions are consumed. On ``NO_MATCH`` it still
    starts with the instruction that failed; on ``RECURSE`` it holds what
    follows the recursive selector stored in ``recursive``.
    """

    node: Node
    program: SelectorProgram
    start: Node = None
    status: PassStatus = PassStatus.RUNNING
    recursive: RecursiveSelector | None = None
    pending: list[Frame] = field(default_factory=list)
