"""The lazy output stream of a selector evaluation."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from ipldsel.kernel.domain.node import cid_text
from ipldsel.kernel.domain.selectors import SelectorProgram, program_to_raw

if TYPE_CHECKING:
    from ipldsel.kernel.domain.node import Block
    from ipldsel.kernel.traversal.engine import Traversal


class SelectionOutcome(StrEnum):
    """Terminal state of a traversal."""

    PENDING = "pending"
    RESOLVED = "resolved"
    UNRESOLVED = "unresolved"
    FAILED = "failed"


@dataclass(slots=True)
class SelectionResult:
    """Fully drained selection."""

    blocks: list[Block] = field(default_factory=list)
    outcome: SelectionOutcome = SelectionOutcome.RESOLVED
    unresolved: SelectorProgram = ()

    @property
    def cids(self) -> list[str]:
        return [cid_text(block.cid) for block in self.blocks]

    @property
    def is_resolved(self) -> bool:
        return self.outcome is SelectionOutcome.RESOLVED

    def to_dict(self) -> dict[str, Any]:
        return {
            "blocks": self.cids,
            "outcome": str(self.outcome),
            "unresolved": program_to_raw(self.unresolved),
        }


class Selection:
    """Pull-based async iterator over the blocks a traversal visits.

    Nothing is fetched until the first item is requested, and each request
    advances the traversal only as far as the next block. Once iteration
    ends, :attr:`outcome` tells a full match from an unresolved one and
    :attr:`unresolved` holds the leftover program.

    Examples
    --------
    Example usage::

        selection = engine.select(document)
        async for block in selection:
            print(block.cid)
        if selection.outcome is SelectionOutcome.UNRESOLVED:
            print(selection.unresolved)
    """

    def __init__(self, traversal: Traversal) -> None:
        self._traversal = traversal
        self._iterator = traversal.run()

    def __aiter__(self) -> AsyncIterator[Block]:
        return self

    async def __anext__(self) -> Block:
        return await self._iterator.__anext__()

    async def aclose(self) -> None:
        """Stop the traversal early."""
        await self._iterator.aclose()

    @property
    def outcome(self) -> SelectionOutcome:
        return self._traversal.outcome

    @property
    def unresolved(self) -> SelectorProgram:
        return self._traversal.leftover if self.outcome is SelectionOutcome.UNRESOLVED else ()

    @property
    def blocks_emitted(self) -> int:
        return self._traversal.blocks_emitted

    async def collect(self) -> SelectionResult:
        """Drain the selection into a :class:`SelectionResult`."""
        blocks = [block async for block in self]
        return SelectionResult(blocks=blocks, outcome=self.outcome, unresolved=self.unresolved)
