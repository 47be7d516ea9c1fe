"""In-memory implementation of BlockStore, mostly for testing."""

import asyncio
from typing import Any

from multiformats import CID

from ipldsel.kernel.domain.node import Block, cid_text
from ipldsel.kernel.exceptions import BlockNotFoundError
from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.stdlib.adapters.base import IpldSelAdapter

__all__ = ["InMemoryBlockStore"]


class InMemoryBlockStore(IpldSelAdapter, BlockStore, alias="memory", port="block_store"):
    """In-memory block store.

    Features:
    - Dict-backed storage keyed by CID
    - Access history tracking (which blocks were requested, in order)
    - Delay simulation
    """

    def __init__(
        self,
        blocks: list[Block] | None = None,
        delay_seconds: float = 0.0,
        **kwargs: Any,
    ) -> None:
        """Initialize the store.

        Parameters
        ----------
        blocks : list[Block] | None
            Blocks to preload.
        delay_seconds : float
            Simulated latency in seconds for reads. Default: 0.0.
        **kwargs : Any
            Additional options for forward compatibility.
        """
        self.delay_seconds = delay_seconds
        self.storage: dict[CID, Block] = {}
        self.access_history: list[dict[str, Any]] = []
        for block in blocks or []:
            self.put(block)

    def put(self, block: Block) -> CID:
        """Store a block (idempotent) and return its identifier."""
        self.storage[block.cid] = block
        return block.cid

    async def aput(self, block: Block) -> CID:
        return self.put(block)

    async def aget(self, cid: CID) -> Block:
        """Fetch a block.

        Raises
        ------
        BlockNotFoundError
            If the block was never stored
        """
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        block = self.storage.get(cid)
        self.access_history.append(
            {"operation": "get", "cid": cid_text(cid), "found": block is not None}
        )
        if block is None:
            raise BlockNotFoundError(cid, store="memory")
        return block

    async def ahas(self, cid: CID) -> bool:
        return cid in self.storage

    def get_access_history(self) -> list[dict[str, Any]]:
        return list(self.access_history)

    def requested(self) -> list[str]:
        """Identifiers requested so far, in order."""
        return [entry["cid"] for entry in self.access_history]

    def reset(self) -> None:
        self.storage.clear()
        self.access_history.clear()

    def __len__(self) -> int:
        return len(self.storage)
