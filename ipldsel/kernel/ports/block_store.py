"""Block store port definition.

The traversal engine only ever reads blocks. Where they come from (a local
directory, memory, a network exchange, a cache) is up to the adapter.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from multiformats import CID

    from ipldsel.kernel.domain.node import Block


@runtime_checkable
class BlockStore(Protocol):
    """Port for content-addressed block retrieval."""

    @abstractmethod
    async def aget(self, cid: "CID") -> "Block":
        """Fetch the block addressed by ``cid``.

        Parameters
        ----------
        cid : CID
            Identifier of the block

        Returns
        -------
        Block
            The block with its raw bytes

        Raises
        ------
        BlockNotFoundError
            If the block is not available from this store
        """
        ...

    @abstractmethod
    async def ahas(self, cid: "CID") -> bool:
        """Check whether the block addressed by ``cid`` is available."""
        ...
