"""Port interfaces consumed by the traversal engine."""

from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.kernel.ports.codec import Codec, CodecRegistry

__all__ = [
    "BlockStore",
    "Codec",
    "CodecRegistry",
]
