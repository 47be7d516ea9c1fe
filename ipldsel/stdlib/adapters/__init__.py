"""Block store and codec adapters.

Importing this package registers every adapter alias (``memory``, ``flatfs``,
``dag-cbor``, ``dag-json``, ``raw``).
"""

from ipldsel.stdlib.adapters.base import IpldSelAdapter, resolve_adapter
from ipldsel.stdlib.adapters.codecs import (
    DagCborCodec,
    DagJsonCodec,
    RawCodec,
    create_block,
    default_codec_registry,
)
from ipldsel.stdlib.adapters.filesystem import FlatFsBlockStore
from ipldsel.stdlib.adapters.memory import InMemoryBlockStore
from ipldsel.stdlib.adapters.stores import create_block_store

__all__ = [
    "DagCborCodec",
    "DagJsonCodec",
    "FlatFsBlockStore",
    "InMemoryBlockStore",
    "IpldSelAdapter",
    "RawCodec",
    "create_block",
    "create_block_store",
    "default_codec_registry",
    "resolve_adapter",
]
