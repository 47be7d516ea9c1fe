from ipldsel.stdlib.adapters.filesystem.flatfs_block_store import FlatFsBlockStore

__all__ = ["FlatFsBlockStore"]
