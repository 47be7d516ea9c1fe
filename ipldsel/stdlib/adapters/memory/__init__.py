from ipldsel.stdlib.adapters.memory.in_memory_block_store import InMemoryBlockStore

__all__ = ["InMemoryBlockStore"]
