"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- graph: A block graph builder backed by an in-memory block store
- engine: A selector engine reading from that graph
- make_document: Builds raw selector documents
- isolated_config: Strips IPLDSEL_* variables and cached config files
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from multiformats import CID

from ipldsel.compiler.config_loader import clear_config_cache
from ipldsel.kernel.domain.node import Block
from ipldsel.kernel.traversal.engine import SelectorEngine
from ipldsel.stdlib.adapters.codecs import create_block, default_codec_registry
from ipldsel.stdlib.adapters.memory import InMemoryBlockStore


class BlockGraph:
    """Builds blocks bottom-up and keeps them in an in-memory store."""

    def __init__(self) -> None:
        self.store = InMemoryBlockStore()
        self.blocks: dict[CID, Block] = {}

    def add(self, value: Any, codec: str = "dag-cbor") -> CID:
        block = create_block(value, codec=codec)
        self.store.put(block)
        self.blocks[block.cid] = block
        return block.cid

    def detached(self, value: Any) -> CID:
        """Identifier of a block that is never stored."""
        return create_block(value).cid

    def chain(self, length: int) -> list[CID]:
        """Linked list ``n0 -> n1 -> ...``; returns identifiers root first."""
        cid = self.add({"end": True, "depth": length - 1})
        cids = [cid]
        for depth in range(length - 2, -1, -1):
            cid = self.add({"next": cid, "depth": depth})
            cids.append(cid)
        return list(reversed(cids))


@pytest.fixture
def graph() -> BlockGraph:
    return BlockGraph()


@pytest.fixture
def make_document() -> Callable[..., dict[str, Any]]:
    """Build a raw selector document: ``make_document(root, *instructions)``."""

    def _make(root: CID, *selectors: dict[str, Any]) -> dict[str, Any]:
        return {"cidRootedSelector": {"root": str(root), "selectors": list(selectors)}}

    return _make


@pytest.fixture
def engine(graph: BlockGraph) -> SelectorEngine:
    return SelectorEngine(graph.store, default_codec_registry())


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the developer's environment out of configuration tests."""
    for name in list(os.environ):
        if name.startswith("IPLDSEL_"):
            monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
