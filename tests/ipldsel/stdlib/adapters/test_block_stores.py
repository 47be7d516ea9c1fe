"""Tests for block store adapters."""

import os
import time

import pytest

from ipldsel.kernel.config.models import StoreConfig
from ipldsel.kernel.exceptions import BlockNotFoundError, ConfigurationError, ResolveError
from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.stdlib.adapters.base import IpldSelAdapter, resolve_adapter
from ipldsel.stdlib.adapters.codecs import create_block, default_codec_registry
from ipldsel.stdlib.adapters.filesystem import FlatFsBlockStore
from ipldsel.stdlib.adapters.memory import InMemoryBlockStore
from ipldsel.stdlib.adapters.stores import create_block_store


class TestInMemoryBlockStore:
    """Test cases for InMemoryBlockStore."""

    @pytest.mark.asyncio()
    async def test_get_stored_block(self) -> None:
        block = create_block({"x": 1})
        store = InMemoryBlockStore([block])

        assert await store.aget(block.cid) == block
        assert await store.ahas(block.cid)
        assert len(store) == 1

    @pytest.mark.asyncio()
    async def test_missing_block(self) -> None:
        store = InMemoryBlockStore()
        cid = create_block({"x": 1}).cid

        with pytest.raises(BlockNotFoundError) as exc_info:
            await store.aget(cid)
        assert exc_info.value.cid == cid
        assert not await store.ahas(cid)

    @pytest.mark.asyncio()
    async def test_access_history(self) -> None:
        present = create_block({"x": 1})
        absent = create_block({"x": 2})
        store = InMemoryBlockStore([present])

        await store.aget(present.cid)
        with pytest.raises(BlockNotFoundError):
            await store.aget(absent.cid)

        assert store.requested() == [str(present.cid), str(absent.cid)]
        assert [entry["found"] for entry in store.get_access_history()] == [True, False]

    @pytest.mark.asyncio()
    async def test_put_is_idempotent(self) -> None:
        block = create_block({"x": 1})
        store = InMemoryBlockStore()

        await store.aput(block)
        await store.aput(block)

        assert len(store) == 1

    @pytest.mark.asyncio()
    async def test_reset(self) -> None:
        block = create_block({"x": 1})
        store = InMemoryBlockStore([block])
        await store.aget(block.cid)

        store.reset()

        assert len(store) == 0
        assert store.requested() == []

    @pytest.mark.asyncio()
    @pytest.mark.slow
    async def test_delay(self) -> None:
        block = create_block({"x": 1})
        store = InMemoryBlockStore([block], delay_seconds=0.05)

        start = time.monotonic()
        await store.aget(block.cid)

        assert time.monotonic() - start >= 0.04


class TestFlatFsBlockStore:
    @pytest.mark.asyncio()
    async def test_put_then_get(self, tmp_path) -> None:
        store = FlatFsBlockStore(tmp_path)
        block = create_block({"x": 1})

        await store.aput(block)

        assert (tmp_path / str(block.cid)).read_bytes() == block.data
        assert await store.aget(block.cid) == block
        assert await store.ahas(block.cid)
        assert store.list_cids() == [str(block.cid)]

    @pytest.mark.asyncio()
    async def test_reads_files_written_by_other_tools(self, tmp_path) -> None:
        block = create_block({"x": 1})
        (tmp_path / str(block.cid)).write_bytes(block.data)

        assert await FlatFsBlockStore(str(tmp_path)).aget(block.cid) == block

    @pytest.mark.asyncio()
    async def test_finds_blocks_through_decoded_links(self, tmp_path) -> None:
        store = FlatFsBlockStore(tmp_path)
        leaf = create_block({"name": "leaf"})
        parent = create_block({"child": leaf.cid})
        await store.aput(leaf)
        await store.aput(parent)

        link = default_codec_registry().decode(await store.aget(parent.cid))["child"]

        assert await store.aget(link) == leaf
        assert store.path_for(link).name == str(leaf.cid)

    @pytest.mark.asyncio()
    async def test_failed_write_leaves_no_temporary_file(self, tmp_path, monkeypatch) -> None:
        store = FlatFsBlockStore(tmp_path)

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(OSError, match="disk full"):
            await store.aput(create_block({"x": 1}))
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio()
    async def test_missing_block(self, tmp_path) -> None:
        store = FlatFsBlockStore(tmp_path)
        cid = create_block({"x": 1}).cid

        with pytest.raises(BlockNotFoundError) as exc_info:
            await store.aget(cid)
        assert str(tmp_path) in str(exc_info.value)
        assert not await store.ahas(cid)

    def test_path_required(self) -> None:
        with pytest.raises(ConfigurationError):
            FlatFsBlockStore()

    def test_directory_must_exist(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError):
            FlatFsBlockStore(tmp_path / "missing")

    def test_create(self, tmp_path) -> None:
        store = FlatFsBlockStore(tmp_path / "new" / "blocks", create=True)

        assert store.directory.is_dir()
        assert store.list_cids() == []

    def test_satisfies_the_port(self, tmp_path) -> None:
        assert isinstance(FlatFsBlockStore(tmp_path), BlockStore)


class TestAdapterRegistry:
    def test_aliases_are_registered(self) -> None:
        resolve_adapter("memory")
        assert "block_store:memory" in IpldSelAdapter._registry
        assert "block_store:flatfs" in IpldSelAdapter._registry
        assert "codec:dag-cbor" in IpldSelAdapter._registry

    def test_resolve_by_alias_and_class_name(self) -> None:
        assert resolve_adapter("memory", port="block_store") is InMemoryBlockStore
        assert resolve_adapter("FlatFsBlockStore") is FlatFsBlockStore

    def test_unknown_alias(self) -> None:
        with pytest.raises(ResolveError) as exc_info:
            resolve_adapter("s3")
        assert "memory" in str(exc_info.value)


class TestCreateBlockStore:
    def test_memory(self) -> None:
        assert isinstance(create_block_store(StoreConfig(adapter="memory")), InMemoryBlockStore)

    def test_flatfs_with_path(self, tmp_path) -> None:
        store = create_block_store(StoreConfig(adapter="flatfs", path=str(tmp_path)))

        assert isinstance(store, FlatFsBlockStore)
        assert store.directory == tmp_path

    def test_flatfs_options(self, tmp_path) -> None:
        target = tmp_path / "blocks"
        store = create_block_store(
            StoreConfig(adapter="flatfs", path=str(target), options={"create": True})
        )

        assert store.directory == target

    def test_flatfs_without_path(self) -> None:
        with pytest.raises(ConfigurationError):
            create_block_store(StoreConfig(adapter="flatfs"))

    def test_codec_is_not_a_block_store(self) -> None:
        with pytest.raises(ConfigurationError):
            create_block_store(StoreConfig(adapter="raw"))

    def test_empty_adapter(self) -> None:
        with pytest.raises(ConfigurationError):
            StoreConfig(adapter="")
