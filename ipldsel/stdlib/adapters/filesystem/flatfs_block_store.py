"""Directory-backed block store.

Each block is one file named by the base32 text form of its CID, e.g.
``blocks/bafyreib...``. Reads go through aiofiles so a traversal never blocks
the event loop while waiting on disk.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import aiofiles
from multiformats import CID

from ipldsel.kernel.domain.node import Block, cid_text
from ipldsel.kernel.exceptions import BlockNotFoundError, ConfigurationError
from ipldsel.kernel.logging import get_logger
from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.stdlib.adapters.base import IpldSelAdapter

logger = get_logger(__name__)

__all__ = ["FlatFsBlockStore"]


class FlatFsBlockStore(IpldSelAdapter, BlockStore, alias="flatfs", port="block_store"):
    """Block store reading one file per block from a directory."""

    def __init__(self, path: str | Path | None = None, create: bool = False, **kwargs: Any) -> None:
        """Initialize the store.

        Parameters
        ----------
        path : str | Path
            Directory holding the block files.
        create : bool
            Create the directory if it does not exist.

        Raises
        ------
        ConfigurationError
            If no path is given or the directory does not exist.
        """
        if path is None:
            raise ConfigurationError("flatfs", "a block directory path is required")
        self.__directory = Path(path).expanduser()
        if create:
            self.__directory.mkdir(parents=True, exist_ok=True)
        if not self.__directory.is_dir():
            raise ConfigurationError("flatfs", f"directory not found: {self.__directory}")

    @property
    def directory(self) -> Path:
        return self.__directory

    def path_for(self, cid: CID) -> Path:
        return self.__directory / cid_text(cid)

    async def aget(self, cid: CID) -> Block:
        """Read a block file.

        Raises
        ------
        BlockNotFoundError
            If there is no file for ``cid``
        """
        file_path = self.path_for(cid)
        try:
            async with aiofiles.open(file_path, "rb") as f:
                data = await f.read()
        except FileNotFoundError as e:
            raise BlockNotFoundError(cid, store=str(self.__directory)) from e
        return Block(cid=cid, data=data)

    async def ahas(self, cid: CID) -> bool:
        return self.path_for(cid).is_file()

    async def aput(self, block: Block) -> CID:
        """Write a block file; existing blocks are left untouched."""
        file_path = self.path_for(block.cid)
        if file_path.exists():
            return block.cid
        tmp_path = file_path.with_name(f".{file_path.name}.tmp")
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(block.data)
            os.replace(tmp_path, file_path)
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.debug(
            "Stored block {cid} ({size} bytes)", cid=cid_text(block.cid), size=len(block.data)
        )
        return block.cid

    def list_cids(self) -> list[str]:
        return sorted(p.name for p in self.__directory.iterdir() if not p.name.startswith("."))
