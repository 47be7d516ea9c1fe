"""Codec port definition.

A codec turns the raw bytes of a block into a decoded node. Codecs are
pluggable: the engine picks one per block from the multicodec carried in the
block's identifier, through a :class:`CodecRegistry`.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ipldsel.kernel.exceptions import DecodeError

if TYPE_CHECKING:
    from ipldsel.kernel.domain.node import Block, Node


@runtime_checkable
class Codec(Protocol):
    """Port for decoding block content."""

    name: str
    """Multicodec name handled by this codec (e.g. ``dag-cbor``)."""

    @abstractmethod
    def decode(self, data: bytes) -> Node:
        """Decode raw bytes into a node.

        Raises
        ------
        DecodeError
            If the bytes are malformed for this codec
        """
        ...


class CodecRegistry:
    """Codecs keyed by multicodec name.

    Examples
    --------
    >>> registry = CodecRegistry()
    >>> registry.names()
    []
    """

    def __init__(self, codecs: list[Codec] | None = None) -> None:
        self._codecs: dict[str, Codec] = {}
        for codec in codecs or []:
            self.register(codec)

    def register(self, codec: Codec) -> None:
        self._codecs[codec.name] = codec

    def get(self, name: str) -> Codec:
        try:
            return self._codecs[name]
        except KeyError:
            available = ", ".join(sorted(self._codecs)) or "none"
            raise DecodeError(name, f"no codec registered. Available: {available}") from None

    def names(self) -> list[str]:
        return sorted(self._codecs)

    def decode(self, block: Block) -> Node:
        """Decode ``block`` with the codec named by its identifier."""
        codec = self.get(block.codec)
        try:
            return codec.decode(block.data)
        except DecodeError as e:
            if e.cid is None:
                raise DecodeError(e.codec, e.reason, cid=block.cid) from e
            raise
