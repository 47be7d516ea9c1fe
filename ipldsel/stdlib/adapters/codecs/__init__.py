"""Codec adapters and helpers for building blocks."""

from __future__ import annotations

from typing import Any

from multiformats import CID, multihash

from ipldsel.kernel.domain.node import Block
from ipldsel.kernel.ports.codec import CodecRegistry
from ipldsel.stdlib.adapters.base import resolve_adapter
from ipldsel.stdlib.adapters.codecs.dag_cbor_codec import DagCborCodec
from ipldsel.stdlib.adapters.codecs.dag_json_codec import DagJsonCodec
from ipldsel.stdlib.adapters.codecs.raw_codec import RawCodec

DEFAULT_CODECS = ("dag-cbor", "dag-json", "raw")

__all__ = [
    "DEFAULT_CODECS",
    "DagCborCodec",
    "DagJsonCodec",
    "RawCodec",
    "create_block",
    "default_codec_registry",
]


def default_codec_registry(names: list[str] | tuple[str, ...] = DEFAULT_CODECS) -> CodecRegistry:
    """Build a registry holding the named codec adapters.

    Raises
    ------
    ResolveError
        If a name does not match a codec adapter
    """
    return CodecRegistry([resolve_adapter(name, port="codec")() for name in names])


def create_block(value: Any, codec: str = "dag-cbor", hash_function: str = "sha2-256") -> Block:
    """Encode ``value`` and address it with a CIDv1.

    Examples
    --------
    >>> leaf = create_block({"name": "leaf"})
    >>> parent = create_block({"child": leaf.cid})
    >>> parent.codec
    'dag-cbor'
    """
    encoder = resolve_adapter(codec, port="codec")()
    data = encoder.encode(value)
    digest = multihash.digest(data, hash_function)
    return Block(cid=CID("base32", 1, codec, digest), data=data)
