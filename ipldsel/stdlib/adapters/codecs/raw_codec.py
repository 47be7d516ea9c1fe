"""Raw codec: block content is an opaque byte string (a scalar node)."""

from __future__ import annotations

from ipldsel.kernel.domain.node import Node
from ipldsel.kernel.ports.codec import Codec
from ipldsel.stdlib.adapters.base import IpldSelAdapter


class RawCodec(IpldSelAdapter, Codec, alias="raw", port="codec"):
    name = "raw"

    def decode(self, data: bytes) -> Node:
        return bytes(data)

    def encode(self, value: bytes) -> bytes:
        return bytes(value)
