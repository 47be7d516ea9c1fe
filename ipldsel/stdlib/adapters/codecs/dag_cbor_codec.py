"""DAG-CBOR codec backed by the ``dag-cbor`` library."""

from __future__ import annotations

from typing import Any

import dag_cbor

from ipldsel.kernel.domain.node import Node
from ipldsel.kernel.exceptions import DecodeError
from ipldsel.kernel.ports.codec import Codec
from ipldsel.stdlib.adapters.base import IpldSelAdapter


class DagCborCodec(IpldSelAdapter, Codec, alias="dag-cbor", port="codec"):
    """Binary codec; links are CBOR tag 42 and decode to ``CID`` values."""

    name = "dag-cbor"

    def decode(self, data: bytes) -> Node:
        try:
            return dag_cbor.decode(data)
        except Exception as e:  # dag_cbor raises a family of decoding errors
            raise DecodeError(self.name, str(e)) from e

    def encode(self, value: Any) -> bytes:
        return dag_cbor.encode(value)
