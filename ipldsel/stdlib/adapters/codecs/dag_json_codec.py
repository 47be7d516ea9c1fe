"""DAG-JSON codec.

Plain JSON plus two reserved single-key shapes:

- ``{"/": "<cid>"}`` is a link,
- ``{"/": {"bytes": "<base64, unpadded>"}}`` is a byte string.
"""

from __future__ import annotations

import base64
import json
from typing import Any

from multiformats import CID

from ipldsel.kernel.domain.node import Node
from ipldsel.kernel.exceptions import DecodeError
from ipldsel.kernel.ports.codec import Codec
from ipldsel.stdlib.adapters.base import IpldSelAdapter


def _object_hook(obj: dict[str, Any]) -> Any:
    if len(obj) != 1 or "/" not in obj:
        return obj
    value = obj["/"]
    if isinstance(value, str):
        return CID.decode(value)
    if isinstance(value, dict) and set(value) == {"bytes"}:
        encoded = value["bytes"]
        return base64.b64decode(encoded + "=" * (-len(encoded) % 4))
    return obj


def _to_json(value: Any) -> Any:
    if isinstance(value, CID):
        return {"/": str(value)}
    if isinstance(value, bytes):
        return {"/": {"bytes": base64.b64encode(value).decode("ascii").rstrip("=")}}
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json(item) for item in value]
    return value


class DagJsonCodec(IpldSelAdapter, Codec, alias="dag-json", port="codec"):
    """Human-readable codec, handy for hand-built fixtures."""

    name = "dag-json"

    def decode(self, data: bytes) -> Node:
        try:
            return json.loads(data, object_hook=_object_hook)
        except Exception as e:  # json and multiformats errors alike
            raise DecodeError(self.name, str(e)) from e

    def encode(self, value: Any) -> bytes:
        return json.dumps(_to_json(value), sort_keys=True, separators=(",", ":")).encode("utf-8")
