"""Node model: blocks and the decoded shape of their content.

A decoded node is plain Python data. Links to other blocks appear as
:class:`multiformats.CID` values, which is what distinguishes them from
scalars. Inspection helpers never raise for absent keys or indices; callers
treat ``None`` as "no match".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

from multiformats import CID

Node: TypeAlias = Any
"""Decoded block content: dict, list, scalar or CID."""

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Block:
    """Raw bytes of one graph node plus the identifier addressing them."""

    cid: CID
    data: bytes

    @property
    def codec(self) -> str:
        """Multicodec name the block was encoded with (e.g. ``dag-cbor``)."""
        return self.cid.codec.name

    def __str__(self) -> str:
        return cid_text(self.cid)


def cid_text(cid: CID) -> str:
    """Canonical text form of ``cid``.

    Decoders hand back links in whatever base they choose (``dag-cbor`` uses
    base58btc), so every printed identifier and every file name goes through
    here: base32 for CIDv1, base58btc for CIDv0, which has no other form.
    """
    if cid.version == 0:
        return str(cid)
    return cid.encode("base32")


class NodeKind(StrEnum):
    """Structural kinds a decoded node can take."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    LINK = "link"


def kind_of(node: Node) -> NodeKind:
    """Classify a decoded node."""
    if isinstance(node, CID):
        return NodeKind.LINK
    if isinstance(node, dict):
        return NodeKind.MAPPING
    if isinstance(node, list | tuple):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def is_link(node: Node) -> bool:
    return isinstance(node, CID)


def is_mapping(node: Node) -> bool:
    return kind_of(node) is NodeKind.MAPPING


def is_sequence(node: Node) -> bool:
    return kind_of(node) is NodeKind.SEQUENCE


def lookup(node: Node, key: str) -> tuple[bool, Node]:
    """Look up ``key`` in a mapping node.

    Returns
    -------
    tuple[bool, Node]
        ``(True, value)`` when present, ``(False, None)`` otherwise. A present
        key may legitimately hold ``None``.
    """
    if not is_mapping(node):
        return False, None
    value = node.get(key, _MISSING)
    if value is _MISSING:
        return False, None
    return True, value


def element_at(node: Node, index: int) -> tuple[bool, Node]:
    """Return ``(True, element)`` if ``node`` is a sequence holding ``index``."""
    if not is_sequence(node) or index < 0 or index >= len(node):
        return False, None
    return True, node[index]


def slice_of(node: Node, start: int, end: int | None) -> list[Node] | None:
    """Slice a sequence node; ``None`` if ``node`` is not a sequence."""
    if not is_sequence(node):
        return None
    return list(node[start:end])
