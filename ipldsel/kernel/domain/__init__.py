"""Domain models: blocks, decoded nodes, selectors and documents."""

from ipldsel.kernel.domain.document import (
    CID_ROOTED_SELECTOR,
    CidRootedSelectorSpec,
    RootSelectorDocument,
    parse_document,
)
from ipldsel.kernel.domain.node import Block, Node, NodeKind, cid_text, is_link, kind_of
from ipldsel.kernel.domain.selectors import (
    SELECTOR_TYPES,
    ArrayAllSelector,
    ArrayPositionSelector,
    ArraySliceSelector,
    Match,
    PathSelector,
    RecursiveSelector,
    Selector,
    SelectorProgram,
    build_program,
    build_selector,
    program_to_raw,
)

__all__ = [
    "CID_ROOTED_SELECTOR",
    "SELECTOR_TYPES",
    "ArrayAllSelector",
    "ArrayPositionSelector",
    "ArraySliceSelector",
    "Block",
    "CidRootedSelectorSpec",
    "Match",
    "Node",
    "NodeKind",
    "PathSelector",
    "RecursiveSelector",
    "RootSelectorDocument",
    "Selector",
    "SelectorProgram",
    "build_program",
    "cid_text",
    "build_selector",
    "is_link",
    "kind_of",
    "parse_document",
    "program_to_raw",
]
