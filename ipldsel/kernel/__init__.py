"""ipldsel kernel: domain types, ports, the traversal engine and its errors.

User-space code (``ipldsel.api``, ``ipldsel.cli`` and applications) should
import from here rather than from kernel submodules.
"""

# ============================================================================
# Traversal
# ============================================================================
from ipldsel.kernel.traversal import (
    Selection,
    SelectionOutcome,
    SelectionResult,
    SelectorEngine,
)

# ============================================================================
# Domain types
# ============================================================================
from ipldsel.kernel.domain import (
    ArrayAllSelector,
    ArrayPositionSelector,
    ArraySliceSelector,
    Block,
    Match,
    NodeKind,
    PathSelector,
    RecursiveSelector,
    RootSelectorDocument,
    Selector,
    SelectorProgram,
    build_program,
    build_selector,
    parse_document,
)

# ============================================================================
# Ports
# ============================================================================
from ipldsel.kernel.ports import BlockStore, Codec, CodecRegistry

# ============================================================================
# Exceptions
# ============================================================================
from ipldsel.kernel.exceptions import (
    BlockNotFoundError,
    ConfigurationError,
    DecodeError,
    InvalidSelectorError,
    IpldSelError,
    ResolveError,
)

# ============================================================================
# Logging
# ============================================================================
from ipldsel.kernel.logging import configure_logging, get_logger

__all__ = [
    # Traversal
    "Selection",
    "SelectionOutcome",
    "SelectionResult",
    "SelectorEngine",
    # Domain
    "ArrayAllSelector",
    "ArrayPositionSelector",
    "ArraySliceSelector",
    "Block",
    "Match",
    "NodeKind",
    "PathSelector",
    "RecursiveSelector",
    "RootSelectorDocument",
    "Selector",
    "SelectorProgram",
    "build_program",
    "build_selector",
    "parse_document",
    # Ports
    "BlockStore",
    "Codec",
    "CodecRegistry",
    # Exceptions
    "BlockNotFoundError",
    "ConfigurationError",
    "DecodeError",
    "InvalidSelectorError",
    "IpldSelError",
    "ResolveError",
    # Logging
    "configure_logging",
    "get_logger",
]
