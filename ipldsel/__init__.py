"""ipldsel - selector traversal over content-addressed block graphs.

Walks a DAG of codec-encoded blocks with a declarative selector program and
streams every block visited, so a verifier can replay the traversal.
"""

try:
    from importlib.metadata import version

    __version__ = version("ipldsel")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from ipldsel.kernel import (
    Block,
    BlockNotFoundError,
    DecodeError,
    InvalidSelectorError,
    IpldSelError,
    RootSelectorDocument,
    Selection,
    SelectionOutcome,
    SelectionResult,
    SelectorEngine,
    parse_document,
)

__all__ = [
    "__version__",
    "Block",
    "BlockNotFoundError",
    "DecodeError",
    "InvalidSelectorError",
    "IpldSelError",
    "RootSelectorDocument",
    "Selection",
    "SelectionOutcome",
    "SelectionResult",
    "SelectorEngine",
    "parse_document",
]
