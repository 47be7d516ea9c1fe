"""Selection API.

Wires configuration, adapters and the traversal engine together for callers
that do not want to assemble the ports themselves (the CLI, scripts).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from ipldsel.compiler.config_loader import load_config
from ipldsel.compiler.document_loader import load_document
from ipldsel.kernel.domain.document import RootSelectorDocument, parse_document
from ipldsel.kernel.traversal.engine import SelectorEngine
from ipldsel.stdlib.adapters.codecs import default_codec_registry
from ipldsel.stdlib.adapters.stores import create_block_store

if TYPE_CHECKING:
    from ipldsel.kernel.config.models import IpldSelConfig
    from ipldsel.kernel.ports.block_store import BlockStore
    from ipldsel.kernel.traversal.selection import SelectionResult


def create_engine(
    config: IpldSelConfig | None = None,
    block_store: BlockStore | None = None,
) -> SelectorEngine:
    """Build an engine from configuration.

    Parameters
    ----------
    config : IpldSelConfig | None
        Configuration; loaded through discovery when omitted
    block_store : BlockStore | None
        Store to use instead of the configured one
    """
    if config is None:
        config = load_config()
    if block_store is None:
        block_store = create_block_store(config.store)
    return SelectorEngine(block_store, default_codec_registry(config.codecs))


async def select(
    document: RootSelectorDocument | dict[str, Any] | str | Path,
    config: IpldSelConfig | None = None,
    block_store: BlockStore | None = None,
) -> SelectionResult:
    """Evaluate a selector document and drain the result.

    Parameters
    ----------
    document : RootSelectorDocument | dict | str | Path
        A parsed document, a raw mapping, or the path of a JSON/YAML file

    Returns
    -------
    SelectionResult
        Visited blocks in order, the outcome and any unresolved remainder

    Examples
    --------
    Example usage::

        result = asyncio.run(select("query.json"))
        for cid in result.cids:
            print(cid)
    """
    if isinstance(document, str | Path):
        document = load_document(document)
    elif not isinstance(document, RootSelectorDocument):
        document = parse_document(document)

    engine = create_engine(config, block_store)
    return await engine.select(document).collect()
