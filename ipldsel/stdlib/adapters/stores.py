"""Building the configured block store."""

from __future__ import annotations

from ipldsel.kernel.config.models import StoreConfig
from ipldsel.kernel.exceptions import ConfigurationError
from ipldsel.kernel.ports.block_store import BlockStore
from ipldsel.stdlib.adapters.base import resolve_adapter


def create_block_store(config: StoreConfig) -> BlockStore:
    """Instantiate the block store adapter named by ``config.adapter``.

    Raises
    ------
    ResolveError
        If the adapter alias is unknown
    ConfigurationError
        If the adapter rejects its configuration or is not a block store
    """
    adapter_cls = resolve_adapter(config.adapter, port="block_store")
    kwargs = dict(config.options)
    if config.path is not None:
        kwargs["path"] = config.path
    store = adapter_cls(**kwargs)
    if not isinstance(store, BlockStore):
        raise ConfigurationError("store", f"'{config.adapter}' is not a block store adapter")
    return store
