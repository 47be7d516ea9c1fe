"""Base mixin for auto-registering adapters via ``__init_subclass__``."""

from __future__ import annotations

import importlib
from typing import Any, ClassVar

from ipldsel.kernel.exceptions import ResolveError


class IpldSelAdapter:
    """Mixin that registers adapters under an alias when ``alias`` is provided.

    Examples
    --------
    >>> class MyStore(IpldSelAdapter, alias="my_store", port="block_store"):
    ...     pass
    >>> "my_store" in IpldSelAdapter._registry
    True
    >>> "block_store:my_store" in IpldSelAdapter._registry
    True
    """

    _registry: ClassVar[dict[str, str]] = {}
    """Auto-populated by ``__init_subclass__``: alias -> full module path."""

    def __init_subclass__(
        cls,
        *,
        alias: str | None = None,
        port: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Register subclass in the alias registry."""
        super().__init_subclass__(**kwargs)
        if alias:
            full_path = f"{cls.__module__}.{cls.__qualname__}"
            IpldSelAdapter._registry[alias] = full_path
            IpldSelAdapter._registry[cls.__name__] = full_path
            if port:
                IpldSelAdapter._registry[f"{port}:{alias}"] = full_path


def resolve_adapter(alias: str, port: str | None = None) -> type:
    """Resolve an adapter alias (``flatfs``, ``block_store:memory``, ``FlatFsBlockStore``).

    Raises
    ------
    ResolveError
        If the alias is unknown or its module cannot be imported
    """
    # Importing the adapter packages registers their aliases
    importlib.import_module("ipldsel.stdlib.adapters")

    key = f"{port}:{alias}" if port and f"{port}:{alias}" in IpldSelAdapter._registry else alias
    path = IpldSelAdapter._registry.get(key)
    if path is None:
        available = sorted(a for a in IpldSelAdapter._registry if ":" not in a)
        raise ResolveError(alias, f"unknown adapter. Available: {', '.join(available)}")

    module_path, class_name = path.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ResolveError(alias, f"Failed to import '{module_path}': {e}") from e
    return getattr(module, class_name)
