"""Compiler: turns files (selector documents, configuration) into kernel models."""

from ipldsel.compiler.config_loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
)
from ipldsel.compiler.document_loader import load_document, read_document

__all__ = [
    "ConfigLoader",
    "clear_config_cache",
    "get_default_config",
    "load_config",
    "load_document",
    "read_document",
]
