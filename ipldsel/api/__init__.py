"""High-level API for running selections."""

from ipldsel.api.selection import create_engine, select

__all__ = ["create_engine", "select"]
