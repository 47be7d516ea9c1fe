"""Configuration models."""

from ipldsel.kernel.config.models import IpldSelConfig, LoggingConfig, StoreConfig

__all__ = ["IpldSelConfig", "LoggingConfig", "StoreConfig"]
