"""Configuration data models for ipldsel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from ipldsel.kernel.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for ipldsel.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.ipldsel.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export IPLDSEL_LOG_LEVEL=DEBUG
    export IPLDSEL_LOG_FORMAT=json
    export IPLDSEL_LOG_FILE=/var/log/ipldsel/select.log
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Block store selection.

    Attributes
    ----------
    adapter : str, default="flatfs"
        Alias of the block store adapter (``flatfs`` or ``memory``)
    path : str | None
        Directory holding the blocks, required by ``flatfs``
    options : dict[str, Any]
        Extra keyword arguments passed to the adapter
    """

    adapter: str = "flatfs"
    path: str | None = None
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate store configuration.

        Raises
        ------
        ConfigurationError
            If the adapter alias is empty
        """
        if not self.adapter:
            raise ConfigurationError("store", "adapter cannot be empty")


@dataclass(slots=True)
class IpldSelConfig:
    """Complete ipldsel configuration.

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.ipldsel]
    codecs = ["dag-cbor", "dag-json", "raw"]

    [tool.ipldsel.store]
    adapter = "flatfs"
    path = "${HOME}/.ipldsel/blocks"

    [tool.ipldsel.logging]
    level = "INFO"
    ```
    """

    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    codecs: list[str] = field(default_factory=lambda: ["dag-cbor", "dag-json", "raw"])
