"""Centralized logging configuration for ipldsel using Loguru.

Provides consistent logging across the package with support for:
- Multiple output formats (console, JSON, structured, rich)
- Environment-based defaults
- Correlation ids for following a single traversal through the logs
- Idempotent configuration

Examples
--------
Basic usage:

>>> from ipldsel.kernel.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Loading block {cid}", cid="bafy...")

Configure logging globally::

    from ipldsel.kernel.logging import configure_logging
    configure_logging(level="DEBUG", format="json")
"""

import contextvars
import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []

# Correlation ID context variable, one per traversal
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id", default="-")


def _inject_correlation_id(record: dict[str, Any]) -> None:
    record["extra"]["correlation_id"] = correlation_id.get()


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Configure global logging for ipldsel.

    This function is idempotent - calling it multiple times with the same
    configuration will not duplicate handlers or change settings.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum log level to output (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : LogFormat, default="structured"
        Output format:
        - "console": Simple console output (no colors, basic format)
        - "json": JSON format for log aggregation
        - "structured": Enhanced structured format with colors (Loguru native)
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file path to write logs to (in addition to stderr)
    use_color : bool, default=True
        Use ANSI color codes in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Force reconfiguration even if already configured with same settings

    Examples
    --------
    Testing setup::

        configure_logging(level="WARNING", format="console")
    """
    global _CURRENT_CONFIG, _HANDLER_IDS

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Remove loguru's default stderr sink and our previously added handlers
    # (not external ones)
    if _CURRENT_CONFIG is None:
        with suppress(ValueError):
            logger.remove(0)
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    logger.configure(patcher=_inject_correlation_id)

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")
        _HANDLER_IDS.append(handler_id)

    elif format == "json":
        handler_id = logger.add(sink=sys.stderr, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        color_level = (
            "<level>{level: <8}</level>" if use_color and sys.stderr.isatty() else "{level: <8}"
        )
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> [{extra[correlation_id]}] "
            "| <level>{message}</level>"
        )

        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=use_color and sys.stderr.isatty(),
        )
        _HANDLER_IDS.append(handler_id)

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        console_format = f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}"

        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=console_format,
            colorize=False,
        )
        _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # File output always uses JSON for easier parsing
        handler_id = logger.add(
            sink=output_path,
            level=level,
            serialize=True,
            rotation="10 MB",
            retention="1 week",
        )
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger instance with the given name (cached).

    Parameters
    ----------
    name : str
        Logger name, typically __name__ from the calling module

    Returns
    -------
    loguru.Logger
        Configured logger instance bound with the module name

    Notes
    -----
    If configure_logging() hasn't been called, initializes with defaults
    taken from ``IPLDSEL_LOG_LEVEL`` and ``IPLDSEL_LOG_FORMAT``.
    """
    _ensure_configured()
    return logger.bind(module=name)


def set_correlation_id(cid: str) -> None:
    """Set correlation ID for the current context.

    >>> set_correlation_id("bafyroot")
    >>> get_correlation_id()
    'bafyroot'
    """
    correlation_id.set(cid)


def get_correlation_id() -> str:
    """Get the current correlation ID, or "-" if not set."""
    return correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID for the current context."""
    correlation_id.set("-")


def _ensure_configured() -> None:
    """Ensure logging has at least basic configuration (lazy initialization)."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("IPLDSEL_LOG_LEVEL", "WARNING").upper()
        format_type = os.getenv("IPLDSEL_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore
