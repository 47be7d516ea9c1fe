"""CLI helper utilities for ipldsel commands."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any, Protocol

import typer
import yaml
from rich.console import Console

from ipldsel.compiler.config_loader import load_config
from ipldsel.kernel.config.models import IpldSelConfig
from ipldsel.kernel.logging import configure_logging


class ContextProtocol(Protocol):
    """Protocol for common interface between Click and Typer contexts."""

    @property
    def obj(self) -> dict[str, Any] | None: ...


console = Console()
err_console = Console(stderr=True)


def _settings(ctx: ContextProtocol | None) -> dict[str, Any]:
    settings = getattr(ctx, "obj", None) if ctx is not None else None
    return settings if isinstance(settings, dict) else {}


def print_output(data: Any, ctx: ContextProtocol | None = None) -> None:
    """Print ``data`` according to ``ctx.obj['output_format']``.

    If ctx is None or no format specified, pretty-print using rich.console.
    """
    fmt = _settings(ctx).get("output_format")

    if fmt == "json":
        typer.echo(json.dumps(data, default=str, indent=2))
    elif fmt == "yaml":
        typer.echo(yaml.safe_dump(data, sort_keys=False))
    elif isinstance(data, str | int | float):
        typer.echo(str(data))
    else:
        console.print(data)


def load_cli_config(ctx: ContextProtocol | None = None) -> IpldSelConfig:
    """Load configuration and set up logging from the global CLI flags."""
    settings = _settings(ctx)
    config = load_config(settings.get("config_path"))

    if level := settings.get("log_level"):
        config = replace(config, logging=replace(config.logging, level=level.upper()))

    configure_logging(
        level=config.logging.level,
        format=config.logging.format,
        output_file=config.logging.output_file,
        use_color=config.logging.use_color,
        include_timestamp=config.logging.include_timestamp,
    )
    return config
