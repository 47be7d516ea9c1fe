"""Configuration management commands."""

from dataclasses import asdict

import typer

from ipldsel.cli.utils import err_console, load_cli_config, print_output
from ipldsel.kernel.exceptions import IpldSelError

app = typer.Typer(help="Configuration management commands")


@app.command("show")
def show_config(ctx: typer.Context, key: str | None = None) -> None:
    """Show the effective configuration, or one top-level key of it."""
    try:
        config = asdict(load_cli_config(ctx))
    except (IpldSelError, OSError) as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        raise typer.Exit(1) from e

    if key:
        if key not in config:
            err_console.print(f"[red]Unknown key:[/red] {key}. Available: {', '.join(config)}")
            raise typer.Exit(1)
        print_output(config[key], ctx)
    else:
        print_output(config, ctx)
