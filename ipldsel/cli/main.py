"""ipldsel CLI - Main entrypoint."""

import typer
from rich.console import Console

from ipldsel import __version__
from ipldsel.cli.commands import config_cmd, select_cmd, validate_cmd

_LEVELS = {"debug": "DEBUG", "info": "INFO", "warn": "WARNING", "error": "ERROR"}

app = typer.Typer(
    name="ipldsel",
    help="Run selector queries over content-addressed block graphs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

console = Console()

app.command("select", help="Run a selector document and print visited block CIDs")(
    select_cmd.select
)
app.command("validate", help="Validate a selector document without fetching blocks")(
    validate_cmd.validate
)
app.add_typer(config_cmd.app, name="config", help="Configuration management")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]ipldsel[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress non-error output"),
    verbose: bool = typer.Option(False, "-V", "--verbose", help="Enable verbose logging"),
    json_out: bool = typer.Option(False, "--json", help="Output machine-readable JSON"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to a config file"),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level: debug|info|warn|error"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """ipldsel CLI.

    Global flags are parsed here and stored on `ctx.obj` for subcommands.
    """
    if ctx.obj is None:
        ctx.obj = {}

    effective_level = _LEVELS.get(log_level.lower(), log_level.upper()) if log_level else None
    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"

    ctx.obj.update({
        "quiet": quiet,
        "verbose": verbose,
        "output_format": "json" if json_out else "pretty",
        "config_path": config,
        "log_level": effective_level,
    })


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
