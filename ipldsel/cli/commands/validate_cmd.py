"""Selector document validation command for ipldsel CLI."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ipldsel.compiler.document_loader import load_document
from ipldsel.kernel.domain.node import cid_text
from ipldsel.kernel.domain.selectors import RecursiveSelector, SelectorProgram
from ipldsel.kernel.exceptions import InvalidSelectorError

console = Console()


def validate(
    selector_file: Annotated[
        Path,
        typer.Argument(
            help="Selector document to validate",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    explain: Annotated[
        bool,
        typer.Option("--explain", "-e", help="Show the parsed selector program"),
    ] = False,
) -> None:
    """Validate a selector document; nothing is fetched.

    Examples
    --------
    ipldsel validate query.json
    ipldsel validate query.yaml --explain
    """
    try:
        document = load_document(selector_file)
    except InvalidSelectorError as e:
        console.print(f"[red]✗ Validation failed:[/red] {selector_file}")
        console.print(f"  [red]✗[/red] {e}")
        raise typer.Exit(1) from e
    except OSError as e:
        console.print(f"[red]✗ File Error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[green]✓ Validation successful:[/green] {selector_file}")
    if explain:
        console.print(f"Root: [cyan]{cid_text(document.root)}[/cyan]")
        console.print(_program_table(document.program))


def _program_table(program: SelectorProgram) -> Table:
    table = Table(show_header=True, border_style="cyan")
    table.add_column("#", style="green")
    table.add_column("Selector", style="blue")
    table.add_column("Parameters", style="white")

    for i, selector in enumerate(program, start=1):
        [(tag, params)] = selector.to_raw().items()
        table.add_row(str(i), tag, json.dumps(params))
        if isinstance(selector, RecursiveSelector):
            for j, inner in enumerate(selector.follow, start=1):
                [(inner_tag, inner_params)] = inner.to_raw().items()
                table.add_row(f"{i}.{j}", f"  {inner_tag}", json.dumps(inner_params))
    return table
