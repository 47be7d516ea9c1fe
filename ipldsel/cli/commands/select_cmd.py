"""Selector execution command for ipldsel CLI."""

import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from ipldsel.api.selection import create_engine
from ipldsel.cli.utils import err_console, load_cli_config
from ipldsel.compiler.document_loader import load_document
from ipldsel.kernel.domain.document import RootSelectorDocument
from ipldsel.kernel.domain.node import cid_text
from ipldsel.kernel.domain.selectors import program_to_raw
from ipldsel.kernel.exceptions import IpldSelError
from ipldsel.kernel.logging import clear_correlation_id, set_correlation_id
from ipldsel.kernel.traversal.engine import SelectorEngine
from ipldsel.kernel.traversal.selection import SelectionOutcome

EXIT_UNRESOLVED = 3


async def _stream(engine: SelectorEngine, document: RootSelectorDocument, as_json: bool) -> bool:
    """Print visited CIDs as they arrive; return whether the selection resolved."""
    selection = engine.select(document)
    cids: list[str] = []
    try:
        async for block in selection:
            if as_json:
                cids.append(cid_text(block.cid))
            else:
                typer.echo(cid_text(block.cid))
    except IpldSelError as e:
        if as_json:
            typer.echo(
                json.dumps(
                    {"blocks": cids, "outcome": str(selection.outcome), "error": str(e)},
                    indent=2,
                )
            )
        raise

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "blocks": cids,
                    "outcome": str(selection.outcome),
                    "unresolved": program_to_raw(selection.unresolved),
                },
                indent=2,
            )
        )
    elif selection.outcome is SelectionOutcome.UNRESOLVED:
        err_console.print(
            "[yellow]The selector wasn't fully resolved:[/yellow] "
            f"{json.dumps(program_to_raw(selection.unresolved))}"
        )
    return selection.outcome is SelectionOutcome.RESOLVED


def select(
    ctx: typer.Context,
    selector_file: Annotated[
        Path,
        typer.Argument(
            help="File containing a selector document (JSON or YAML)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    store: Annotated[
        Path | None,
        typer.Option("--store", "-s", help="Block directory (overrides the configured path)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help=f"Exit with code {EXIT_UNRESOLVED} when unresolved"),
    ] = False,
) -> None:
    """Run a selector document and print the CID of every visited block.

    Examples
    --------
    ipldsel select query.json --store ./blocks
    ipldsel --json select query.yaml
    """
    try:
        config = load_cli_config(ctx)
        if store is not None:
            config = replace(config, store=replace(config.store, path=str(store)))
        document = load_document(selector_file)
        engine = create_engine(config)
    except (IpldSelError, OSError) as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        raise typer.Exit(1) from e

    as_json = (ctx.obj or {}).get("output_format") == "json"
    set_correlation_id(cid_text(document.root))
    try:
        resolved = asyncio.run(_stream(engine, document, as_json))
    except IpldSelError as e:
        err_console.print(f"[red]✗ Selection aborted:[/red] {e}")
        raise typer.Exit(1) from e
    finally:
        clear_correlation_id()

    if strict and not resolved:
        raise typer.Exit(EXIT_UNRESOLVED)
