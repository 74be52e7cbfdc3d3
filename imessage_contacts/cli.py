#!/usr/bin/env python3
"""
iMessage Contacts - Command Line Interface
Search AddressBook contacts and show their iMessage handles
"""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from imessage_contacts.core.config import Config, configure_logging
from imessage_contacts.core.models import ContactSearchResult
from imessage_contacts.contacts.errors import ContactSearchError
from imessage_contacts.contacts.search import ContactSearch

app = typer.Typer(help="iMessage Contacts - find phone numbers and emails by name")

console = Console()


def _render_result(result: ContactSearchResult) -> None:
    """Render a search result as a table with a pagination footer."""
    if not result.data:
        console.print("[yellow]No contacts found[/yellow]")
    else:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Name", min_width=20)
        table.add_column("Handle", min_width=16)

        for entry in result.data:
            table.add_row(entry.name, entry.handle)

        console.print(table)

    pagination = result.pagination
    footer = (
        f"Page {pagination.page} of {pagination.total_pages} "
        f"({pagination.total} handles total)"
    )
    if pagination.has_more:
        footer += f" - next: --offset {pagination.offset + pagination.limit}"
    console.print(f"[dim]{footer}[/dim]")

    if result.partial:
        console.print(
            "[yellow]Warning: some sources failed; the total may include "
            f"handles that could not be fetched ({', '.join(result.failed_sources)})[/yellow]"
        )


@app.command()
def search(
    first_name: str = typer.Argument(..., help="First name (or any name part) to search for"),
    last_name: Optional[str] = typer.Option(None, "--last-name", "-l", help="Last name for a more specific search"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum handles to return"),
    offset: int = typer.Option(0, "--offset", "-o", min=0, help="Handles to skip"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result"),
    concurrent: bool = typer.Option(False, "--concurrent", help="Query sources in parallel"),
):
    """Search contacts by name."""
    config = Config()

    try:
        with ContactSearch(config, concurrent=concurrent) as contacts:
            result = contacts.search(first_name, last_name, limit=limit, offset=offset)
    except ContactSearchError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        _render_result(result)


@app.command()
def sources():
    """List discovered AddressBook source databases."""
    config = Config()

    with ContactSearch(config) as contacts:
        databases = contacts.sources
        if not databases:
            console.print(
                f"[yellow]No AddressBook sources found in {config.get_sources_directory()}[/yellow]"
            )
            return

        console.print(f"\n[bold]AddressBook sources ({len(databases)}):[/bold]\n")
        for index, db in enumerate(databases, start=1):
            console.print(f"  {index}. {db.db_path}")
        console.print()


@app.command()
def serve():
    """Run the MCP server over stdio."""
    from imessage_contacts.mcp_server.server import run

    config = Config()
    configure_logging(config, "mcp_server.log")
    asyncio.run(run(config))


if __name__ == "__main__":
    app()
