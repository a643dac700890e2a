"""
Inspect command: list the instructions carried by event files
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from docreplay.core.errors import ReplayError
from docreplay.core.events import DocumentEvent
from docreplay.loader import load_document, load_event

console = Console()


def inspect_command(
    events: Optional[List[Path]] = typer.Option(
        None, "--events", "-e", help="Event file; repeat for several"
    ),
    document: Optional[Path] = typer.Option(None, "--document", "-d", help="Document file"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List instructions in application order.

    Examples:
        docreplay inspect --events event1.json --events event2.json
        docreplay inspect --document document.json --json
    """
    try:
        if document is not None:
            loaded: List[DocumentEvent] = list(load_document(document).events)
        else:
            loaded = [load_event(p) for p in events or []]
    except FileNotFoundError as ex:
        if json_output:
            print(json.dumps({"error": "File not found", "path": str(ex.filename)}))
        else:
            console.print(f"[red]Error: File not found:[/red] {escape(str(ex.filename))}")
        raise typer.Exit(2)
    except ReplayError as ex:
        if json_output:
            print(json.dumps({"error": str(ex)}))
        else:
            console.print(f"[red]Error:[/red] {escape(str(ex))}", highlight=False)
        raise typer.Exit(2)

    rows = []
    for event_index, event in enumerate(loaded):
        for instruction_index, instruction in enumerate(event.instructions):
            rows.append({
                "event": event_index,
                "event_id": event.event_id,
                "instruction": instruction_index,
                **instruction.to_dict(),
            })

    if json_output:
        print(json.dumps({"instructions": rows, "count": len(rows)}, indent=2))
        return

    if not rows:
        console.print("[yellow]No instructions found[/yellow]")
        return

    table = Table(title="Instructions")
    table.add_column("Event", style="cyan", justify="right")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Action", style="green")
    table.add_column("Data Type", style="yellow")
    table.add_column("Path")
    for row in rows:
        table.add_row(
            str(row["event"]),
            str(row["instruction"]),
            Text(row["ActionType"]),
            Text(row["DataType"] or "-"),
            Text(row["Path"] or "(root)"),
        )
    console.print(table)
    console.print(f"\n[bold]Total instructions:[/bold] {len(rows)}")
