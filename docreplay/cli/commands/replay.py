"""
Replay command: replay events against a base document and print the result
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from docreplay.core.codec import parse_value, serialize_value
from docreplay.core.config import ReplayConfig
from docreplay.core.errors import ReplayError
from docreplay.loader import build_document, load_document
from docreplay.replay import run_replay

console = Console()
err_console = Console(stderr=True)


def _fail(message: str, json_output: bool, **extra) -> None:
    if json_output:
        print(json.dumps({"success": False, "error": message, **extra}))
    else:
        err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(2)


def replay_command(
    base: Optional[Path] = typer.Option(None, "--base", "-b", help="Base document JSON file"),
    events: Optional[List[Path]] = typer.Option(
        None, "--events", "-e", help="Event file; repeat to apply several, in order"
    ),
    document: Optional[Path] = typer.Option(
        None, "--document", "-d", help="Document file holding EntityId, BaseDocument and Events"
    ),
    entity_id: str = typer.Option("", "--entity-id", help="Entity id used as the log trace id"),
    lenient_remove: bool = typer.Option(
        False, "--lenient-remove", help="Removing a missing element is a no-op instead of an error"
    ),
    strict_array_remove: bool = typer.Option(
        False, "--strict-array-remove", help="Removing from an empty array is an error"
    ),
    pretty: bool = typer.Option(False, "--pretty", "-p", help="Pretty-print the resulting document"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay events against a base document and print its current state.

    Examples:
        docreplay replay --base base.json --events event1.json --events event2.json
        docreplay replay --document document.json --pretty
        docreplay replay --base base.json -e event1.json --lenient-remove --json
    """
    if (base is None) == (document is None):
        _fail("exactly one of --base or --document is required", json_output)

    config = ReplayConfig.from_env()
    if lenient_remove:
        config = config.with_overrides(remove_missing_element_is_error=False)
    if strict_array_remove:
        config = config.with_overrides(remove_missing_array_element_is_error=True)

    try:
        if document is not None:
            doc = load_document(document)
        else:
            doc = build_document(base, events or [], entity_id=entity_id)
        result = run_replay(doc, config)
    except FileNotFoundError as ex:
        _fail(f"file not found: {ex.filename}", json_output, path=str(ex.filename))
    except ReplayError as ex:
        extra = {}
        if ex.event_index is not None:
            extra = {"event_index": ex.event_index, "instruction_index": ex.instruction_index}
        _fail(str(ex), json_output, **extra)

    text = result.output.decode("utf-8")
    if json_output:
        print(json.dumps({
            "success": True,
            "events_applied": result.events_applied,
            "instructions_applied": result.instructions_applied,
            "document": text,
        }))
    elif pretty:
        console.print(Syntax(serialize_value(parse_value(result.output), indent=2), "json"))
    else:
        print(text)
