"""
docreplay CLI - Document event replay

Main entrypoint for the docreplay command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from docreplay.cli.commands import inspect, replay
from docreplay.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="docreplay",
    help="Replay events against JSON documents",
    add_completion=False,
)

console = Console()

app.command(name="replay")(replay.replay_command)
app.command(name="inspect")(inspect.inspect_command)


@app.callback()
def _configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (overrides DOCREPLAY_LOG_LEVEL)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="Log format: json or text (overrides DOCREPLAY_LOG_FORMAT)"
    ),
):
    """Replay events against JSON documents."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from docreplay import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]docreplay[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
