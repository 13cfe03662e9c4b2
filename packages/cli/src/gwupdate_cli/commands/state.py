"""state command — show what the main phase handed to the post phase."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("state")
@click.pass_context
def state_cmd(ctx):
    """Show the run state persisted by the configured store."""
    state = ctx.obj["state"]

    table = Table(title="Run state", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    for key, value in state.snapshot().items():
        table.add_row(key, value if value else "[dim]—[/dim]")

    console.print(table)
