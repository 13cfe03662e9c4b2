"""find command — list the wrappers gwupdate would work on."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from gwupdate_core.errors import GwUpdateError
from gwupdate_core.wrapper.find import find_wrapper_properties
from gwupdate_core.wrapper.info import parse_wrapper

console = Console()


@click.command("find")
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory to search. Defaults to $GITHUB_WORKSPACE or the current directory.",
)
@click.pass_context
def find_cmd(ctx, workspace: str | None):
    """Show every Gradle wrapper matched by `paths` / `paths_ignore`."""
    config = ctx.obj["config"]
    root = workspace or config["workspace"]

    paths = find_wrapper_properties(config.get("paths", []), config.get("paths_ignore", []), root=root)
    if not paths:
        console.print("[yellow]Unable to find Gradle Wrapper files in this project.[/yellow]")
        return

    table = Table(title=f"Gradle Wrappers — {root}", show_header=True, header_style="bold cyan")
    table.add_column("Path")
    table.add_column("Version", width=14)
    table.add_column("Distribution", width=12)

    for path in paths:
        try:
            wrapper = parse_wrapper(path)
        except GwUpdateError as e:
            table.add_row(path, "[red]error[/red]", f"[red]{e}[/red]")
            continue
        table.add_row(path, wrapper.version, wrapper.dist_type.value)

    console.print(table)
