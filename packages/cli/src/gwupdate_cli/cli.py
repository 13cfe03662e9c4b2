"""CLI entry point for gwupdate.

Commands:
  run    — update Gradle wrappers and open a PR; on the second invocation of a
           CI run, report reviewers that could not be requested
  find   — list the wrappers gwupdate would update
  state  — show the state persisted between the two phases
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from gwupdate_cli.commands.find import find_cmd
from gwupdate_cli.commands.run import run_cmd
from gwupdate_cli.commands.state import state_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured state backend from .gwupdate.yml settings.

    Store selection:
      store: actions → ActionsStateStore (GITHUB_STATE / STATE_* variables)
      store: memory  → MemoryStore (nothing survives the process)
      (default)      → SQLiteStore at store_path
    """
    store_type = config.get("store", "sqlite")

    if store_type == "actions":
        from gwupdate_store.actions import ActionsStateStore

        return ActionsStateStore()

    if store_type == "memory":
        from gwupdate_store.memory import MemoryStore

        return MemoryStore()

    from gwupdate_store.sqlite import SQLiteStore

    return SQLiteStore(db_path=config.get("store_path", ".gwupdate-state.db"))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("gwupdate"),
    prog_name="gwupdate",
)
@click.option(
    "--config",
    "config_path",
    default=".gwupdate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GWUPDATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Keep the Gradle wrappers of a repository up to date through pull requests."""
    from gwupdate_cli.auth import resolve_github_token
    from gwupdate_core.config import load_config
    from gwupdate_store.state import RunState

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.UsageError(str(e))

    token = resolve_github_token()
    if token:
        config["github_token"] = token

    state = RunState(_build_store(config))
    ctx.obj["state"] = state
    ctx.obj["config"] = config
    ctx.call_on_close(state.close)


main.add_command(run_cmd)
main.add_command(find_cmd)
main.add_command(state_cmd)
