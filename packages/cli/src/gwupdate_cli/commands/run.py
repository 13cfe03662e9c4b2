"""run command — dispatch to the main phase or the post phase."""

from __future__ import annotations

import logging
import os

import click
from github import GithubException
from rich.console import Console

from gwupdate_core.errors import GwUpdateError
from gwupdate_core.gh.api import GitHubApi
from gwupdate_core.gh.notifier import CollaboratorNotifier
from gwupdate_core.gh.ops import GitHubOps
from gwupdate_core.orchestrator import UpdateOrchestrator
from gwupdate_core.post import PostPhase
from gwupdate_core.releases import Releases

console = Console()
logger = logging.getLogger(__name__)


@click.command("run")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Repository checkout to update. Defaults to $GITHUB_WORKSPACE or the current directory.",
)
@click.pass_context
def run_cmd(ctx, repo: str | None, workspace: str | None):
    """Update Gradle wrappers and open a pull request.

    gwupdate runs twice per CI run. The first invocation (the main phase)
    updates every wrapper and opens the PR. The second (the post phase, e.g.
    a final step with `if: always()`) comments on that PR about reviewers
    and teams that could not be requested. The two share state through the
    configured store; the post phase discards it, so the next invocation
    starts a new run.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token with contents and pull-requests write access
    """
    config = ctx.obj["config"]
    state = ctx.obj["state"]

    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set the repo-token input or GITHUB_TOKEN, or run `gh auth login` first.\n"
            "The token needs contents: write and pull-requests: write."
        )
    repo = repo or config.get("repository")
    if not repo:
        raise click.UsageError("No repository given. Pass --repo owner/name or set GITHUB_REPOSITORY.")
    if workspace:
        config["workspace"] = workspace
    # git commands run in the current directory
    os.chdir(config["workspace"])

    if state.is_main_phase_executed():
        try:
            _run_post_phase(state, repo, token)
        finally:
            state.clear()
        return

    try:
        api = GitHubApi.from_token(repo, token)
        ops = GitHubOps(config, api, CollaboratorNotifier(api, state))
        UpdateOrchestrator(config, api, ops, Releases(), state).run()
    except (GwUpdateError, GithubException) as e:
        raise click.ClickException(f"❌ {e}")


def _run_post_phase(state, repo: str, token: str) -> None:
    pull_request = state.get_pull_request_data()
    if pull_request is None:
        console.print("[dim]No pull request was created by the main phase. Nothing to report.[/dim]")
        return
    try:
        api = GitHubApi.from_token(repo, token)
    except GithubException as e:
        logger.warning("Post phase skipped, unable to reach %s: %s", repo, e)
        return
    PostPhase(api, state).run(pull_request)
