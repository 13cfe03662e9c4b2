"""Main phase: update every wrapper in the workspace and open one pull request.

The run is a fixed sequence of steps. Each step handler does its work and
returns the next Step; terminal steps end the run. Fatal problems raise out
of the handler, so nothing after the failing step happens: in particular a
wrapper is only committed after its own verification passed, and the branch
is only pushed once every wrapper has been processed.

    INIT -> RELEASE_RESOLVED -> WRAPPERS_FOUND -> BRANCH_PREPARED
         -> WRAPPERS_PROCESSED -> PULL_REQUEST_CREATED
    RELEASE_RESOLVED -> ALREADY_PROPOSED   (branch for this version exists)
    WRAPPERS_FOUND  -> NO_WRAPPERS         (nothing to update)
    WRAPPERS_PROCESSED -> UP_TO_DATE       (no wrapper changed)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from rich.console import Console

from gwupdate_core.config import DEFAULT_TITLE_TEMPLATE
from gwupdate_core.errors import InvalidBaseBranch
from gwupdate_core.gh.api import GitHubApi
from gwupdate_core.gh.ops import GitHubOps, branch_name_for
from gwupdate_core.git import auth as git_auth
from gwupdate_core.git import cmds as git
from gwupdate_core.git.commit import commit
from gwupdate_core.releases import Release, Releases
from gwupdate_core.wrapper.find import find_wrapper_properties
from gwupdate_core.wrapper.info import WrapperInfo, parse_wrapper
from gwupdate_core.wrapper.updater import WrapperUpdater
from gwupdate_store.models import PullRequestData
from gwupdate_store.state import RunState

console = Console()
logger = logging.getLogger(__name__)

BOT_NAME = "gwupdate-bot"
BOT_EMAIL = "gwupdate-bot@users.noreply.github.com"


class Step(str, Enum):
    INIT = "init"
    RELEASE_RESOLVED = "release-resolved"
    WRAPPERS_FOUND = "wrappers-found"
    BRANCH_PREPARED = "branch-prepared"
    WRAPPERS_PROCESSED = "wrappers-processed"
    ALREADY_PROPOSED = "already-proposed"
    NO_WRAPPERS = "no-wrappers"
    UP_TO_DATE = "up-to-date"
    PULL_REQUEST_CREATED = "pull-request-created"


TERMINAL_STEPS = frozenset({Step.ALREADY_PROPOSED, Step.NO_WRAPPERS, Step.UP_TO_DATE, Step.PULL_REQUEST_CREATED})


@dataclass(frozen=True)
class CommitRecord:
    files: list[str]
    target_version: str
    source_version: str
    dist_type: str


@dataclass(frozen=True)
class Aggregate:
    dist_types: frozenset[str]
    source_version: str | None


def aggregate(commits: list[CommitRecord]) -> Aggregate:
    """Combine per-wrapper commits into what the pull request reports.

    A single "from" version only exists when exactly one wrapper changed.
    """
    dist_types = frozenset(c.dist_type for c in commits)
    source_version = commits[0].source_version if len(commits) == 1 else None
    return Aggregate(dist_types=dist_types, source_version=source_version)


@dataclass
class UpdateOutcome:
    step: Step = Step.INIT
    target_release: Release | None = None
    wrappers: list[WrapperInfo] = field(default_factory=list)
    branch_name: str | None = None
    commits: list[CommitRecord] = field(default_factory=list)
    pull_request: PullRequestData | None = None


class UpdateOrchestrator:
    def __init__(
        self,
        config: dict,
        api: GitHubApi,
        ops: GitHubOps,
        releases: Releases,
        state: RunState,
        updater_factory=WrapperUpdater,
    ):
        self.config = config
        self.api = api
        self.ops = ops
        self.releases = releases
        self.state = state
        self.updater_factory = updater_factory
        self.outcome = UpdateOutcome()
        self._handlers = {
            Step.INIT: self.resolve_release,
            Step.RELEASE_RESOLVED: self.find_wrappers,
            Step.WRAPPERS_FOUND: self.prepare_branch,
            Step.BRANCH_PREPARED: self.update_wrappers,
            Step.WRAPPERS_PROCESSED: self.open_pull_request,
        }

    def run(self) -> UpdateOutcome:
        """Execute the main phase until a terminal step; fatal errors propagate."""
        self.state.set_main_phase_executed()
        git_auth.setup(self.config["github_token"])

        step = self.outcome.step
        while step not in TERMINAL_STEPS:
            step = self._handlers[step]()
            self.outcome.step = step
            logger.debug("Step: %s", step.value)
        return self.outcome

    # --- steps ------------------------------------------------------------

    def resolve_release(self) -> Step:
        channel = self.config.get("release_channel", "stable")
        release = self.releases.fetch_release_information(channel)
        self.outcome.target_release = release
        console.print(f"Latest release: {release.version} (channel {channel})")

        ref = self.ops.find_matching_ref(release.version)
        if ref is not None:
            logger.debug("Ref url: %s, sha: %s", ref.url, ref.object.sha)
            console.print(
                f"[yellow]A pull request already exists that updates Gradle Wrapper to {release.version}.[/yellow]"
            )
            return Step.ALREADY_PROPOSED
        return Step.RELEASE_RESOLVED

    def find_wrappers(self) -> Step:
        paths = find_wrapper_properties(
            self.config.get("paths", []),
            self.config.get("paths_ignore", []),
            root=self.config.get("workspace"),
        )
        if not paths:
            console.print("[yellow]Unable to find Gradle Wrapper files in this project.[/yellow]")
            return Step.NO_WRAPPERS

        logger.debug("Wrappers count: %d", len(paths))
        self.outcome.wrappers = [parse_wrapper(path) for path in paths]
        return Step.WRAPPERS_FOUND

    def prepare_branch(self) -> Step:
        git.config("user.name", BOT_NAME)
        git.config("user.email", BOT_EMAIL)

        base_branch = self.config.get("base_branch") or self.api.repo_default_branch()
        logger.debug("Base branch: %s", base_branch)

        git.fetch()
        if git.checkout(base_branch) != 0:
            raise InvalidBaseBranch(f"Invalid base branch {base_branch}")

        head = git.parse_head()
        logger.debug("Head for branch %s is at %s", base_branch, head)

        branch_name = branch_name_for(self.outcome.target_release.version)
        console.print(f"Creating branch {branch_name}")
        git.checkout_create_branch(branch_name, head)
        self.outcome.branch_name = branch_name
        return Step.BRANCH_PREPARED

    def update_wrappers(self) -> Step:
        for wrapper in self.outcome.wrappers:
            record = self.update_wrapper(wrapper)
            if record is not None:
                self.outcome.commits.append(record)

        if not self.outcome.commits:
            console.print(
                f"[green]✅ Gradle Wrapper is already up-to-date "
                f"(version {self.outcome.target_release.version})! 👍[/green]"
            )
            return Step.UP_TO_DATE

        changed = sum(len(c.files) for c in self.outcome.commits)
        logger.debug("Added %d commits for a total of %d files", len(self.outcome.commits), changed)
        return Step.WRAPPERS_PROCESSED

    def update_wrapper(self, wrapper: WrapperInfo) -> CommitRecord | None:
        """Update, verify and commit one wrapper; None when it needed no change."""
        release = self.outcome.target_release
        console.print(f"\nWorking with Wrapper at: {wrapper.path}")
        logger.debug("Current Wrapper version: %s", wrapper.version)

        if wrapper.version == release.version:
            console.print("  Wrapper is already up-to-date")
            return None

        updater = self.updater_factory(
            wrapper,
            release,
            set_distribution_checksum=self.config.get("set_distribution_checksum", True),
            distributions_base_url=self.config.get("distributions_base_url", ""),
        )

        updater.update()
        modified = git.diff_name_only()
        if not modified:
            console.print(f"  Nothing to update for Wrapper at {wrapper.path}")
            return None

        # A second run lets the new Gradle version regenerate the jar and scripts
        updater.update()
        modified = git.diff_name_only()
        logger.debug("Modified files: %s", modified)

        updater.verify()
        commit(modified, release.version, wrapper.version)
        console.print(f"  Updated {wrapper.version} -> {release.version} ({len(modified)} file(s))")

        return CommitRecord(
            files=modified,
            target_version=release.version,
            source_version=wrapper.version,
            dist_type=wrapper.dist_type.value,
        )

    def open_pull_request(self) -> Step:
        summary = aggregate(self.outcome.commits)

        console.print("Pushing branch")
        git.push(self.outcome.branch_name)

        console.print("Creating Pull Request")
        pull_request = self.ops.create_pull_request(
            self.outcome.branch_name,
            self.config.get("pr_title_template") or DEFAULT_TITLE_TEMPLATE,
            summary.dist_types,
            self.outcome.target_release,
            summary.source_version,
        )
        self.state.set_pull_request_data(pull_request)
        self.outcome.pull_request = pull_request
        console.print(f"[green]✅ Created a Pull Request at {pull_request.url} ✨[/green]")
        return Step.PULL_REQUEST_CREATED
