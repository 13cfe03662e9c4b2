"""Best-effort reviewers, team reviewers and labels for the new pull request.

Each reviewer (and each team) is requested on its own. GitHub rejects the
whole batch when a single login is unknown or not a collaborator, so a typo
in one name would otherwise drop every reviewer. Names that could not be
requested are recorded in the run state for the post phase to report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from rich.console import Console

from gwupdate_core.gh.api import AssignmentResult, GitHubApi
from gwupdate_store.state import RunState

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_LABEL = "gradle-wrapper"


def partition(results: Iterable[AssignmentResult]) -> tuple[list[str], list[str]]:
    """Split results into (requested names, errored names), keeping order."""
    succeeded: list[str] = []
    errored: list[str] = []
    for result in results:
        (succeeded if result.ok else errored).append(result.name)
    return succeeded, errored


class CollaboratorNotifier:
    def __init__(self, api: GitHubApi, state: RunState):
        self.api = api
        self.state = state

    def assign_reviewers(self, pr_number: int, reviewers: list[str]) -> list[str]:
        """Request each reviewer; return (and persist) the ones that failed."""
        if not reviewers:
            logger.info("No reviewers to add")
            return []
        console.print(f"Requesting review from users: {', '.join(reviewers)}")
        errored = self._assign(pr_number, reviewers, self.api.request_reviewer)
        if errored:
            logger.warning(
                "Unable to set all the PR reviewers, check the following usernames are correct: %s",
                ", ".join(errored),
            )
            self.state.set_errored_reviewers(errored)
        return errored

    def assign_team_reviewers(self, pr_number: int, teams: list[str]) -> list[str]:
        """Request each team; return (and persist) the ones that failed."""
        if not teams:
            logger.info("No team reviewers to add")
            return []
        console.print(f"Requesting review from teams: {', '.join(teams)}")
        errored = self._assign(pr_number, teams, self.api.request_team_reviewer)
        if errored:
            logger.warning(
                "Unable to set all the PR team reviewers, check the following team names are correct: %s",
                ", ".join(errored),
            )
            self.state.set_errored_team_reviewers(errored)
        return errored

    def add_labels(self, pr_number: int, labels: list[str]) -> None:
        """Add the default label plus ``labels`` in one call; failures are only logged."""
        self.api.create_label_if_missing(DEFAULT_LABEL)
        all_labels = list(dict.fromkeys([DEFAULT_LABEL, *labels]))
        console.print(f"Adding labels: {', '.join(all_labels)}")
        self.api.add_labels(pr_number, all_labels)

    @staticmethod
    def _assign(pr_number: int, names: list[str], request: Callable[[int, str], AssignmentResult]) -> list[str]:
        results = []
        for name in names:
            try:
                results.append(request(pr_number, name))
            except Exception as e:
                results.append(AssignmentResult(name, error=str(e)))
        requested, errored = partition(results)
        logger.debug("Requested: %s, errored: %s", requested, errored)
        return errored
