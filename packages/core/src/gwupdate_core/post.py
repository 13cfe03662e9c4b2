"""Post phase: report what the main phase could not finish.

Runs in a later process with no memory of the main phase; everything it
knows comes from RunState. It must never fail the CI run it reports on.
"""

from __future__ import annotations

import logging

from gwupdate_core.gh.api import GitHubApi
from gwupdate_core.git import auth as git_auth
from gwupdate_core.messages import errored_reviewers_comment
from gwupdate_store.models import PullRequestData
from gwupdate_store.state import RunState

logger = logging.getLogger(__name__)


class PostPhase:
    def __init__(self, api: GitHubApi, state: RunState):
        self.api = api
        self.state = state

    def run(self, pull_request: PullRequestData) -> None:
        try:
            git_auth.cleanup()
        except Exception as e:
            logger.warning("Unable to remove git credentials: %s", e)
        try:
            self.report_errored_reviewers(pull_request)
        except Exception as e:
            logger.warning("Unable to report errored reviewers: %s", e)

    def report_errored_reviewers(self, pull_request: PullRequestData) -> bool:
        """Comment once on the PR listing every reviewer and team that was rejected.

        Returns True when a comment was posted.
        """
        names = self.state.get_errored_reviewers() + self.state.get_errored_team_reviewers()
        if not names:
            logger.debug("No errored reviewers to report")
            return False
        return self.api.create_comment(pull_request.number, errored_reviewers_comment(names))
