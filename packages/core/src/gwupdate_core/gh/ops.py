"""Pull-request level operations built from GitHubApi calls."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gwupdate_core.gh.api import GitHubApi
from gwupdate_core.gh.notifier import CollaboratorNotifier
from gwupdate_core.messages import pull_request_text
from gwupdate_core.releases import Release
from gwupdate_store.models import PullRequestData

logger = logging.getLogger(__name__)

BRANCH_PREFIX = "gradlew-update-"


def branch_name_for(version: str) -> str:
    return f"{BRANCH_PREFIX}{version}"


class GitHubOps:
    def __init__(self, config: dict, api: GitHubApi, notifier: CollaboratorNotifier):
        self.config = config
        self.api = api
        self.notifier = notifier

    def find_matching_ref(self, target_version: str):
        """The branch a previous run pushed for ``target_version``, if any."""
        return self.api.find_matching_ref(f"heads/{branch_name_for(target_version)}")

    def create_pull_request(
        self,
        branch_name: str,
        title_template: str,
        dist_types: Iterable[str],
        target_release: Release,
        source_version: str | None = None,
    ) -> PullRequestData:
        """Open the PR, then attach labels, reviewers and auto-merge.

        Only repository lookup and PR creation can raise; everything after
        the PR exists is best effort.
        """
        text = pull_request_text(title_template, dist_types, target_release, source_version)

        target_branch = self.config.get("target_branch") or self.api.repo_default_branch()
        logger.debug("Target branch: %s", target_branch)

        pull = self.api.create_pull_request(
            branch_name=branch_name,
            target=target_branch,
            title=text.title,
            body=text.body,
        )

        self.notifier.add_labels(pull.number, self.config.get("labels", []))
        self.notifier.assign_reviewers(pull.number, self.config.get("reviewers", []))
        self.notifier.assign_team_reviewers(pull.number, self.config.get("team_reviewers", []))

        merge_method = self.config.get("merge_method")
        if merge_method:
            self.api.enable_auto_merge(pull.number, merge_method)

        return PullRequestData(url=pull.html_url, number=pull.number)
