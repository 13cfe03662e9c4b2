"""GitHub REST calls used by gwupdate, on top of PyGithub.

Failure policy per call:
  repo_default_branch, find_matching_ref, create_pull_request  — raise
  request_reviewer, request_team_reviewer                      — AssignmentResult
  add_labels, create_label*, create_comment, enable_auto_merge — log and continue
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Github, GithubException

logger = logging.getLogger(__name__)

LABEL_COLOR = "02303A"
LABEL_DESCRIPTION = "Pull requests that update Gradle wrapper"
MERGE_METHODS = ("MERGE", "REBASE", "SQUASH")


@dataclass(frozen=True)
class AssignmentResult:
    """Outcome of requesting one reviewer or team: ``error`` is None on success."""

    name: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


class GitHubApi:
    def __init__(self, repo):
        self.repo = repo

    @classmethod
    def from_token(cls, repo_name: str, token: str) -> GitHubApi:
        return cls(get_repo(repo_name, token))

    def repo_default_branch(self) -> str:
        return self.repo.default_branch

    def find_matching_ref(self, ref_name: str):
        """Return the git ref named exactly ``refs/<ref_name>``, or None.

        GitHub's matching-refs endpoint is a prefix search, so
        ``heads/gradlew-update-1.0`` would also return ``...-1.0.1``.
        """
        matching = [ref for ref in self.repo.get_git_matching_refs(ref_name) if ref.ref == f"refs/{ref_name}"]
        return matching[0] if len(matching) == 1 else None

    def create_pull_request(self, branch_name: str, target: str, title: str, body: str):
        pull = self.repo.create_pull(base=target, head=branch_name, title=title, body=body)
        logger.debug("PullRequest number: %s, changed files: %s", pull.number, pull.changed_files)
        return pull

    def request_reviewer(self, pr_number: int, reviewer: str) -> AssignmentResult:
        try:
            pull = self.repo.get_pull(pr_number)
            pull.create_review_request(reviewers=[reviewer])
            users, _ = pull.get_review_requests()
            requested = {user.login.lower() for user in users}
        except Exception as e:
            logger.warning("Unable to set PR reviewer %s: %s", reviewer, e)
            return AssignmentResult(reviewer, error=str(e))

        if reviewer.lower() not in requested:
            logger.warning("Unable to set PR reviewer %s", reviewer)
            return AssignmentResult(reviewer, error="not among requested reviewers")
        return AssignmentResult(reviewer)

    def request_team_reviewer(self, pr_number: int, team: str) -> AssignmentResult:
        try:
            pull = self.repo.get_pull(pr_number)
            pull.create_review_request(team_reviewers=[team])
            _, teams = pull.get_review_requests()
            requested = {t.slug.lower() for t in teams}
        except Exception as e:
            logger.warning("Unable to set PR team reviewer %s: %s", team, e)
            return AssignmentResult(team, error=str(e))

        if team.lower() not in requested:
            logger.warning("Unable to set PR team reviewer %s", team)
            return AssignmentResult(team, error="not among requested teams")
        return AssignmentResult(team)

    def add_labels(self, pr_number: int, labels: list[str]) -> None:
        try:
            self.repo.get_issue(pr_number).add_to_labels(*labels)
        except Exception as e:
            logger.warning("Unable to add all labels to PR #%s: %s", pr_number, e)

    def create_label_if_missing(self, label_name: str) -> bool:
        try:
            label = self.repo.get_label(label_name)
        except GithubException as e:
            if e.status == 404:
                logger.debug("Label %s not found", label_name)
                return self.create_label(label_name)
            logger.debug("Label lookup for %s failed: %s", label_name, e)
            return False
        except Exception as e:
            logger.debug("Label lookup for %s failed: %s", label_name, e)
            return False

        logger.debug("Label %s already exists with id: %s", label_name, label.id)
        return True

    def create_label(self, label_name: str) -> bool:
        try:
            label = self.repo.create_label(name=label_name, color=LABEL_COLOR, description=LABEL_DESCRIPTION)
        except Exception as e:
            # Also covers a concurrent run creating the same label first (422)
            logger.warning('Unable to create label "%s": %s', label_name, e)
            return False
        logger.debug("Created label %s with id: %s", label_name, label.id)
        return True

    def create_comment(self, pr_number: int, body: str) -> bool:
        try:
            comment = self.repo.get_issue(pr_number).create_comment(body)
        except Exception as e:
            logger.warning("Unable to create comment for PR #%s: %s", pr_number, e)
            return False
        logger.debug("Created comment for PR #%s with id: %s", pr_number, comment.id)
        return True

    def enable_auto_merge(self, pr_number: int, merge_method: str) -> None:
        method = merge_method.upper()
        if method not in MERGE_METHODS:
            logger.warning("merge_method must be one of %s, got %r", ", ".join(MERGE_METHODS), merge_method)
            return
        try:
            self.repo.get_pull(pr_number).enable_automerge(merge_method=method)
        except Exception as e:
            logger.warning("Unable to enable auto-merge [%s] for PR #%s: %s", method, pr_number, e)
            return
        logger.debug("Enabled auto-merge [%s] on PR #%s", method, pr_number)
