"""Tests for the post phase report."""

from unittest.mock import MagicMock

import pytest

from gwupdate_core.errors import GitError
from gwupdate_core.post import PostPhase
from gwupdate_store.memory import MemoryStore
from gwupdate_store.models import PullRequestData
from gwupdate_store.state import RunState

PR = PullRequestData(url="https://github.com/o/r/pull/3", number=3)


@pytest.fixture
def git_auth(mocker):
    return mocker.patch("gwupdate_core.post.git_auth")


@pytest.fixture
def api():
    api = MagicMock()
    api.create_comment.return_value = True
    return api


@pytest.fixture
def state():
    return RunState(MemoryStore())


def test_one_comment_lists_errored_reviewers(git_auth, api, state):
    state.set_errored_reviewers(["alice"])

    PostPhase(api, state).run(PR)

    api.create_comment.assert_called_once()
    number, body = api.create_comment.call_args.args
    assert number == 3
    assert "- @alice" in body


def test_reviewers_and_teams_share_one_comment(git_auth, api, state):
    state.set_errored_reviewers(["alice"])
    state.set_errored_team_reviewers(["core"])

    assert PostPhase(api, state).report_errored_reviewers(PR) is True

    body = api.create_comment.call_args.args[1]
    assert body.index("- @alice") < body.index("- @core")


def test_no_comment_without_errored_reviewers(git_auth, api, state):
    assert PostPhase(api, state).report_errored_reviewers(PR) is False
    api.create_comment.assert_not_called()


def test_credentials_cleaned_up(git_auth, api, state):
    PostPhase(api, state).run(PR)
    git_auth.cleanup.assert_called_once()


def test_failures_never_propagate(git_auth, api, state):
    state.set_errored_reviewers(["alice"])
    api.create_comment.side_effect = RuntimeError("boom")

    PostPhase(api, state).run(PR)  # must not raise


def test_cleanup_failure_still_reports(git_auth, api, state):
    state.set_errored_reviewers(["alice"])
    git_auth.cleanup.side_effect = GitError(["config", "--local", "--unset-all", "k"], 5, "")

    PostPhase(api, state).run(PR)  # must not raise

    api.create_comment.assert_called_once()
    assert "- @alice" in api.create_comment.call_args.args[1]
