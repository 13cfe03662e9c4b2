"""Typed schema for the state handed from the main phase to the post phase."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StateKey(str, Enum):
    """Every key the two phases are allowed to exchange."""

    MAIN_PHASE_EXECUTED = "main-phase-executed"
    PULL_REQUEST_DATA = "pull-request-data"
    ERRORED_REVIEWERS = "errored-reviewers"
    ERRORED_TEAM_REVIEWERS = "errored-team-reviewers"


@dataclass(frozen=True)
class PullRequestData:
    """Identity of the pull request created by the main phase."""

    url: str
    number: int
