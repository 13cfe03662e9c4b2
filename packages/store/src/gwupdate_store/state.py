"""RunState — the typed contract over a BaseStore.

The main phase writes, the post phase reads. Neither touches the raw store:
both receive the same RunState (built over a backend that outlives the
process), so the set of keys and the encoding of each value live here only.
"""

from __future__ import annotations

import json
import logging

from gwupdate_store.base import BaseStore
from gwupdate_store.models import PullRequestData, StateKey

logger = logging.getLogger(__name__)


class RunState:
    def __init__(self, store: BaseStore):
        self._store = store

    # --- main phase flag -------------------------------------------------

    def set_main_phase_executed(self) -> None:
        self._store.set(StateKey.MAIN_PHASE_EXECUTED.value, "true")

    def is_main_phase_executed(self) -> bool:
        return self._store.get(StateKey.MAIN_PHASE_EXECUTED.value) == "true"

    # --- pull request ----------------------------------------------------

    def set_pull_request_data(self, data: PullRequestData) -> None:
        self._store.set(
            StateKey.PULL_REQUEST_DATA.value,
            json.dumps({"url": data.url, "number": data.number}),
        )

    def get_pull_request_data(self) -> PullRequestData | None:
        raw = self._load(StateKey.PULL_REQUEST_DATA)
        if not raw:
            return None
        return PullRequestData(url=raw.get("url", ""), number=int(raw["number"]))

    # --- errored collaborators --------------------------------------------

    def set_errored_reviewers(self, reviewers: list[str]) -> None:
        self._store.set(StateKey.ERRORED_REVIEWERS.value, json.dumps(list(reviewers)))

    def get_errored_reviewers(self) -> list[str]:
        return list(self._load(StateKey.ERRORED_REVIEWERS) or [])

    def set_errored_team_reviewers(self, teams: list[str]) -> None:
        self._store.set(StateKey.ERRORED_TEAM_REVIEWERS.value, json.dumps(list(teams)))

    def get_errored_team_reviewers(self) -> list[str]:
        return list(self._load(StateKey.ERRORED_TEAM_REVIEWERS) or [])

    def snapshot(self) -> dict[str, str]:
        """Raw value of every known key, for display."""
        return {key.value: self._store.get(key.value) for key in StateKey}

    def clear(self) -> None:
        """Discard every key so the next invocation starts a new run."""
        for key in StateKey:
            self._store.delete(key.value)

    def close(self) -> None:
        self._store.close()

    def _load(self, key: StateKey):
        value = self._store.get(key.value)
        if not value:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable state value for %s: %r", key.value, value)
            return None
