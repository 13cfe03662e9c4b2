"""ActionsStateStore — GitHub Actions native step state.

An action's `main` step can save state by appending ``name=value`` lines to
the file named by $GITHUB_STATE. The runner then exposes each entry to the
action's `post` step as the environment variable ``STATE_<name>``. This is
the only channel between the two steps, which run as separate processes.

Values written during the current process are also cached in memory, because
the runner only materialises STATE_* variables for later steps.
"""

from __future__ import annotations

import logging
import os

from gwupdate_store.base import BaseStore

logger = logging.getLogger(__name__)


class ActionsStateStore(BaseStore):
    def __init__(self, state_file: str | None = None, environ: dict[str, str] | None = None):
        self._state_file = state_file if state_file is not None else os.environ.get("GITHUB_STATE", "")
        self._environ = environ if environ is not None else os.environ
        self._written: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        if "\n" in value:
            raise ValueError(f"State value for {key!r} must be a single line.")
        self._written[key] = value
        if not self._state_file:
            logger.warning("GITHUB_STATE is not set; state %r will not reach the post step.", key)
            return
        with open(self._state_file, "a", encoding="utf-8") as f:
            f.write(f"{key}={value}\n")

    def get(self, key: str) -> str:
        if key in self._written:
            return self._written[key]
        return self._environ.get(f"STATE_{key}", "")

    def delete(self, key: str) -> None:
        # STATE_* variables are fixed for the life of the step; shadow them
        self._written[key] = ""
