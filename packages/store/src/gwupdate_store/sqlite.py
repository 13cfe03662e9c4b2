"""SQLiteStore — file-based state for CLI runs.

When gwupdate runs as two plain workflow steps (rather than as an action with
a post hook), the runner gives us no native state channel. A small SQLite file
in the workspace or in RUNNER_TEMP bridges the two invocations.

Schema:
  state — one row per key; writes replace the previous value.
"""

from __future__ import annotations

import logging
import sqlite3

from gwupdate_store.base import BaseStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS state (
    key    TEXT PRIMARY KEY,
    value  TEXT NOT NULL
);
"""


class SQLiteStore(BaseStore):
    """Stores run state in a local SQLite database file.

    The database path defaults to `.gwupdate-state.db` in the current working
    directory. Configure via .gwupdate.yml: `store_path: /path/to/state.db`.
    """

    def __init__(self, db_path: str = ".gwupdate-state.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.executescript(_SCHEMA)
        self._conn.commit()
        logger.debug("Opened state database at %s", db_path)

    def set(self, key: str, value: str) -> None:
        self._conn.execute(
            "INSERT INTO state (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        self._conn.commit()

    def get(self, key: str) -> str:
        row = self._conn.execute("SELECT value FROM state WHERE key=?", (key,)).fetchone()
        return row[0] if row else ""

    def delete(self, key: str) -> None:
        self._conn.execute("DELETE FROM state WHERE key=?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
