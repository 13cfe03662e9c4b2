"""In-process store — nothing survives the process.

Used by tests and by callers that only want to exercise a single phase.
"""

from __future__ import annotations

from gwupdate_store.base import BaseStore


class MemoryStore(BaseStore):
    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def get(self, key: str) -> str:
        return self._values.get(key, "")

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
