"""Abstract key/value store interface.

The main phase and the post phase of a run are separate processes. Whatever
the first one records must be readable by the second, so the backing storage
has to outlive the process: the GitHub Actions state file, a SQLite file on
the runner, or (for tests) plain memory. Callers depend on BaseStore, never
on a concrete backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseStore(ABC):
    """String-keyed, string-valued persistence shared by the two phases.

    Values are opaque strings. Structured data is JSON encoded by the caller
    (see RunState), so backends never need to know the schema.
    """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Persist ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value stored under ``key``, or ``""`` when absent.

        Never raises for a missing key.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; a later get() returns ``""``. Missing keys are ignored."""

    def close(self) -> None:
        """Release any resources held by the store (connections, file handles).

        Optional. Default is a no-op so callers can always call close() safely.
        """
