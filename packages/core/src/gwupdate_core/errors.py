"""Exceptions that abort a run.

Everything here is fatal for the main phase. Recoverable per-reviewer problems
are not exceptions at all; see gh.notifier.AssignmentResult.
"""

from __future__ import annotations


class GwUpdateError(Exception):
    """Base class for every fatal gwupdate error."""


class InvalidPath(GwUpdateError):
    pass


class MalformedWrapperFile(GwUpdateError):
    pass


class ReleaseFetchError(GwUpdateError):
    pass


class UpdateError(GwUpdateError):
    pass


class VerificationError(GwUpdateError):
    pass


class InvalidBaseBranch(GwUpdateError):
    pass


class GitError(GwUpdateError):
    """A git subprocess exited non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str):
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr or f"exit code {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")
