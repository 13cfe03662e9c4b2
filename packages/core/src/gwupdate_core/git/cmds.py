"""Thin wrappers over the `git` executable.

Each function maps to a single git command run in the current working
directory. A non-zero exit raises GitError carrying git's stderr, except for
checkout(), whose exit code the caller inspects, and unset_config().
"""

from __future__ import annotations

import logging
import subprocess

from gwupdate_core.errors import GitError

logger = logging.getLogger(__name__)


def _git(args: list[str], check: bool = True) -> subprocess.CompletedProcess:
    logger.debug("git %s", " ".join(args))
    result = subprocess.run(["git", *args], capture_output=True, text=True)
    if check and result.returncode != 0:
        raise GitError(args, result.returncode, result.stderr.strip())
    return result


def diff_name_only() -> list[str]:
    files = [f for f in _git(["diff", "--name-only"]).stdout.splitlines() if f]
    logger.debug("Git diff files: %s", files)
    return files


def parse_head() -> str:
    return _git(["rev-parse", "HEAD"]).stdout.strip()


def fetch() -> None:
    _git(["fetch", "--depth=1"])


def checkout(branch_name: str) -> int:
    return _git(["checkout", branch_name], check=False).returncode


def checkout_create_branch(branch_name: str, start_point: str) -> None:
    _git(["checkout", "-b", branch_name, start_point])


def add(paths: list[str]) -> None:
    _git(["add", *paths])


def commit(message: str) -> None:
    _git(["commit", "-m", message, "--signoff"])


def config(key: str, value: str) -> None:
    _git(["config", "--local", key, value])


def unset_config(key: str) -> None:
    # exits 5 when the key is not set
    _git(["config", "--local", "--unset-all", key], check=False)


def push(branch_name: str) -> None:
    _git(["push", "--force-with-lease", "origin", f"HEAD:refs/heads/{branch_name}"])
