from __future__ import annotations

from gwupdate_core.git import cmds as git
from gwupdate_core.messages import commit_message


def commit(files: list[str], target_version: str, source_version: str) -> None:
    """Stage ``files`` and record one wrapper update commit."""
    git.add(files)
    git.commit(commit_message(source_version, target_version))
