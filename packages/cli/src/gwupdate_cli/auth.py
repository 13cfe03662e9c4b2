"""Find the token gwupdate pushes branches and opens pull requests with.

Resolution order (stops at first non-blank value):
  1. INPUT_REPO-TOKEN — the `repo-token` input when gwupdate runs as an action
  2. GITHUB_TOKEN — workflow env or an explicit local override
  3. `gh auth token` — local GitHub CLI session; never tried on Actions runners

The token needs `contents: write` and `pull-requests: write`. A branch pushed
with the workflow's built-in GITHUB_TOKEN does not trigger other workflows,
so pass a PAT as `repo-token` when CI must run on the update PR.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("INPUT_REPO-TOKEN", "GITHUB_TOKEN")


def resolve_github_token(environ: dict[str, str] | None = None) -> str | None:
    """Return a GitHub token, or None when no source has one.

    Never raises; the run command turns None into a UsageError.
    """
    env = environ if environ is not None else os.environ

    for name in TOKEN_ENV_VARS:
        token = env.get(name, "").strip()
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    if env.get("GITHUB_ACTIONS") == "true":
        # Runners have no gh session; gh would only echo GH_TOKEN back
        logger.debug("No repo-token or GITHUB_TOKEN set on the Actions runner.")
        return None

    return _gh_cli_token()


def _gh_cli_token() -> str | None:
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None

    token = result.stdout.strip() if result.returncode == 0 else ""
    if not token:
        return None
    logger.debug("Using GitHub token from the gh CLI session.")
    return token
