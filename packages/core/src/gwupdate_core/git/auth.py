"""Authenticate git over HTTPS with the repository token.

actions/checkout may persist its own credentials, but gwupdate can run with a
different token (e.g. a PAT that triggers workflows on the new PR). Setting
an extraheader in local config makes every fetch/push use our token; the post
phase removes it again.
"""

from __future__ import annotations

import base64
import logging
import os

from gwupdate_core.git import cmds as git

logger = logging.getLogger(__name__)

EXTRAHEADER_KEY = "http.https://github.com/.extraheader"


def setup(token: str) -> None:
    encoded = base64.b64encode(f"x-access-token:{token}".encode()).decode()
    if os.environ.get("GITHUB_ACTIONS") == "true":
        # Keep the credential out of the job log
        print(f"::add-mask::{encoded}")
    git.config(EXTRAHEADER_KEY, f"Authorization: basic {encoded}")


def cleanup() -> None:
    git.unset_config(EXTRAHEADER_KEY)
