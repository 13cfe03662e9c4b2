"""Locate gradle-wrapper.properties files in a workspace."""

from __future__ import annotations

import logging
import os
import re
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

PROPERTIES_FILENAME = "gradle-wrapper.properties"
_WRAPPER_DIR_PARTS = ("gradle", "wrapper")
_SKIP_DIRS = {".git"}


def find_wrapper_properties(
    paths_include: list[str],
    paths_ignore: list[str],
    root: str | Path | None = None,
) -> list[str]:
    """Return absolute paths of every `**/gradle/wrapper/gradle-wrapper.properties`.

    Symlinked directories are not followed. When ``paths_include`` is non-empty
    only files fully matching at least one include glob are kept; then any file
    fully matching an ignore glob is dropped. Relative globs are rooted at
    ``root``. An empty result is not an error.
    """
    base = Path(root) if root is not None else Path.cwd()
    base = base.resolve()

    found = _discover(base)
    logger.debug("wrapper.properties found: %s", found)
    if not found:
        return found

    if paths_include:
        found = [p for p in found if any(glob_full_match(p, g, base) for g in paths_include)]
        logger.debug("wrapper.properties after paths: %s", found)

    if paths_ignore:
        found = [p for p in found if not any(glob_full_match(p, g, base) for g in paths_ignore)]
        logger.debug("wrapper.properties after paths_ignore: %s", found)

    return found


def _discover(base: Path) -> list[str]:
    results = []
    for dirpath, dirnames, filenames in os.walk(base, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        if PROPERTIES_FILENAME not in filenames:
            continue
        parent = Path(dirpath)
        if parent.parts[-2:] == _WRAPPER_DIR_PARTS:
            results.append(str(parent / PROPERTIES_FILENAME))
    return results


def glob_full_match(path: str, pattern: str, root: Path) -> bool:
    """True when the whole of ``path`` matches ``pattern``, not just a prefix.

    ``*`` and ``?`` stay within one path segment, ``**`` spans any number of
    segments (including none).
    """
    if not os.path.isabs(pattern):
        pattern = (root / pattern).as_posix()
    return _compile(pattern).fullmatch(Path(path).as_posix()) is not None


@lru_cache(maxsize=128)
def _compile(pattern: str) -> re.Pattern:
    regex = ""
    for segment in pattern.split("/"):
        if not segment:
            continue
        if segment == "**":
            regex += "(?:/[^/]+)*"
        else:
            regex += "/" + _translate_segment(segment)
    return re.compile(regex or "/")


def _translate_segment(segment: str) -> str:
    out = []
    i = 0
    while i < len(segment):
        c = segment[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = segment.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = segment[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)
