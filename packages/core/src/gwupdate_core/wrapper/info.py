"""Parse a gradle-wrapper.properties file into a WrapperInfo."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gwupdate_core.errors import InvalidPath, MalformedWrapperFile

logger = logging.getLogger(__name__)

# The type follows the last "-" so pre-release versions such as 7.0-rc-2 stay whole
_DISTRIBUTION_URL_RE = re.compile(r"^distributionUrl=.*/gradle-(?P<version>.+)-(?P<dist_type>[^-/]+)\.zip$")


class DistributionType(str, Enum):
    BIN = "bin"
    ALL = "all"


@dataclass(frozen=True)
class WrapperInfo:
    path: str
    base_path: str
    version: str
    dist_type: DistributionType

    @property
    def jar_path(self) -> str:
        return str(Path(self.path).with_name("gradle-wrapper.jar"))


def distribution_url(base_url: str, version: str, dist_type: str) -> str:
    """Build the URL of a Gradle distribution zip under ``base_url``."""
    return f"{base_url.rstrip('/')}/gradle-{version}-{dist_type}.zip"


def parse_wrapper(path: str) -> WrapperInfo:
    """Read ``path`` and extract the wrapper version and distribution type.

    The file's ``distributionUrl`` line must point at
    ``.../gradle-<version>-<type>.zip``; <type> is the text after the last
    ``-`` and must be ``bin`` or ``all``.
    """
    if not os.path.isabs(path):
        raise InvalidPath(f"{path} is not an absolute path")

    p = Path(path)
    # <base>/gradle/wrapper/gradle-wrapper.properties
    base_path = p.parents[2] if len(p.parents) > 2 and p.parent.parent.name == "gradle" else p.parent
    logger.debug("WrapperInfo path=%s base_path=%s", path, base_path)

    props = p.read_text(encoding="utf-8")
    lines = [line.strip() for line in props.strip().splitlines()]
    distribution_urls = [line for line in lines if line.startswith("distributionUrl=")]
    logger.debug("distributionUrl lines: %s", distribution_urls)

    for line in distribution_urls:
        match = _DISTRIBUTION_URL_RE.match(line)
        if match is None:
            continue
        try:
            dist_type = DistributionType(match["dist_type"])
        except ValueError:
            raise MalformedWrapperFile(
                f"Unknown distribution type {match['dist_type']!r} in {path}"
            ) from None
        logger.debug("version=%s distribution=%s", match["version"], dist_type.value)
        return WrapperInfo(path=str(p), base_path=str(base_path), version=match["version"], dist_type=dist_type)

    raise MalformedWrapperFile(f"Unable to parse properties file {path}")
