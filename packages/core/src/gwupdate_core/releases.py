"""Fetch Gradle release metadata and published checksums."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from gwupdate_core.errors import ReleaseFetchError

logger = logging.getLogger(__name__)

SERVICES_URL = "https://services.gradle.org"

_CHANNEL_ENDPOINTS = {
    "stable": "/versions/current",
    "release-candidate": "/versions/release-candidate",
}


@dataclass(frozen=True)
class Release:
    version: str
    bin_checksum: str
    all_checksum: str
    wrapper_checksum: str


class Releases:
    def __init__(self, session: requests.Session | None = None, base_url: str = SERVICES_URL, timeout: float = 30):
        self.session = session if session is not None else requests.Session()
        self.session.headers.setdefault("User-Agent", "gwupdate")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_release_information(self, channel: str = "stable") -> Release:
        """Resolve the newest release on ``channel`` with all three checksums.

        Raises ReleaseFetchError on any transport, status or payload problem.
        """
        endpoint = _CHANNEL_ENDPOINTS.get(channel or "stable")
        if endpoint is None:
            raise ReleaseFetchError(f"Unknown release channel: {channel!r}")

        data = self._get_json(self.base_url + endpoint)
        if not data or not all(data.get(k) for k in ("version", "checksumUrl", "wrapperChecksumUrl")):
            raise ReleaseFetchError(f"Unable to fetch release data for channel {channel!r}")

        version = data["version"]
        logger.debug("version %s (current=%s)", version, data.get("current"))

        checksum_url = data["checksumUrl"]
        bin_checksum = self._get_text(checksum_url)
        all_checksum = self._get_text(checksum_url.replace("-bin.zip", "-all.zip"))
        wrapper_checksum = self._get_text(data["wrapperChecksumUrl"])

        return Release(
            version=version,
            bin_checksum=bin_checksum,
            all_checksum=all_checksum,
            wrapper_checksum=wrapper_checksum,
        )

    def _get(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, timeout=self.timeout)
            logger.debug("GET %s -> %s", url, response.status_code)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ReleaseFetchError(f"Request to {url} failed: {e}") from e
        return response

    def _get_json(self, url: str) -> dict:
        response = self._get(url)
        try:
            return response.json()
        except ValueError as e:
            raise ReleaseFetchError(f"Invalid JSON from {url}") from e

    def _get_text(self, url: str) -> str:
        body = self._get(url).text.strip()
        if not body:
            raise ReleaseFetchError(f"Empty checksum from {url}")
        return body
