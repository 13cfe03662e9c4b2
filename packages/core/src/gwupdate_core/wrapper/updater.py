"""Regenerate and verify one wrapper with the Gradle CLI."""

from __future__ import annotations

import hashlib
import logging
import subprocess

from gwupdate_core.errors import UpdateError, VerificationError
from gwupdate_core.releases import Release
from gwupdate_core.wrapper.info import DistributionType, WrapperInfo, distribution_url

logger = logging.getLogger(__name__)


class WrapperUpdater:
    """Runs `gradle wrapper` for one WrapperInfo and checks the result.

    ``set_distribution_checksum`` pins the distribution sha256 in the
    regenerated properties file so Gradle verifies it on first download.
    ``distributions_base_url`` swaps services.gradle.org for a mirror.
    """

    def __init__(
        self,
        wrapper: WrapperInfo,
        target_release: Release,
        set_distribution_checksum: bool = True,
        distributions_base_url: str = "",
        gradle_command: str = "gradle",
    ):
        self.wrapper = wrapper
        self.target_release = target_release
        self.set_distribution_checksum = set_distribution_checksum
        self.distributions_base_url = distributions_base_url
        self.gradle_command = gradle_command

    def update_args(self) -> list[str]:
        version = self.target_release.version
        dist_type = self.wrapper.dist_type.value
        args = ["wrapper", "--gradle-version", version, "--distribution-type", dist_type]

        if self.set_distribution_checksum:
            checksum = (
                self.target_release.bin_checksum
                if self.wrapper.dist_type is DistributionType.BIN
                else self.target_release.all_checksum
            )
            args += ["--gradle-distribution-sha256-sum", checksum]

        if self.distributions_base_url:
            args += ["--gradle-distribution-url", distribution_url(self.distributions_base_url, version, dist_type)]

        return args

    def update(self) -> None:
        cmd = [self.gradle_command, *self.update_args()]
        logger.debug("Running %s in %s", cmd, self.wrapper.base_path)
        result = _run(cmd, self.wrapper.base_path)
        if result.returncode != 0:
            raise UpdateError(result.stderr.strip() or f"{' '.join(cmd)} exited with {result.returncode}")

    def verify(self) -> None:
        self.verify_sha()
        self.verify_run()

    def verify_sha(self) -> None:
        jar_path = self.wrapper.jar_path
        logger.debug("Verifying SHA-256 for: %s", jar_path)
        try:
            with open(jar_path, "rb") as f:
                digest = hashlib.sha256(f.read()).hexdigest()
        except OSError as e:
            raise VerificationError(f"Unable to read wrapper jar {jar_path}: {e}") from e
        logger.debug("SHA-256: %s", digest)

        if digest != self.target_release.wrapper_checksum:
            raise VerificationError("SHA-256 Wrapper jar mismatch")

    def verify_run(self) -> None:
        # gradlew downloads the distribution and fails on a checksum mismatch
        result = _run(["./gradlew", "--help"], self.wrapper.base_path)
        stderr = result.stderr.strip()
        if result.returncode != 0 and stderr:
            mismatch = [line for line in stderr.splitlines() if "checksum:" in line]
            raise VerificationError("Gradle binary verification error 🚨\n\n" + "\n".join(mismatch))


def _run(cmd: list[str], cwd: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise UpdateError(f"Unable to run {cmd[0]}: {e}") from e
