"""Text rendered into commits, pull requests and follow-up comments."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from gwupdate_core.releases import Release

HELP_URL = "https://github.com/gwupdate/gwupdate"
ISSUES_URL = f"{HELP_URL}/issues"

TARGET_VERSION_PLACEHOLDER = "%targetVersion%"
SOURCE_VERSION_PLACEHOLDER = "%sourceVersion%"

# Rendered when several wrappers started from different versions.
UNDEFINED_SOURCE_VERSION = "undefined"

_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class PullRequestText:
    title: str
    body: str


def release_notes_url(version: str) -> str:
    return f"https://docs.gradle.org/{version}/release-notes.html"


def replace_version_placeholders(template: str, source_version: str | None, target_version: str) -> str:
    return template.replace(TARGET_VERSION_PLACEHOLDER, target_version).replace(
        SOURCE_VERSION_PLACEHOLDER, source_version if source_version is not None else UNDEFINED_SOURCE_VERSION
    )


def pull_request_text(
    title_template: str,
    dist_types: Iterable[str],
    target_release: Release,
    source_version: str | None = None,
) -> PullRequestText:
    """Render the PR title and body.

    The body has three blocks separated by horizontal rules: the title with a
    release-notes link, the verified checksums (one line per distribution type
    actually touched, bin before all, then the wrapper JAR), and a footer.
    """
    touched = set(dist_types)
    target_version = target_release.version
    title = replace_version_placeholders(title_template, source_version, target_version)

    header = f"{title}.\n\nRead the release notes: {release_notes_url(target_version)}"

    checksum_lines = [
        "The checksums of the Wrapper JAR and the distribution binary have been successfully verified.",
        "",
        f"- Gradle release: `{target_version}`",
    ]
    if "bin" in touched:
        checksum_lines.append(f"- Distribution (-bin) zip checksum: `{target_release.bin_checksum}`")
    if "all" in touched:
        checksum_lines.append(f"- Distribution (-all) zip checksum: `{target_release.all_checksum}`")
    checksum_lines.append(f"- Wrapper JAR Checksum: `{target_release.wrapper_checksum}`")
    checksum_lines += ["", "You can find the reference checksum values at https://gradle.org/release-checksums/"]

    footer = (
        f"🤖 This PR has been created by [gwupdate]({HELP_URL}).\n"
        "\n"
        "<details>\n"
        "<summary>Need help? 🤔</summary>\n"
        "<br />\n"
        "\n"
        f"If something doesn't look right with this PR please file an issue [here]({ISSUES_URL}).\n"
        "</details>"
    )

    body = _SEPARATOR.join([header, "\n".join(checksum_lines), footer])
    return PullRequestText(title=title, body=body)


def commit_message(source_version: str, target_version: str) -> str:
    summary = f"Update Gradle Wrapper from {source_version} to {target_version}."
    return f"{summary}\n\n{summary}\n- [Release notes]({release_notes_url(target_version)})"


def errored_reviewers_comment(names: list[str]) -> str:
    """Comment posted by the post phase listing reviewers/teams that could not be requested."""
    mentions = "".join(f"- @{name}\n" for name in names)
    return (
        "Unable to set all the PR reviewers, check the following usernames are correct:\n"
        "\n"
        f"{mentions}"
        "\n"
        f"Please refer to the documentation for the [`reviewers`]({HELP_URL}#reviewers) "
        f"and [`team_reviewers`]({HELP_URL}#team-reviewers) options.\n"
        "\n"
        "---\n"
        "\n"
        "🤖 This is an automatic comment by gwupdate."
    )
