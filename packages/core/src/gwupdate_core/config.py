import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_TITLE_TEMPLATE = "Update Gradle Wrapper from %sourceVersion% to %targetVersion%"

DEFAULT_CONFIG: dict = {
    "reviewers": [],
    "team_reviewers": [],
    "labels": [],
    "paths": [],  # globs; only matching wrapper files are updated
    "paths_ignore": [],  # globs; applied after `paths`
    "base_branch": "",  # "" = repository default branch
    "target_branch": "",  # "" = repository default branch
    "release_channel": "stable",
    "pr_title_template": DEFAULT_TITLE_TEMPLATE,
    "set_distribution_checksum": True,
    "distributions_base_url": "",
    "merge_method": None,  # None = do not enable auto-merge
    "store": "sqlite",
    "store_path": ".gwupdate-state.db",
}

LIST_KEYS = ("reviewers", "team_reviewers", "labels", "paths", "paths_ignore")
RELEASE_CHANNELS = ("stable", "release-candidate")
MERGE_METHODS = ("MERGE", "REBASE", "SQUASH")
STORES = ("sqlite", "actions", "memory")


def split_list(value) -> list[str]:
    """Normalise a list option.

    Accepts a YAML list or a single string separated by commas, spaces or
    newlines ("foo, bar\\nbaz" -> ["foo", "bar", "baz"]).
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.replace(",", " ").split()
    else:
        items = [str(v).strip() for v in value]
    return [item for item in items if item]


def parse_bool_flag(value) -> bool:
    """Only an explicit "false" (any case) disables a flag that defaults to on."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() != "false"


def load_config(config_path: str = ".gwupdate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .gwupdate.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG}
    for key in LIST_KEYS:
        config[key] = list(DEFAULT_CONFIG[key])

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key in LIST_KEYS:
        config[key] = split_list(config.get(key))
    config["set_distribution_checksum"] = parse_bool_flag(config.get("set_distribution_checksum", True))
    config["release_channel"] = (config.get("release_channel") or "stable").strip()
    config["base_branch"] = (config.get("base_branch") or "").strip()
    config["target_branch"] = (config.get("target_branch") or "").strip()
    config["distributions_base_url"] = (config.get("distributions_base_url") or "").strip().rstrip("/")
    merge_method = config.get("merge_method")
    config["merge_method"] = merge_method.strip().upper() if merge_method and merge_method.strip() else None

    # Credentials and CI context from the environment
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    if not config.get("repository"):
        config["repository"] = os.environ.get("GITHUB_REPOSITORY")
    if not config.get("workspace"):
        config["workspace"] = os.environ.get("GITHUB_WORKSPACE") or os.getcwd()

    validate_config(config)
    return config


def validate_config(config: dict) -> None:
    """Raise ValueError for option values gwupdate cannot act on."""
    if config["release_channel"] not in RELEASE_CHANNELS:
        raise ValueError(
            f"Unknown release channel: {config['release_channel']!r}. "
            f"Choose one of: {', '.join(RELEASE_CHANNELS)}."
        )
    if config["merge_method"] is not None and config["merge_method"] not in MERGE_METHODS:
        raise ValueError(
            f"merge_method must be one of {', '.join(MERGE_METHODS)} (or unset), got {config['merge_method']!r}."
        )
    if config.get("store", "sqlite") not in STORES:
        raise ValueError(f"Unknown store backend: {config['store']!r}. Choose one of: {', '.join(STORES)}.")
