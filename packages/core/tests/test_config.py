"""Tests for configuration loading."""

import pytest

from gwupdate_core.config import DEFAULT_TITLE_TEMPLATE, load_config, parse_bool_flag, split_list


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["reviewers"] == []
    assert config["team_reviewers"] == []
    assert config["labels"] == []
    assert config["release_channel"] == "stable"
    assert config["pr_title_template"] == DEFAULT_TITLE_TEMPLATE
    assert config["set_distribution_checksum"] is True
    assert config["merge_method"] is None
    assert config["store"] == "sqlite"


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("release_channel: release-candidate\nbase_branch: develop\n")
    config = load_config(config_path=str(cfg))
    assert config["release_channel"] == "release-candidate"
    assert config["base_branch"] == "develop"


def test_reviewers_accept_yaml_list_or_string(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("reviewers:\n  - alice\n  - bob\nteam_reviewers: 'core, infra'\n")
    config = load_config(config_path=str(cfg))
    assert config["reviewers"] == ["alice", "bob"]
    assert config["team_reviewers"] == ["core", "infra"]


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("target_branch: release\n")
    config = load_config(config_path=str(cfg), cli_overrides={"target_branch": "main"})
    assert config["target_branch"] == "main"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("target_branch: release\n")
    config = load_config(config_path=str(cfg), cli_overrides={"target_branch": None})
    assert config["target_branch"] == "release"


def test_merge_method_is_upper_cased(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("merge_method: squash\n")
    assert load_config(config_path=str(cfg))["merge_method"] == "SQUASH"


def test_invalid_merge_method_raises(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("merge_method: fast-forward\n")
    with pytest.raises(ValueError, match="merge_method"):
        load_config(config_path=str(cfg))


def test_invalid_release_channel_raises(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("release_channel: nightly\n")
    with pytest.raises(ValueError, match="release channel"):
        load_config(config_path=str(cfg))


def test_distributions_base_url_trailing_slash_stripped(tmp_path):
    cfg = tmp_path / ".gwupdate.yml"
    cfg.write_text("distributions_base_url: https://mirror.example.com/gradle/\n")
    config = load_config(config_path=str(cfg))
    assert config["distributions_base_url"] == "https://mirror.example.com/gradle"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    monkeypatch.setenv("GITHUB_WORKSPACE", str(tmp_path))
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"
    assert config["repository"] == "owner/repo"
    assert config["workspace"] == str(tmp_path)


def test_list_defaults_are_not_shared_references(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["labels"].append("dependencies")
    assert config_b["labels"] == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("", []),
        ("foo", ["foo"]),
        ("foo bar", ["foo", "bar"]),
        ("foo,bar", ["foo", "bar"]),
        ("foo, bar", ["foo", "bar"]),
        ("foo\nbar", ["foo", "bar"]),
        ("foo\n\tbar, baz", ["foo", "bar", "baz"]),
        (None, []),
        (["a", " b ", ""], ["a", "b"]),
    ],
)
def test_split_list(value, expected):
    assert split_list(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", True), ("foo", True), ("true", True), ("false", False), ("False", False), ("FALSE", False), (False, False)],
)
def test_parse_bool_flag_only_false_string_disables(value, expected):
    assert parse_bool_flag(value) is expected
