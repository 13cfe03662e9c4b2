"""Tests for wrapper discovery and include/ignore filtering."""

import os

import pytest

from gwupdate_core.wrapper.find import find_wrapper_properties, glob_full_match

PROPS = "gradle/wrapper/gradle-wrapper.properties"


def _make_wrapper(root, subdir):
    path = root / subdir / PROPS
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("distributionUrl=https\\://services.gradle.org/distributions/gradle-1.0.0-bin.zip\n")
    return str(path.resolve())


@pytest.fixture
def workspace(tmp_path):
    a = _make_wrapper(tmp_path, "path_a")
    b = _make_wrapper(tmp_path, "path_b")
    c = _make_wrapper(tmp_path, "path_b/subpath_c")
    return tmp_path.resolve(), a, b, c


class TestFindWrapperProperties:
    def test_finds_all_wrappers_without_filters(self, workspace):
        root, a, b, c = workspace
        assert find_wrapper_properties([], [], root=root) == [a, b, c]

    def test_include_keeps_only_full_matches(self, workspace):
        root, a, b, c = workspace
        assert find_wrapper_properties([f"{root}/path_a/**"], [], root=root) == [a]

    def test_ignore_drops_full_matches(self, workspace):
        root, a, b, c = workspace
        assert find_wrapper_properties([], [f"{root}/path_a/**"], root=root) == [b, c]

    def test_same_include_and_ignore_yields_nothing(self, workspace):
        root, *_ = workspace
        assert find_wrapper_properties([f"{root}/path_a/**"], [f"{root}/path_a/**"], root=root) == []

    def test_ignore_is_applied_after_include(self, workspace):
        root, a, b, c = workspace
        result = find_wrapper_properties([f"{root}/path_b/**"], [f"{root}/path_b/subpath_c/**"], root=root)
        assert result == [b]

    def test_relative_globs_are_rooted_at_workspace(self, workspace):
        root, a, b, c = workspace
        assert find_wrapper_properties(["path_b/**"], ["path_b/subpath_c/**"], root=root) == [b]

    def test_prefix_match_is_not_enough(self, workspace):
        root, *_ = workspace
        # Matches the directory but not the full properties file path.
        assert find_wrapper_properties([f"{root}/path_a"], [], root=root) == []

    def test_empty_workspace_returns_empty_list(self, tmp_path):
        assert find_wrapper_properties([], [], root=tmp_path) == []

    def test_properties_outside_gradle_wrapper_dir_ignored(self, tmp_path):
        stray = tmp_path / "docs" / "gradle-wrapper.properties"
        stray.parent.mkdir()
        stray.write_text("")
        assert find_wrapper_properties([], [], root=tmp_path) == []

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_directories_not_followed(self, tmp_path):
        real = tmp_path / "real"
        _make_wrapper(real, "proj")
        workspace = tmp_path / "ws"
        workspace.mkdir()
        os.symlink(real, workspace / "link", target_is_directory=True)
        assert find_wrapper_properties([], [], root=workspace) == []


class TestGlobFullMatch:
    @pytest.mark.parametrize(
        ("pattern", "path", "expected"),
        [
            ("/r/**", "/r/a/b/c.txt", True),
            ("/r/*/c.txt", "/r/a/c.txt", True),
            ("/r/*/c.txt", "/r/a/b/c.txt", False),
            ("/r/**/c.txt", "/r/c.txt", True),
            ("/r/**/c.txt", "/r/a/b/c.txt", True),
            ("/r/a?/c.txt", "/r/ab/c.txt", True),
            ("/r/[ab]/c.txt", "/r/b/c.txt", True),
            ("/r/[!ab]/c.txt", "/r/b/c.txt", False),
            ("/r/a", "/r/a/c.txt", False),
        ],
    )
    def test_patterns(self, tmp_path, pattern, path, expected):
        assert glob_full_match(path, pattern, tmp_path) is expected
