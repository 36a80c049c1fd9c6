import os

import pytest

from recentfiles.core.discovery.classifier import (
    CONVENTIONALLY_IGNORED_DIRS,
    is_conventionally_ignored,
    is_hidden,
)


@pytest.mark.parametrize("path", [".env", "src/.hidden", "a/b/.gitignore", ".."])
def test_dot_prefixed_final_segment_is_hidden(path):
    assert is_hidden(path) is True


@pytest.mark.parametrize("path", [".", "src", "src/main.py", ".config/settings", ".config/settings.toml", "a.b", "file."])
def test_other_final_segments_are_not_hidden(path):
    assert is_hidden(path) is False


def test_trailing_separator_does_not_hide_the_name():
    assert is_hidden(".cache/") is True
    assert is_hidden("cache/") is False


def test_parent_reference_is_hidden_without_normalising():
    assert is_hidden("src/..") is True
    assert is_hidden("src/../") is True
    assert is_hidden("/") is False


@pytest.mark.parametrize("name", sorted(CONVENTIONALLY_IGNORED_DIRS))
def test_every_ignored_name_is_detected_at_any_depth(name):
    assert is_conventionally_ignored(name)
    assert is_conventionally_ignored(os.path.join("project", name, "file.txt"))
    assert is_conventionally_ignored(os.path.join("a", "b", name))


def test_common_ignored_directories_present():
    for name in ("node_modules", ".git", "__pycache__", "build", "dist", "vendor"):
        assert name in CONVENTIONALLY_IGNORED_DIRS


@pytest.mark.parametrize("path", [
    "src/main.py",
    "node_modules_backup/index.js",  # only exact segment matches count
    "Build/output.o",                # case-sensitive
    "docs/building.md",
    "my.git/config",
])
def test_near_misses_are_not_ignored(path):
    assert is_conventionally_ignored(path) is False


def test_forward_slashes_are_split_on_every_platform():
    assert is_conventionally_ignored("web/node_modules/react/index.js")
