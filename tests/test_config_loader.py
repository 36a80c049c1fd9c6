from pathlib import Path

import pytest

from recentfiles.config import loader
from recentfiles.config.loader import load_and_merge_configs, resolve_config_options
from recentfiles.config.settings import DEFAULT_LIMIT, OutputFormat, SearchConfig
from recentfiles.exceptions import ConfigError


@pytest.fixture
def project_toml(tmp_path: Path) -> Path:
    (tmp_path / ".recentfiles.toml").write_text(
        """
limit = 25
output_format = "json"

[profiles.wide]
limit = 0
workers = 2
relative_paths = true

[profiles.broken]
limit = "lots"
"""
    )
    return tmp_path


def test_no_files_gives_empty_config(tmp_path: Path):
    assert load_and_merge_configs(tmp_path) == {}


def test_project_file_is_loaded(project_toml: Path):
    raw = load_and_merge_configs(project_toml)
    assert raw["limit"] == 25
    assert "wide" in raw["profiles"]


def test_pyproject_tool_table(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n\n[tool.recentfiles]\nlimit = 7\n')
    assert resolve_config_options(load_and_merge_configs(tmp_path)) == {"limit": 7}


def test_first_project_file_wins(tmp_path: Path):
    (tmp_path / ".recentfiles.toml").write_text("limit = 1\n")
    (tmp_path / "recentfiles.toml").write_text("limit = 2\n")
    assert load_and_merge_configs(tmp_path)["limit"] == 1


def test_user_config_is_overridden_by_project(project_toml: Path, isolated_user_config: Path):
    isolated_user_config.write_text('limit = 3\nfollow_symlinks = false\n[profiles.mine]\nlimit = 9\n')
    raw = load_and_merge_configs(project_toml)
    assert raw["limit"] == 25
    assert raw["follow_symlinks"] is False
    assert set(raw["profiles"]) == {"mine", "wide", "broken"}


def test_invalid_toml_is_ignored(tmp_path: Path):
    (tmp_path / ".recentfiles.toml").write_text("limit = = 3\n")
    assert load_and_merge_configs(tmp_path) == {}


def test_profile_overrides_top_level(project_toml: Path):
    options = resolve_config_options(load_and_merge_configs(project_toml), "wide")
    assert options == {"limit": 0, "max_workers": 2, "output_format": "json", "relative_paths": True}
    config = SearchConfig(**options)
    assert config.output_format == OutputFormat.JSON
    assert config.max_workers == 2


def test_unknown_profile_falls_back_to_top_level(project_toml: Path):
    options = resolve_config_options(load_and_merge_configs(project_toml), "missing")
    assert options == {"limit": 25, "output_format": "json"}


def test_non_integer_limit_is_a_config_error(project_toml: Path):
    with pytest.raises(ConfigError):
        resolve_config_options(load_and_merge_configs(project_toml), "broken")


def test_non_table_profile_is_a_config_error():
    with pytest.raises(ConfigError):
        resolve_config_options({"profiles": {"odd": 5}}, "odd")


def test_search_config_defaults_and_coercion():
    config = SearchConfig(root_path="src", output_format="TABLE", output_file="out.txt", max_workers=0)
    assert config.limit == DEFAULT_LIMIT
    assert config.root_path == Path("src")
    assert config.output_format == OutputFormat.TABLE
    assert config.output_file == Path("out.txt")
    assert config.max_workers >= 4


def test_invalid_output_format_falls_back_to_text():
    assert OutputFormat.from_string("yaml") == OutputFormat.TEXT
    assert OutputFormat.from_string(None) == OutputFormat.TEXT
