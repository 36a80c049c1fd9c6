# recentfiles/config/loader.py
"""
Handles loading and merging of search defaults from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
import structlog

from recentfiles.exceptions import ConfigError

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".recentfiles.toml", "recentfiles.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "recentfiles"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP: Dict[str, str] = {
    "limit": "limit",
    "workers": "max_workers",
    "max_workers": "max_workers",
    "follow_symlinks": "follow_symlinks",
    "output_format": "output_format",
    "relative_paths": "relative_paths",
    "output_file": "output_file",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("recentfiles", {})
    return data

def load_and_merge_configs(base_dir: Optional[Path] = None) -> Dict[str, Any]:
    # user-global settings first, then the first project-local file found.
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    search_dir = base_dir if base_dir is not None else Path.cwd()
    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = search_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if isinstance(user_profiles, dict) and isinstance(project_profiles, dict):
            user_profiles.update(project_profiles)
            merged_toml_data["profiles"] = user_profiles
        elif isinstance(project_profiles, dict):
            merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        log.debug("project_config_applied", source_file=str(candidate))
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def resolve_config_options(raw_config: Dict[str, Any], profile_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Flattens merged TOML data into SearchConfig keyword arguments.

    Top-level keys apply first, then the named profile's keys on top.
    Unknown keys are ignored.
    """
    options: Dict[str, Any] = {}
    for toml_key, attr in CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP.items():
        if toml_key in raw_config:
            options[attr] = raw_config[toml_key]

    if profile_name:
        profile_values = raw_config.get("profiles", {}).get(profile_name)
        if profile_values is None:
            log.warning("profile_not_found_in_config_files", profile_name=profile_name)
        elif not isinstance(profile_values, dict):
            raise ConfigError(f"profile '{profile_name}' must be a table, got {type(profile_values).__name__}")
        else:
            log.info("applying_profile_settings", profile=profile_name)
            for toml_key, attr in CONFIG_KEY_TO_SEARCHCONFIG_ATTR_MAP.items():
                if toml_key in profile_values:
                    options[attr] = profile_values[toml_key]

    if "limit" in options and not isinstance(options["limit"], int):
        raise ConfigError(f"'limit' must be an integer, got {options['limit']!r}")
    return options
