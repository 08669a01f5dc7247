# amalgo/config/loader.py
"""
Handles loading and merging of configuration values from TOML files
(user-global file, project-local file, named profiles).
"""
import toml
from pathlib import Path
from typing import Any, Dict, Optional
import structlog

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".amalgo.toml", "amalgo.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "amalgo"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

# toml key -> AmalgoConfig attribute
CONFIG_KEY_TO_ATTR_MAP: Dict[str, str] = {
    "dir": "base_dir",
    "extensions": "extensions",
    "ignore_dirs": "ignore_dirs",
    "include_hidden": "include_hidden",
    "gitignore": "gitignore_path",
    "use_gitignore": "use_gitignore",
    "ignore_patterns": "ignore_patterns",
    "follow_symlinks": "follow_symlinks",
    "format": "output_format",
    "heading_level": "heading_level",
    "output": "output_file",
}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file():
        return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (OSError, toml.TomlDecodeError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        return {}
    if file_path.name == "pyproject.toml":
        return data.get("tool", {}).get("amalgo", {})
    return data

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    # user-global values first, then the first project-local file found; profiles are merged by name.
    project_dir = project_dir or Path.cwd()
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = project_dir / filename
        if not candidate.is_file():
            continue
        project_settings = _load_toml_file_data(candidate)
        if not project_settings:
            continue
        log.info("loading_project_local_config", path=str(candidate))
        user_profiles = merged_toml_data.get("profiles", {})
        project_profiles = project_settings.pop("profiles", {})
        if project_profiles and isinstance(project_profiles, dict):
            if isinstance(user_profiles, dict):
                user_profiles.update(project_profiles)
                merged_toml_data["profiles"] = user_profiles
            else:
                merged_toml_data["profiles"] = project_profiles
        merged_toml_data.update(project_settings)
        break

    if not merged_toml_data:
        log.debug("no_configuration_files_loaded")
    return merged_toml_data

def resolve_config_values(raw_configs: Dict[str, Any], profile_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Flattens merged TOML data into AmalgoConfig attribute names, applying the
    named profile (if any) on top of the top-level settings.
    """
    values: Dict[str, Any] = {}
    for toml_key, attr in CONFIG_KEY_TO_ATTR_MAP.items():
        if toml_key in raw_configs:
            values[attr] = raw_configs[toml_key]

    if profile_name:
        profile_values = raw_configs.get("profiles", {}).get(profile_name, {})
        if profile_values:
            log.info("applying_profile_settings", profile=profile_name)
            for toml_key, attr in CONFIG_KEY_TO_ATTR_MAP.items():
                if toml_key in profile_values:
                    values[attr] = profile_values[toml_key]
        else:
            log.warning("profile_not_found_in_config_files", profile_name=profile_name)
    return values
