"""Configuration loader"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .schema import Config, Settings

# Default config file names
USER_CONFIG_DIR = ".agentc"
USER_CONFIG_FILE = "config.yaml"
PROJECT_CONFIG_FILE = ".agentc.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def get_user_config_path() -> Path:
    """Get user configuration file path"""
    return Path.home() / USER_CONFIG_DIR / USER_CONFIG_FILE


def get_project_config_path(project_root: Optional[Path] = None) -> Path:
    """Get project configuration file path"""
    root = project_root or Path.cwd()
    return root / PROJECT_CONFIG_FILE


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries"""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _apply_env_vars(config_data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides"""

    if source_dir := os.getenv("AGENTC_SOURCE_DIR"):
        config_data.setdefault("settings", {})["source_dir"] = source_dir

    if output_dir := os.getenv("AGENTC_OUTPUT_DIR"):
        config_data.setdefault("settings", {})["output_dir"] = output_dir

    strict = os.getenv("AGENTC_STRICT")
    if strict is not None:
        value = strict.strip().lower()
        if value in _TRUE_VALUES:
            config_data.setdefault("settings", {})["strict"] = True
        elif value in _FALSE_VALUES:
            config_data.setdefault("settings", {})["strict"] = False

    return config_data


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file"""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def load_config(
    project_root: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
    project_config_path: Optional[Path] = None,
) -> Config:
    """
    Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Project config (.agentc.yaml)
    3. User config (~/.agentc/config.yaml)
    4. Default values

    Args:
        project_root: Project root directory (default: cwd)
        user_config_path: Custom user config path
        project_config_path: Custom project config path

    Returns:
        Merged Config object
    """
    root = (project_root or Path.cwd()).resolve()
    config_data: dict[str, Any] = {}

    # Load user config
    user_path = user_config_path or get_user_config_path()
    user_data = _load_yaml_file(user_path)
    if user_data:
        config_data = _deep_merge(config_data, user_data)

    # Load project config
    project_path = project_config_path or get_project_config_path(root)
    project_data = _load_yaml_file(project_path)
    if project_data:
        config_data = _deep_merge(config_data, project_data)

    # Apply environment variables
    config_data = _apply_env_vars(config_data)

    # project_root is never read from files
    config_data.pop("project_root", None)
    return Config(project_root=root, **config_data)


def save_config(config: Config, path: Path) -> None:
    """Save configuration to file"""
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(exclude_defaults=True, exclude={"project_root"})

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)


def init_project_config(project_root: Optional[Path] = None, force: bool = False) -> Path:
    """Write a project config listing every setting at its default value.

    Args:
        project_root: Project root directory (default: cwd)
        force: If True, overwrite an existing file

    Returns:
        Path to config file
    """
    config_path = get_project_config_path(project_root)

    if config_path.exists() and not force:
        return config_path

    defaults = Settings()
    lines = [
        "# agentc project configuration",
        "# Paths are relative to the directory holding this file.",
        "",
        "settings:",
    ]
    for name, value in defaults.model_dump().items():
        description = Settings.model_fields[name].description
        if description:
            lines.append(f"  # {description}")
        rendered = yaml.safe_dump({name: value}, default_flow_style=False).strip()
        lines.append(f"  {rendered}")

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return config_path
