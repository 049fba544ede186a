"""Configuration module"""

from .loader import (
    get_project_config_path,
    get_user_config_path,
    init_project_config,
    load_config,
    save_config,
)
from .schema import Config, Settings

__all__ = [
    "Config",
    "Settings",
    "load_config",
    "save_config",
    "init_project_config",
    "get_user_config_path",
    "get_project_config_path",
]
