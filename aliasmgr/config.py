"""Environment variables and default locations"""

import os
from pathlib import Path
from typing import Optional

SHELL_ENV_VAR = "ALIASMGR_SHELL"
CONFIG_PATH_ENV_VAR = "ALIASMGR_CONFIG_PATH"

APP_DIR_NAME = "aliasmgr"
CONFIG_FILE_NAME = "aliases.toml"


def default_config_path() -> Path:
    """XDG location of the alias file: ~/.config/aliasmgr/aliases.toml"""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / APP_DIR_NAME / CONFIG_FILE_NAME


def resolve_config_path(override: Optional[Path] = None) -> Path:
    """Explicit path first, then $ALIASMGR_CONFIG_PATH, then the XDG default"""
    if override:
        return Path(override).expanduser()
    from_env = os.environ.get(CONFIG_PATH_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()
    return default_config_path()
