"""Load and save the alias file"""

import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import List, Optional

import tomlkit

from aliasmgr.config import resolve_config_path
from aliasmgr.errors import AliasMgrError, ConfigFileError
from aliasmgr.models import Alias, Config, Group, validate_name

logger = logging.getLogger(__name__)


def _format_value(value) -> str:
    if isinstance(value, dict):
        pairs = ", ".join(f"{tomlkit.key(k).as_string()} = {_format_value(v)}" for k, v in value.items())
        return "{ " + pairs + " }"
    if isinstance(value, bool):
        return tomlkit.item(value).as_string()
    return tomlkit.string(value).as_string()


def _format_entry(alias: Alias) -> str:
    return f"{tomlkit.key(alias.name).as_string()} = {_format_value(alias.to_value())}"


def dumps(config: Config) -> str:
    """Serialize config: ungrouped aliases first, then one table per group"""
    lines: List[str] = [_format_entry(alias) for alias in config.members(None)]

    for group in config.groups.values():
        lines.append(f"[{tomlkit.key(group.name).as_string()}]")
        if not group.enabled:
            lines.append("enabled = false")
        lines.extend(_format_entry(alias) for alias in config.members(group.name))

    return "\n".join(lines) + "\n" if lines else ""


def _add_alias(config: Config, alias: Alias) -> None:
    try:
        validate_name(alias.name)
    except AliasMgrError as e:
        raise ConfigFileError(str(e)) from e
    if config.name_taken(alias.name):
        raise ConfigFileError(f"Name '{alias.name}' is defined more than once")
    config.aliases[alias.name] = alias


def loads(text: str) -> Config:
    """Parse the alias file format into a Config"""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(f"Invalid TOML: {e}") from e

    config = Config()
    # Groups are registered before their members so name clashes are caught
    # regardless of where the top-level alias appears
    for name, value in data.items():
        if isinstance(value, dict) and not Alias.is_alias_table(value):
            try:
                validate_name(name, "Group")
            except AliasMgrError as e:
                raise ConfigFileError(str(e)) from e
            enabled = value.get("enabled", True)
            if not isinstance(enabled, bool):
                raise ConfigFileError(f"Group '{name}' has a non-boolean 'enabled'")
            config.groups[name] = Group(name=name, enabled=enabled)

    for name, value in data.items():
        if isinstance(value, str) or (isinstance(value, dict) and Alias.is_alias_table(value)):
            _add_alias(config, Alias.from_value(name, value))
        elif isinstance(value, dict):
            for alias_name, alias_value in value.items():
                if alias_name == "enabled":
                    continue
                if isinstance(alias_value, dict) and not Alias.is_alias_table(alias_value):
                    raise ConfigFileError(f"Nested groups are not supported: '{name}.{alias_name}'")
                if not isinstance(alias_value, (str, dict)):
                    raise ConfigFileError(f"Alias '{alias_name}' in group '{name}' must be a string or table")
                _add_alias(config, Alias.from_value(alias_name, alias_value, group=name))
        else:
            raise ConfigFileError(f"Entry '{name}' must be a string, an alias table or a group")

    return config


class ConfigStore:
    """Handle storage and retrieval of the alias config"""

    def __init__(self, path: Optional[Path] = None):
        """Initialize storage with optional custom path"""
        self.path = resolve_config_path(path)

    def load(self) -> Config:
        """Load config from the TOML file; a missing file is an empty config"""
        if not self.path.exists():
            logger.info("Config file %s does not exist, using empty config", self.path)
            return Config()

        logger.debug("Loading config from %s", self.path)
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(f"Cannot read {self.path}: {e}") from e

        try:
            return loads(text)
        except ConfigFileError as e:
            raise ConfigFileError(f"{self.path}: {e}") from e

    def save(self, config: Config) -> None:
        """Atomically replace the TOML file with the serialized config"""
        content = dumps(config)
        if not self.path.exists():
            logger.warning("Config file %s does not exist, creating it", self.path)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=str(self.path.parent), prefix=".aliases-", delete=False
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ConfigFileError(f"Cannot write {self.path}: {e}") from e

        logger.debug("Saved %d aliases and %d groups to %s", len(config.aliases), len(config.groups), self.path)
