"""Data models for aliases and groups"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from rapidfuzz import fuzz, process

from aliasmgr.errors import (
    AliasNotFoundError,
    ConfigFileError,
    GroupNotFoundError,
    InvalidNameError,
)

# Keys with a meaning of their own inside alias and group tables
RESERVED_NAMES = ("command", "enabled", "global")

# Whitespace, '=' and characters the shell would interpret inside an alias name
INVALID_NAME_CHARS = re.compile(r"[\s='\"`$/\\;|&<>()]")

SUGGESTION_CUTOFF = 60


def validate_name(name: str, kind: str = "Alias") -> str:
    """Return name unchanged or raise InvalidNameError"""
    if not name:
        raise InvalidNameError(f"{kind} name cannot be empty")
    bad = INVALID_NAME_CHARS.search(name)
    if bad:
        raise InvalidNameError(f"{kind} name '{name}' contains invalid character {bad.group()!r}")
    if name in RESERVED_NAMES:
        raise InvalidNameError(f"{kind} name '{name}' is reserved")
    return name


def suggest(name: str, candidates: Iterable[str]) -> Optional[str]:
    """Closest candidate to a mistyped name, if any is close enough"""
    match = process.extractOne(name, list(candidates), scorer=fuzz.ratio, score_cutoff=SUGGESTION_CUTOFF)
    return match[0] if match else None


@dataclass
class Alias:
    """Represents a shell alias"""
    name: str
    command: str
    enabled: bool = True
    is_global: bool = False  # zsh only
    group: Optional[str] = None

    @property
    def detailed(self) -> bool:
        """Whether the alias needs the table form instead of a bare string"""
        return not self.enabled or self.is_global

    def to_value(self) -> Union[str, dict]:
        """Convert alias to the value stored under its name in the file"""
        if not self.detailed:
            return self.command
        value = {"command": self.command}
        if not self.enabled:
            value["enabled"] = False
        if self.is_global:
            value["global"] = True
        return value

    @classmethod
    def from_value(cls, name: str, value: Union[str, dict], group: Optional[str] = None) -> "Alias":
        """Create alias from a value read from the file"""
        if isinstance(value, str):
            return cls(name=name, command=value, group=group)

        unknown = set(value) - {"command", "enabled", "global"}
        if unknown:
            raise ConfigFileError(f"Alias '{name}' has unknown keys: {', '.join(sorted(unknown))}")
        command = value.get("command")
        enabled = value.get("enabled", True)
        is_global = value.get("global", False)
        if not isinstance(command, str):
            raise ConfigFileError(f"Alias '{name}' must have a string 'command'")
        if not isinstance(enabled, bool) or not isinstance(is_global, bool):
            raise ConfigFileError(f"Alias '{name}' has non-boolean 'enabled' or 'global'")
        return cls(name=name, command=command, enabled=enabled, is_global=is_global, group=group)

    @staticmethod
    def is_alias_table(value: dict) -> bool:
        """Tell a detailed alias table apart from a group table"""
        return isinstance(value.get("command"), str) and set(value) <= {"command", "enabled", "global"}

    def __str__(self) -> str:
        """String representation for display"""
        return f"{self.name}='{self.command}'"


@dataclass
class Group:
    """A named, toggleable collection of aliases"""
    name: str
    enabled: bool = True


@dataclass
class Config:
    """Ordered aliases and groups, as they appear in the alias file"""
    aliases: Dict[str, Alias] = field(default_factory=dict)
    groups: Dict[str, Group] = field(default_factory=dict)

    def get_alias(self, name: str) -> Alias:
        if name not in self.aliases:
            raise AliasNotFoundError(name, suggest(name, self.aliases))
        return self.aliases[name]

    def get_group(self, name: str) -> Group:
        if name not in self.groups:
            raise GroupNotFoundError(name, suggest(name, self.groups))
        return self.groups[name]

    def members(self, group: Optional[str]) -> List[Alias]:
        """Aliases of a group in file order, or ungrouped ones for None"""
        return [alias for alias in self.aliases.values() if alias.group == group]

    def is_active(self, alias: Alias) -> bool:
        """An alias reaches the shell only if it and its group are enabled"""
        if not alias.enabled:
            return False
        if alias.group is None:
            return True
        return self.groups[alias.group].enabled

    def name_taken(self, name: str) -> bool:
        return name in self.aliases or name in self.groups
