"""Mutations of the alias model, one per CLI action

Every handler validates its arguments against the config, applies a single
change and returns True when the config was modified.
"""

import logging
from typing import Dict, List, Optional, TypeVar

from aliasmgr.errors import (
    AliasExistsError,
    GroupExistsError,
    InvalidArgumentError,
)
from aliasmgr.models import Alias, Config, Group, validate_name

logger = logging.getLogger(__name__)

# Sentinels for optional arguments where None already means "ungrouped"
UNCHANGED = object()
ALL = object()

T = TypeVar("T")


def _check_new_alias_name(config: Config, name: str) -> None:
    validate_name(name)
    if name in config.aliases:
        raise AliasExistsError(name)
    if name in config.groups:
        raise GroupExistsError(name)


def _check_new_group_name(config: Config, name: str) -> None:
    validate_name(name, "Group")
    if name in config.groups:
        raise GroupExistsError(name)
    if name in config.aliases:
        raise AliasExistsError(name)


def _ensure_group(config: Config, group: Optional[str], create: bool) -> None:
    if group is None or group in config.groups:
        return
    if not create:
        config.get_group(group)
    add_group(config, group)


def _renamed(entries: Dict[str, T], old: str, new: str) -> Dict[str, T]:
    """Copy of entries with one key replaced, keeping its position"""
    return {(new if key == old else key): value for key, value in entries.items()}


def add_alias(
    config: Config,
    name: str,
    command: str,
    group: Optional[str] = None,
    enabled: bool = True,
    is_global: bool = False,
    force: bool = False,
    create_group: bool = False,
) -> bool:
    """Add a new alias, or overwrite an existing one when forced"""
    if not command.strip():
        raise InvalidArgumentError(f"Command for alias '{name}' cannot be empty")

    existing = config.aliases.get(name)
    if existing is None or not force:
        _check_new_alias_name(config, name)
    # Groups share the alias namespace, so an alias cannot live in its namesake
    if group == name:
        raise AliasExistsError(name)

    _ensure_group(config, group, create_group)

    if existing is not None:
        logger.info("Overwriting alias '%s'", name)
        updated = Alias(name=name, command=command, enabled=enabled, is_global=is_global, group=group)
        if updated == existing:
            return False
        config.aliases[name] = updated
        return True

    config.aliases[name] = Alias(name=name, command=command, enabled=enabled, is_global=is_global, group=group)
    logger.info("Alias '%s' added with command '%s'", name, command)
    return True


def add_group(config: Config, name: str, enabled: bool = True) -> bool:
    _check_new_group_name(config, name)
    config.groups[name] = Group(name=name, enabled=enabled)
    logger.info("Group '%s' added (enabled=%s)", name, enabled)
    return True


def remove_alias(config: Config, name: str) -> bool:
    config.get_alias(name)
    del config.aliases[name]
    logger.info("Alias '%s' removed", name)
    return True


def remove_group(config: Config, name: str, reassign: bool = False) -> bool:
    """Remove a group; its aliases become ungrouped when reassigned, else are deleted"""
    config.get_group(name)
    members = config.members(name)
    for alias in members:
        if reassign:
            alias.group = None
        else:
            del config.aliases[alias.name]
    del config.groups[name]
    logger.info(
        "Group '%s' removed, %d aliases %s",
        name,
        len(members),
        "moved to ungrouped" if reassign else "deleted",
    )
    return True


def remove_all(config: Config) -> bool:
    if not config.aliases and not config.groups:
        return False
    config.aliases.clear()
    config.groups.clear()
    logger.info("All aliases and groups removed")
    return True


def move_alias(config: Config, name: str, group: Optional[str] = None, create_group: bool = False) -> bool:
    """Move an alias into a group (None for ungrouped), placing it last"""
    alias = config.get_alias(name)
    if alias.group == group:
        return False
    _ensure_group(config, group, create_group)
    alias.group = group
    # Re-insert so the alias ends up at the end of its new group
    config.aliases[name] = config.aliases.pop(name)
    logger.info("Alias '%s' moved to %s", name, f"group '{group}'" if group else "ungrouped")
    return True


def rename_alias(config: Config, old: str, new: str) -> bool:
    alias = config.get_alias(old)
    if old == new:
        return False
    _check_new_alias_name(config, new)
    alias.name = new
    config.aliases = _renamed(config.aliases, old, new)
    logger.info("Alias '%s' renamed to '%s'", old, new)
    return True


def rename_group(config: Config, old: str, new: str) -> bool:
    group = config.get_group(old)
    if old == new:
        return False
    _check_new_group_name(config, new)
    group.name = new
    config.groups = _renamed(config.groups, old, new)
    for alias in config.members(old):
        alias.group = new
    logger.info("Group '%s' renamed to '%s'", old, new)
    return True


def edit_alias(
    config: Config,
    name: str,
    command: Optional[str] = None,
    group=UNCHANGED,
    toggle_enabled: bool = False,
    toggle_global: bool = False,
    create_group: bool = False,
) -> bool:
    """Change the command, group or flags of an existing alias"""
    alias = config.get_alias(name)
    if command is None and group is UNCHANGED and not toggle_enabled and not toggle_global:
        raise InvalidArgumentError(f"Nothing to edit for alias '{name}'")
    if command is not None and not command.strip():
        raise InvalidArgumentError(f"Command for alias '{name}' cannot be empty")

    before = Alias(**vars(alias))
    if group is not UNCHANGED and group != alias.group:
        move_alias(config, name, group, create_group=create_group)
    if command is not None:
        alias.command = command
    if toggle_enabled:
        alias.enabled = not alias.enabled
    if toggle_global:
        alias.is_global = not alias.is_global

    if alias == before:
        return False
    logger.info("Alias '%s' updated: %s", name, alias)
    return True


def _set_alias_enabled(config: Config, name: str, enabled: bool) -> bool:
    alias = config.get_alias(name)
    if alias.enabled == enabled:
        logger.info("Alias '%s' is already %s", name, "enabled" if enabled else "disabled")
        return False
    alias.enabled = enabled
    return True


def _set_group_enabled(config: Config, name: str, enabled: bool) -> bool:
    group = config.get_group(name)
    if group.enabled == enabled:
        logger.info("Group '%s' is already %s", name, "enabled" if enabled else "disabled")
        return False
    group.enabled = enabled
    return True


def enable_alias(config: Config, name: str) -> bool:
    return _set_alias_enabled(config, name, True)


def disable_alias(config: Config, name: str) -> bool:
    return _set_alias_enabled(config, name, False)


def enable_group(config: Config, name: str) -> bool:
    return _set_group_enabled(config, name, True)


def disable_group(config: Config, name: str) -> bool:
    return _set_group_enabled(config, name, False)


def sort_aliases(config: Config, group=ALL) -> bool:
    """Sort all aliases by name, or only one group's within the slots they occupy"""
    if group is ALL:
        ordered = dict(sorted(config.aliases.items()))
    else:
        if group is not None:
            config.get_group(group)
        names: List[str] = list(config.aliases)
        slots = [i for i, n in enumerate(names) if config.aliases[n].group == group]
        for slot, name in zip(slots, sorted(names[i] for i in slots)):
            names[slot] = name
        ordered = {name: config.aliases[name] for name in names}

    if list(ordered) == list(config.aliases):
        return False
    config.aliases = ordered
    return True


def sort_groups(config: Config) -> bool:
    ordered = dict(sorted(config.groups.items()))
    if list(ordered) == list(config.groups):
        return False
    config.groups = ordered
    return True
