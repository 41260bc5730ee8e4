"""Translate the alias model into shell alias statements"""

import fnmatch
import logging
from typing import Dict, List, Optional

from aliasmgr.models import Alias, Config
from aliasmgr.shell_detector import ShellType

logger = logging.getLogger(__name__)

# Group filter meaning "any group, grouped or not"
ANY = object()

ENABLED = "enabled"
DISABLED = "disabled"

GLOB_CHARS = "*?["


def quote(command: str) -> str:
    """Single-quote a command for bash and zsh"""
    return "'" + command.replace("'", "'\\''") + "'"


def matches_pattern(name: str, pattern: str) -> bool:
    if any(c in pattern for c in GLOB_CHARS):
        return fnmatch.fnmatchcase(name, pattern)
    return pattern in name


def alias_statement(alias: Alias, shell: ShellType) -> Optional[str]:
    """`alias name='command'`, `alias -g` for zsh globals, None if unsupported"""
    if alias.is_global:
        if not shell.supports_global_aliases:
            return None
        return f"alias -g {alias.name}={quote(alias.command)}"
    return f"alias {alias.name}={quote(alias.command)}"


def unalias_statement(name: str) -> str:
    return f"unalias {name}"


def select_aliases(
    config: Config,
    shell: ShellType,
    group=ANY,
    state: Optional[str] = None,
    global_only: bool = False,
    pattern: Optional[str] = None,
) -> List[Alias]:
    """Filter aliases in file order"""
    if group is not ANY and group is not None:
        config.get_group(group)
    if global_only and not shell.supports_global_aliases:
        return []

    selected = []
    for alias in config.aliases.values():
        if group is not ANY and alias.group != group:
            continue
        if state == ENABLED and not config.is_active(alias):
            continue
        if state == DISABLED and config.is_active(alias):
            continue
        if global_only and not alias.is_global:
            continue
        if pattern and not matches_pattern(alias.name, pattern):
            continue
        selected.append(alias)
    return selected


def project(config: Config, shell: ShellType) -> Dict[str, str]:
    """Statements for every alias the shell should currently have"""
    statements = {}
    for alias in config.aliases.values():
        if not config.is_active(alias):
            continue
        statement = alias_statement(alias, shell)
        if statement is None:
            logger.debug("Skipping global alias '%s', %s has no global aliases", alias.name, shell.value)
            continue
        statements[alias.name] = statement
    return statements


def sync_script(config: Config, shell: ShellType) -> str:
    """Full alias state: drop everything, then define every active alias"""
    lines = ["unalias -a"]
    lines.extend(project(config, shell).values())
    return "\n".join(lines)


def diff(before: Dict[str, str], after: Dict[str, str]) -> List[str]:
    """Statements that turn the `before` projection into `after`"""
    lines = [unalias_statement(name) for name in before if name not in after]
    lines.extend(statement for name, statement in after.items() if before.get(name) != statement)
    return lines
