"""Command line interface for aliasmgr"""

import functools
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aliasmgr import __version__
from aliasmgr import handlers
from aliasmgr.errors import AliasMgrError
from aliasmgr.log import configure_logging
from aliasmgr.models import Config
from aliasmgr.projector import ANY, DISABLED, ENABLED, diff, project, select_aliases, sync_script
from aliasmgr.scanner import AliasScanner
from aliasmgr.shell_detector import ShellDetector, ShellType
from aliasmgr.shell_integrator import ShellIntegrator
from aliasmgr.storage import ConfigStore

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

SHELL_CHOICE = click.Choice([shell.value for shell in ShellType], case_sensitive=False)


class App:
    """Per-invocation state shared by all subcommands"""

    def __init__(self, config_path: Optional[Path] = None, shell: Optional[str] = None):
        self.config_path = config_path
        self.store = ConfigStore(config_path)
        self.integrator = ShellIntegrator()
        self._shell = ShellType(shell.lower()) if shell else None

    @property
    def shell(self) -> ShellType:
        if self._shell is None:
            self._shell = ShellDetector().detect_current_shell()
            logger.debug("Using shell %s", self._shell.value)
        return self._shell

    def mutate(self, action: Callable[[Config], bool], store: Optional[ConfigStore] = None) -> bool:
        """Load, apply one change, save, and push the alias delta to the shell"""
        store = store or self.store
        config = store.load()
        before = project(config, self.shell)

        if not action(config):
            console.print("[dim]No changes made[/]")
            return False

        store.save(config)
        if store.path.resolve() == self.store.path.resolve():
            delta = diff(before, project(config, self.shell))
            if delta and not self.integrator.send_delta("\n".join(delta)):
                console.print("[dim]💡 Shell not updated, run 'aliasmgr init' setup or 'eval \"$(aliasmgr sync)\"'[/]")
        return True

    def warn_if_global_unsupported(self, name: str) -> None:
        if not self.shell.supports_global_aliases:
            logger.warning("Global aliases are zsh only, '%s' is saved but not applied in %s", name, self.shell.value)


def handle_errors(f):
    """Report aliasmgr errors on stderr and exit non-zero"""

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except AliasMgrError as e:
            err_console.print(f"[red]✗[/] {escape(str(e))}")
            sys.exit(1)

    return wrapper


def _group_option(group: Optional[str], ungrouped: bool, default=handlers.UNCHANGED):
    if group and ungrouped:
        raise click.UsageError("--group and --ungrouped are mutually exclusive")
    if ungrouped:
        return None
    if group:
        return group
    return default


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Alias file to use (default: $ALIASMGR_CONFIG_PATH or ~/.config/aliasmgr/aliases.toml)",
)
@click.option("--shell", type=SHELL_CHOICE, help="Shell dialect (default: $ALIASMGR_SHELL)")
@click.option("--verbose", "-v", is_flag=True, help="Show informational messages")
@click.option("--debug", is_flag=True, help="Show debug messages")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors")
@click.version_option(version=__version__, prog_name="aliasmgr")
@click.pass_context
def main(ctx, config_path, shell, verbose, debug, quiet):
    """aliasmgr - manage your shell aliases from one TOML file"""
    configure_logging(verbose=verbose, debug=debug, quiet=quiet)
    ctx.obj = App(config_path=config_path, shell=shell)


@main.group()
def add():
    """Add a new alias or group"""


@add.command(name="alias")
@click.argument("name")
@click.argument("command")
@click.option("--group", "-g", help="Add the alias to GROUP")
@click.option("--disabled", is_flag=True, help="Store the alias without activating it")
@click.option("--global", "is_global", is_flag=True, help="Define a global alias (zsh only)")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing alias")
@click.option("--create-group", "-c", is_flag=True, help="Create GROUP if it does not exist")
@click.pass_obj
@handle_errors
def add_alias(app, name, command, group, disabled, is_global, force, create_group):
    """Add alias NAME for COMMAND"""
    changed = app.mutate(
        lambda config: handlers.add_alias(
            config,
            name,
            command,
            group=group,
            enabled=not disabled,
            is_global=is_global,
            force=force,
            create_group=create_group,
        )
    )
    if changed:
        where = f" in group [magenta]{escape(group)}[/]" if group else ""
        console.print(f"[green]✔[/] Added alias: [cyan]{escape(name)}[/] = '{escape(command)}'{where}")
        if is_global:
            app.warn_if_global_unsupported(name)


@add.command(name="group")
@click.argument("name")
@click.option("--disabled", is_flag=True, help="Create the group disabled")
@click.pass_obj
@handle_errors
def add_group(app, name, disabled):
    """Add an empty group NAME"""
    if app.mutate(lambda config: handlers.add_group(config, name, enabled=not disabled)):
        console.print(f"[green]✔[/] Added group: [magenta]{escape(name)}[/]")


@main.command()
@click.argument("name")
@click.argument("group", required=False)
@click.option("--create-group", "-c", is_flag=True, help="Create GROUP if it does not exist")
@click.pass_obj
@handle_errors
def move(app, name, group, create_group):
    """Move alias NAME into GROUP (ungrouped when GROUP is omitted)"""
    if app.mutate(lambda config: handlers.move_alias(config, name, group, create_group=create_group)):
        target = f"group [magenta]{escape(group)}[/]" if group else "ungrouped"
        console.print(f"[green]✔[/] Moved [cyan]{escape(name)}[/] to {target}")


@main.command(name="list")
@click.argument("pattern", required=False)
@click.option("--group", "-g", help="Only aliases in GROUP")
@click.option("--ungrouped", "-u", is_flag=True, help="Only aliases outside any group")
@click.option("--enabled", "-e", is_flag=True, help="Only aliases active in the shell")
@click.option("--disabled", "-d", is_flag=True, help="Only aliases that are disabled")
@click.option("--global", "global_only", is_flag=True, help="Only global aliases (zsh)")
@click.pass_obj
@handle_errors
def list_aliases(app, pattern, group, ungrouped, enabled, disabled, global_only):
    """List aliases, optionally filtered by name PATTERN"""
    if enabled and disabled:
        raise click.UsageError("--enabled and --disabled are mutually exclusive")
    state = ENABLED if enabled else DISABLED if disabled else None

    config = app.store.load()
    aliases = select_aliases(
        config,
        app.shell,
        group=_group_option(group, ungrouped, default=ANY),
        state=state,
        global_only=global_only,
        pattern=pattern,
    )
    if not aliases:
        err_console.print("[yellow]No aliases found.[/]")
        return

    table = Table(title=f"📋 Aliases ({len(aliases)} shown)")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Command", style="green")
    table.add_column("Group", style="magenta")
    table.add_column("Status")
    table.add_column("Global", style="yellow")

    for alias in aliases:
        if not alias.enabled:
            status = "[red]disabled[/]"
        elif not config.is_active(alias):
            status = "[yellow]group disabled[/]"
        else:
            status = "[green]enabled[/]"
        table.add_row(
            escape(alias.name),
            escape(alias.command),
            escape(alias.group) if alias.group else "—",
            status,
            "yes" if alias.is_global else "",
        )

    console.print(table)


@main.group()
def remove():
    """Remove an alias, a group or everything"""


@remove.command(name="alias")
@click.argument("name")
@click.pass_obj
@handle_errors
def remove_alias(app, name):
    """Remove alias NAME"""
    if app.mutate(lambda config: handlers.remove_alias(config, name)):
        console.print(f"[green]✔[/] Removed alias: [cyan]{escape(name)}[/]")


@remove.command(name="group")
@click.argument("name")
@click.option("--reassign", is_flag=True, help="Keep the group's aliases as ungrouped instead of deleting them")
@click.pass_obj
@handle_errors
def remove_group(app, name, reassign):
    """Remove group NAME and, unless reassigned, its aliases"""
    if app.mutate(lambda config: handlers.remove_group(config, name, reassign=reassign)):
        outcome = "its aliases are now ungrouped" if reassign else "its aliases were removed"
        console.print(f"[green]✔[/] Removed group: [magenta]{escape(name)}[/] ({outcome})")


@remove.command(name="all")
@click.confirmation_option(prompt="Remove every alias and group?")
@click.pass_obj
@handle_errors
def remove_all(app):
    """Remove every alias and group"""
    if app.mutate(handlers.remove_all):
        console.print("[green]✔[/] Removed all aliases and groups")


@main.group()
def rename():
    """Rename an alias or group"""


@rename.command(name="alias")
@click.argument("old")
@click.argument("new")
@click.pass_obj
@handle_errors
def rename_alias(app, old, new):
    """Rename alias OLD to NEW"""
    if app.mutate(lambda config: handlers.rename_alias(config, old, new)):
        console.print(f"[green]✔[/] Renamed alias [cyan]{escape(old)}[/] to [cyan]{escape(new)}[/]")


@rename.command(name="group")
@click.argument("old")
@click.argument("new")
@click.pass_obj
@handle_errors
def rename_group(app, old, new):
    """Rename group OLD to NEW"""
    if app.mutate(lambda config: handlers.rename_group(config, old, new)):
        console.print(f"[green]✔[/] Renamed group [magenta]{escape(old)}[/] to [magenta]{escape(new)}[/]")


@main.command()
@click.argument("name")
@click.argument("command", required=False)
@click.option("--group", "-g", help="Move the alias to GROUP")
@click.option("--ungrouped", "-u", is_flag=True, help="Take the alias out of its group")
@click.option("--toggle-enabled", is_flag=True, help="Flip the enabled flag")
@click.option("--toggle-global", is_flag=True, help="Flip the global flag (zsh)")
@click.option("--create-group", "-c", is_flag=True, help="Create GROUP if it does not exist")
@click.pass_obj
@handle_errors
def edit(app, name, command, group, ungrouped, toggle_enabled, toggle_global, create_group):
    """Edit alias NAME: replace its COMMAND, group or flags"""
    target_group = _group_option(group, ungrouped)
    changed = app.mutate(
        lambda config: handlers.edit_alias(
            config,
            name,
            command=command,
            group=target_group,
            toggle_enabled=toggle_enabled,
            toggle_global=toggle_global,
            create_group=create_group,
        )
    )
    if changed:
        alias = app.store.load().aliases[name]
        console.print(f"[green]✔[/] Edited alias: [cyan]{escape(name)}[/] = '{escape(alias.command)}'")
        if toggle_global and alias.is_global:
            app.warn_if_global_unsupported(name)


@main.command()
@click.pass_obj
@handle_errors
def sync(app):
    """Print every active alias for the current shell"""
    script = sync_script(app.store.load(), app.shell)
    if not app.integrator.send_delta(script):
        click.echo(script)


@main.group()
def sort():
    """Sort aliases or groups by name"""


@sort.command(name="aliases")
@click.option("--group", "-g", help="Only sort aliases in GROUP")
@click.option("--ungrouped", "-u", is_flag=True, help="Only sort ungrouped aliases")
@click.pass_obj
@handle_errors
def sort_aliases(app, group, ungrouped):
    """Sort aliases by name"""
    target = _group_option(group, ungrouped, default=handlers.ALL)
    if app.mutate(lambda config: handlers.sort_aliases(config, target)):
        console.print("[green]✔[/] Sorted aliases")


@sort.command(name="groups")
@click.pass_obj
@handle_errors
def sort_groups(app):
    """Sort groups by name"""
    if app.mutate(handlers.sort_groups):
        console.print("[green]✔[/] Sorted groups")


@main.group()
def enable():
    """Enable an alias or group"""


@enable.command(name="alias")
@click.argument("name")
@click.pass_obj
@handle_errors
def enable_alias(app, name):
    """Enable alias NAME"""
    if app.mutate(lambda config: handlers.enable_alias(config, name)):
        console.print(f"[green]✔[/] Enabled alias: [cyan]{escape(name)}[/]")


@enable.command(name="group")
@click.argument("name")
@click.pass_obj
@handle_errors
def enable_group(app, name):
    """Enable group NAME"""
    if app.mutate(lambda config: handlers.enable_group(config, name)):
        console.print(f"[green]✔[/] Enabled group: [magenta]{escape(name)}[/]")


@main.group()
def disable():
    """Disable an alias or group"""


@disable.command(name="alias")
@click.argument("name")
@click.pass_obj
@handle_errors
def disable_alias(app, name):
    """Disable alias NAME"""
    if app.mutate(lambda config: handlers.disable_alias(config, name)):
        console.print(f"[green]✔[/] Disabled alias: [cyan]{escape(name)}[/]")


@disable.command(name="group")
@click.argument("name")
@click.pass_obj
@handle_errors
def disable_group(app, name):
    """Disable group NAME"""
    if app.mutate(lambda config: handlers.disable_group(config, name)):
        console.print(f"[green]✔[/] Disabled group: [magenta]{escape(name)}[/]")


@main.command()
@click.argument("shell", type=SHELL_CHOICE)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Alias file the shell should use",
)
@click.pass_obj
def init(app, shell, config_path):
    """Print the shell integration snippet.

    Add this to your shell rc file:

      eval "$(aliasmgr init bash)"
    """
    script = app.integrator.init_script(ShellType(shell.lower()), config_path or app.config_path)
    click.echo(script)


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--group", "-g", help="Put imported aliases into GROUP (created if missing)")
@click.pass_obj
@handle_errors
def convert(app, source, target, group):
    """Import alias definitions from a shell file SOURCE into TARGET"""
    found = AliasScanner().scan_file(source)
    console.print(f"[cyan]Found {len(found)} aliases in {escape(source.name)}[/]")
    store = ConfigStore(target) if target else app.store
    counts = {"imported": 0, "skipped": 0}

    def import_aliases(config: Config) -> bool:
        for alias in found:
            if config.name_taken(alias.name) or alias.name == group:
                logger.warning("Skipping '%s', the name is already in use", alias.name)
                counts["skipped"] += 1
                continue
            handlers.add_alias(
                config,
                alias.name,
                alias.command,
                group=group,
                is_global=alias.is_global,
                create_group=True,
            )
            counts["imported"] += 1
        return counts["imported"] > 0

    app.mutate(import_aliases, store=store)
    console.print(f"[green]✔[/] Imported {counts['imported']} aliases into {escape(str(store.path))}")
    if counts["skipped"]:
        console.print(f"[yellow]⚠[/] Skipped {counts['skipped']} existing aliases")


if __name__ == "__main__":
    main()
