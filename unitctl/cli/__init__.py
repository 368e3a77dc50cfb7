import click
from dbus_next.constants import BusType

from unitctl.cli.commands.control import (
    disable,
    enable,
    is_enabled,
    start,
    stop,
)
from unitctl.cli.commands.list_units import list_units
from unitctl.tui.app import run_tui


@click.group(invoke_without_command=True)
@click.option(
    '--user',
    'user_bus',
    is_flag=True,
    help='Manage the user units on the session bus.',
)
@click.pass_context
def cli(ctx: click.Context, user_bus: bool) -> None:
    """unitctl - Manage systemd services, sockets and timers.

    Without a command, opens the interactive unit list.
    """
    ctx.obj = BusType.SESSION if user_bus else BusType.SYSTEM

    if ctx.invoked_subcommand is None:
        run_tui(ctx.obj)


for command in (list_units, enable, disable, start, stop, is_enabled):
    cli.add_command(command)


def run_cli() -> None:
    """Run the CLI interface.
    """
    cli()


__all__ = [
    'cli',
    'run_cli',
]
