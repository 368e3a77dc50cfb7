import asyncio

import click
from dbus_next.constants import BusType
from dbus_next.errors import DBusError

from unitctl.systemd import (
    SystemdUnitClient,
    UnitOperation,
    UnitOperationResult,
)


def run_operation(
    bus_type: BusType,
    operation: UnitOperation,
    name: str,
) -> UnitOperationResult:
    """Run one control operation on a fresh client.
    """
    async def _run() -> UnitOperationResult:
        client = SystemdUnitClient(bus_type)
        try:
            return await getattr(client, operation.value)(name)
        finally:
            await client.close()

    return asyncio.run(_run())


def echo_result(result: UnitOperationResult) -> None:
    """Print a successful result, or fail the command with its message.
    """
    if not result.success:
        raise click.ClickException(result.message)
    click.echo(result.message)


@click.command('enable')
@click.argument('name')
@click.pass_obj
def enable(bus_type: BusType, name: str) -> None:
    """Enable the unit NAME (e.g. sshd.service).
    """
    echo_result(run_operation(bus_type, UnitOperation.ENABLE, name))


@click.command('disable')
@click.argument('name')
@click.pass_obj
def disable(bus_type: BusType, name: str) -> None:
    """Disable the unit NAME.
    """
    echo_result(run_operation(bus_type, UnitOperation.DISABLE, name))


@click.command('start')
@click.argument('name')
@click.pass_obj
def start(bus_type: BusType, name: str) -> None:
    """Start the unit NAME.
    """
    echo_result(run_operation(bus_type, UnitOperation.START, name))


@click.command('stop')
@click.argument('name')
@click.pass_obj
def stop(bus_type: BusType, name: str) -> None:
    """Stop the unit NAME.
    """
    echo_result(run_operation(bus_type, UnitOperation.STOP, name))


@click.command('is-enabled')
@click.argument('name')
@click.pass_obj
def is_enabled(bus_type: BusType, name: str) -> None:
    """Print whether the unit file NAME is enabled.
    """
    async def _is_enabled() -> bool:
        client = SystemdUnitClient(bus_type)
        try:
            return await client.get_file_state(name)
        finally:
            await client.close()

    try:
        enabled = asyncio.run(_is_enabled())
    except (DBusError, ConnectionError) as e:
        raise click.ClickException(str(e))

    click.echo('enabled' if enabled else 'disabled')
