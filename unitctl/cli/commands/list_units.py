import asyncio
from collections.abc import Sequence

import click
from dbus_next.constants import BusType
from dbus_next.errors import DBusError

from unitctl.services.unit_service import UnitService
from unitctl.systemd import DecodeError, SystemdUnitClient, Unit


def format_units_table(
    units: Sequence[Unit],
    show_path: bool = False,
) -> str:
    """Format units into a simple table.
    """
    if not units:
        return 'No units found.'

    name_width = max(len('UNIT'), max(len(u.name) for u in units))
    type_width = max(len('TYPE'), max(len(u.utype) for u in units))
    state_width = max(len('STATE'), max(len(u.state) for u in units))

    header = (
        f'{"UNIT":<{name_width}} '
        f'{"TYPE":<{type_width}} '
        f'{"STATE":<{state_width}}'
    )
    if show_path:
        header += ' PATH'

    lines = [header, '-' * len(header)]

    for unit in units:
        row = (
            f'{unit.name:<{name_width}} '
            f'{unit.utype:<{type_width}} '
            f'{unit.state:<{state_width}}'
        )
        if show_path:
            row += f' {unit.pathname}'
        lines.append(row)

    return '\n'.join(lines)


@click.command('list')
@click.option(
    '--all',
    'show_all',
    is_flag=True,
    help='Show every unit file, not only the togglable ones.',
)
@click.option(
    '--full',
    is_flag=True,
    help='Show the unit file paths.',
)
@click.pass_obj
def list_units(bus_type: BusType, show_all: bool, full: bool) -> None:
    """List systemd unit files.
    """
    async def _list_units() -> None:
        client = SystemdUnitClient(bus_type)
        try:
            if show_all:
                registry = await client.list_units()
                click.echo(format_units_table(registry.units, full))
                return

            sections = await UnitService(client).get_sections()
            for section in sections:
                click.echo(section.title)
                click.echo(format_units_table(section.units, full))
                click.echo()
        finally:
            await client.close()

    try:
        asyncio.run(_list_units())
    except (DBusError, DecodeError, ConnectionError) as e:
        raise click.ClickException(str(e))
