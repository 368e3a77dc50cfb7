import logging

from dbus_next.errors import DBusError
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label

from unitctl.services.unit_service import UnitService, UnitSection
from unitctl.systemd import DecodeError, Unit, UnitOperationResult


class UnitListScreen(Screen):
    """Togglable services, sockets and timers, one table per section.

    Rows are keyed by unit pathname, so a row always maps back to the unit
    it was built from.
    """

    BINDINGS = [
        Binding('e', 'toggle', 'Enable/Disable'),
        Binding('s', 'start', 'Start'),
        Binding('x', 'stop', 'Stop'),
        Binding('r', 'reload', 'Reload'),
        Binding('q', 'app.quit', 'Quit'),
    ]

    STATE_COLUMN = 'state'

    def __init__(self, unit_service: UnitService) -> None:
        """Initialise the screen.
        """
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self._unit_service = unit_service
        self._tables = [DataTable(cursor_type='row') for _ in range(3)]
        self._labels = [Label() for _ in range(3)]
        self._units: dict[str, Unit] = {}

    def compose(self) -> ComposeResult:
        """Compose the screen.
        """
        yield Header()
        with VerticalScroll():
            for label, table in zip(self._labels, self._tables):
                yield label
                yield table
        yield Footer()

    async def on_mount(self) -> None:
        """Mount the screen.
        """
        for table in self._tables:
            table.add_column('Unit', key='unit')
            table.add_column('State', key=self.STATE_COLUMN)

        await self.action_reload()

    async def action_reload(self) -> None:
        """List unit files again and rebuild every table.
        """
        try:
            sections = await self._unit_service.get_sections()
        except (DBusError, DecodeError, ConnectionError) as e:
            self._logger.error('Failed to list units: %s', e)
            self.notify(str(e), title='Failed to list units', severity='error')
            return

        self._units.clear()
        for label, table, section in zip(
            self._labels,
            self._tables,
            sections,
        ):
            self._fill_section(label, table, section)

        if not isinstance(self.focused, DataTable):
            self._focus_first_table()

    def _focus_first_table(self) -> None:
        """Focus the first table with rows so the bindings have a target.
        """
        for table in self._tables:
            if table.row_count:
                table.focus()
                return

    def _fill_section(
        self,
        label: Label,
        table: DataTable,
        section: UnitSection,
    ) -> None:
        label.update(section.title)
        table.clear()
        for unit in section.units:
            self._units[unit.pathname] = unit
            table.add_row(
                unit.display_name,
                str(unit.state),
                key=unit.pathname,
            )

    def _selected_unit(self) -> tuple[DataTable, Unit] | None:
        """The unit under the cursor of the focused table.
        """
        table = self.focused
        if not isinstance(table, DataTable) or table.row_count == 0:
            return None

        cell_key = table.coordinate_to_cell_key(table.cursor_coordinate)
        unit = self._units.get(cell_key.row_key.value)
        if unit is None:
            return None
        return table, unit

    def _report(self, result: UnitOperationResult) -> None:
        if result.success:
            self.notify(result.message)
        else:
            self.notify(result.message, severity='error')

    async def action_toggle(self) -> None:
        """Enable or disable the selected unit and show its new state.
        """
        selected = self._selected_unit()
        if selected is None:
            return
        table, unit = selected

        try:
            result = await self._unit_service.toggle(unit)
            self._report(result)
            enabled = await self._unit_service.is_enabled(unit)
        except (DBusError, ConnectionError) as e:
            self.notify(str(e), severity='error')
            return

        table.update_cell(
            unit.pathname,
            self.STATE_COLUMN,
            'enabled' if enabled else 'disabled',
        )

    async def action_start(self) -> None:
        selected = self._selected_unit()
        if selected is not None:
            self._report(await self._unit_service.start(selected[1]))

    async def action_stop(self) -> None:
        selected = self._selected_unit()
        if selected is not None:
            self._report(await self._unit_service.stop(selected[1]))
