import asyncio

from dbus_next.constants import BusType
from textual.app import App

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.services.unit_service import UnitService
from unitctl.systemd import SystemdUnitClient
from unitctl.tui.screens.unit_list import UnitListScreen


class UnitctlApp(App[None]):
    """A textual application to enable, disable, start and stop units.
    """

    TITLE = 'System Services'

    def __init__(
        self,
        bus_type: BusType = BusType.SYSTEM,
        unit_service: UnitService | None = None,
        *args,
        **kwargs,
    ):
        """Initialize the app.

        Args:
            bus_type: Bus whose units are shown
            unit_service: Prepared UnitService; overrides bus_type
        """
        super().__init__(*args, **kwargs)
        self._unit_service = unit_service or \
            UnitService(SystemdUnitClient(bus_type))

    def on_mount(self) -> None:
        """Mount the main screen.

        The bus is connected by the screen's first listing, which reports
        connection failures as notifications.
        """
        self.push_screen(UnitListScreen(self._unit_service))


def run_tui(bus_type: BusType = BusType.SYSTEM) -> None:
    """Run the application until the user quits.
    """
    async def _run() -> None:
        app = UnitctlApp(bus_type)
        try:
            await app.run_async()
        finally:
            await DBusConnectionManager.get_instance(bus_type).disconnect()

    asyncio.run(_run())
