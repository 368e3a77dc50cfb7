from pydantic import BaseModel, Field

from unitctl.systemd import (
    SystemdUnitClient,
    Unit,
    UnitOperationResult,
    togglable_services,
    togglable_sockets,
    togglable_timers,
)


class UnitSection(BaseModel):
    """A titled group of togglable units from one registry snapshot.

    Args:
        title: Heading shown above the group
        units: Units in pathname order
    """
    model_config = {'frozen': True}

    title: str = Field(..., min_length=1)
    units: tuple[Unit, ...] = Field(default=())


class UnitService:
    """A service for presenting and toggling systemd units.
    """

    SERVICES_TITLE = 'Services (Activate on Startup)'
    SOCKETS_TITLE = 'Sockets (Activate On Use)'
    TIMERS_TITLE = 'Timers (Activate Periodically)'

    def __init__(self, client: SystemdUnitClient | None = None) -> None:
        """Initialise the service.
        """
        self._client = client or SystemdUnitClient()

    @property
    def client(self) -> SystemdUnitClient:
        return self._client

    async def get_sections(self) -> list[UnitSection]:
        """List unit files once and split them into the togglable sections.

        Raises:
            DBusError: If listing fails
            DecodeError: If the listing cannot be decoded
        """
        registry = await self._client.list_units()

        return [
            UnitSection(
                title=self.SERVICES_TITLE,
                units=togglable_services(registry),
            ),
            UnitSection(
                title=self.SOCKETS_TITLE,
                units=togglable_sockets(registry),
            ),
            UnitSection(
                title=self.TIMERS_TITLE,
                units=togglable_timers(registry),
            ),
        ]

    async def is_enabled(self, unit: Unit) -> bool:
        """Query the current file state of a unit.
        """
        return await self._client.get_file_state(unit.name)

    async def toggle(self, unit: Unit) -> UnitOperationResult:
        """Disable the unit if it is enabled now, enable it otherwise.

        The decision uses a fresh file state query, not `unit.state`,
        which may be stale.
        """
        if await self.is_enabled(unit):
            return await self._client.disable(unit.name)
        return await self._client.enable(unit.name)

    async def start(self, unit: Unit) -> UnitOperationResult:
        return await self._client.start(unit.name)

    async def stop(self, unit: Unit) -> UnitOperationResult:
        return await self._client.stop(unit.name)
