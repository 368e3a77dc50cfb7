import logging
from typing import Any

from dbus_next.constants import BusType
from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.constants import UnitControlModes
from unitctl.dbus.manager import SystemdManager
from unitctl.systemd.decoder import decode_list_unit_files_reply
from unitctl.systemd.errors import DecodeError
from unitctl.systemd.models import Registry, UnitOperationResult
from unitctl.systemd.types import UnitOperation, UnitState


class SystemdUnitClient:
    """Lists unit files and enables, disables, starts and stops units.

    Control operations take a bare unit name ('sshd.service', not a path)
    and return a UnitOperationResult instead of raising on D-Bus errors.

    Nothing here updates a Registry or Unit you already hold. After a
    control operation, call `get_file_state` or `list_units` again to
    see the new state.
    """

    def __init__(
        self,
        bus_type: BusType = BusType.SYSTEM,
        call_timeout: float | None = None,
        manager: SystemdManager | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            bus_type: SYSTEM for system units, SESSION for user units
            call_timeout: Seconds to wait for each reply; when given, the
                client gets its own connection instead of the shared one
            manager: Prepared SystemdManager; overrides the other arguments
        """
        self._logger = logging.getLogger(__name__)

        if manager is None:
            if call_timeout is None:
                connection = DBusConnectionManager.get_instance(bus_type)
            else:
                connection = DBusConnectionManager(
                    bus_type=bus_type,
                    call_timeout=call_timeout,
                )
            manager = SystemdManager(connection)
        self._manager = manager

    async def list_units(self) -> Registry:
        """List every unit file known to systemd.

        Returns:
            A fresh Registry sorted by pathname

        Raises:
            DBusError: If the D-Bus call fails
            DecodeError: If the reply contains a malformed entry or an
                unknown unit type or state
        """
        body = await self._manager.list_unit_files()

        try:
            registry = decode_list_unit_files_reply(body)
        except DecodeError as e:
            self._logger.error('Failed to decode unit file list: %s', e)
            raise

        self._logger.debug('Listed %d unit files', len(registry))
        return registry

    async def get_file_state(self, name: str) -> bool:
        """Whether the unit file state is exactly 'enabled'.

        Args:
            name: Bare unit name

        Raises:
            DBusError: If the D-Bus call fails or the unit doesn't exist
        """
        if '/' in name:
            stripped = name.rsplit('/', 1)[-1]
            self._logger.warning(
                'A path %r was passed instead of a unit name, using %r',
                name,
                stripped,
            )
            name = stripped

        state = await self._manager.get_unit_file_state(name)
        return state.lower() == UnitState.ENABLED

    async def enable(self, name: str) -> UnitOperationResult:
        """Enable a unit file.

        Args:
            name: Bare unit name

        Returns:
            UnitOperationResult; already_applied is set when systemd
            reported nothing to change
        """
        try:
            reply = await self._manager.enable_unit_files(
                [name],
                runtime=False,
                force=True,
            )
        except (DBusError, ConnectionError) as e:
            return self._failure(name, UnitOperation.ENABLE, 'enabling', e)

        already = _is_already_enabled(reply)
        message = f'{name} already enabled' if already \
            else f'{name} has been enabled'
        self._logger.info(message)

        return UnitOperationResult(
            success=True,
            unit_name=name,
            operation=UnitOperation.ENABLE,
            already_applied=already,
            message=message,
        )

    async def disable(self, name: str) -> UnitOperationResult:
        """Disable a unit file.

        Args:
            name: Bare unit name

        Returns:
            UnitOperationResult; already_applied is set when systemd
            removed no symlinks
        """
        try:
            reply = await self._manager.disable_unit_files(
                [name],
                runtime=False,
            )
        except (DBusError, ConnectionError) as e:
            return self._failure(name, UnitOperation.DISABLE, 'disabling', e)

        already = _is_already_disabled(reply)
        message = f'{name} is already disabled' if already \
            else f'{name} has been disabled'
        self._logger.info(message)

        return UnitOperationResult(
            success=True,
            unit_name=name,
            operation=UnitOperation.DISABLE,
            already_applied=already,
            message=message,
        )

    async def start(self, name: str) -> UnitOperationResult:
        """Start a unit.

        Args:
            name: Bare unit name
        """
        try:
            job_path = await self._manager.start_unit(
                name,
                UnitControlModes.FAIL,
            )
        except (DBusError, ConnectionError) as e:
            return self._failure(name, UnitOperation.START, 'starting', e)

        message = f'{name} successfully started'
        self._logger.info(message)

        return UnitOperationResult(
            success=True,
            unit_name=name,
            operation=UnitOperation.START,
            message=message,
            job_path=job_path,
        )

    async def stop(self, name: str) -> UnitOperationResult:
        """Stop a unit.

        Args:
            name: Bare unit name
        """
        try:
            job_path = await self._manager.stop_unit(
                name,
                UnitControlModes.FAIL,
            )
        except (DBusError, ConnectionError) as e:
            return self._failure(name, UnitOperation.STOP, 'stopping', e)

        message = f'{name} successfully stopped'
        self._logger.info(message)

        return UnitOperationResult(
            success=True,
            unit_name=name,
            operation=UnitOperation.STOP,
            message=message,
            job_path=job_path,
        )

    async def close(self) -> None:
        """Disconnect the underlying bus.
        """
        await self._manager.connection.disconnect()

    def _failure(
        self,
        name: str,
        operation: UnitOperation,
        verb: str,
        error: Exception,
    ) -> UnitOperationResult:
        """Build the failed result for a control operation.
        """
        if isinstance(error, DBusError):
            detail = f'{error.type}: {error.text}'
        else:
            detail = str(error)

        message = f'Error {verb} {name}: {detail}'
        self._logger.error(message)

        return UnitOperationResult(
            success=False,
            unit_name=name,
            operation=operation,
            message=message,
        )


def _is_empty_changes(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not value


def _is_already_enabled(reply: list[Any]) -> bool:
    """Reply [True, []]: install info present, no symlinks created.
    """
    return len(reply) == 2 and reply[0] is True \
        and _is_empty_changes(reply[1])


def _is_already_disabled(reply: list[Any]) -> bool:
    """Reply [[]]: no symlinks removed.
    """
    return len(reply) == 1 and _is_empty_changes(reply[0])
