import logging
from typing import Any

from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.constants import (
    ManagerMethods,
    SystemdDBusConstants,
    UnitControlModes,
)


class SystemdManager:
    """Typed wrappers over the org.freedesktop.systemd1.Manager methods.

    Every method performs one round trip and returns the reply body
    unchanged; interpreting it is left to the caller.
    """

    def __init__(self, dbus_manager: DBusConnectionManager | None = None):
        """Initialize the SystemdManager.

        Args:
            dbus_manager: The D-Bus connection manager.
        """
        self._logger = logging.getLogger(__name__)

        self._dbus_manager = dbus_manager or \
            DBusConnectionManager.get_instance()

    @property
    def connection(self) -> DBusConnectionManager:
        return self._dbus_manager

    async def _call(
        self,
        method: ManagerMethods,
        signature: str = '',
        body: list[Any] | None = None,
    ) -> list[Any]:
        return await self._dbus_manager.call(
            SystemdDBusConstants.SERVICE_NAME,
            SystemdDBusConstants.OBJECT_PATH,
            SystemdDBusConstants.MANAGER_INTERFACE,
            method,
            signature,
            body,
        )

    async def list_unit_files(self) -> list[Any]:
        """List all systemd unit files.

        Returns:
            Reply body; its single item is the a(ss) array of
            (pathname, state) pairs

        Raises:
            DBusError: If the D-Bus call fails
        """
        try:
            return await self._call(ManagerMethods.LIST_UNIT_FILES)
        except DBusError as e:
            self._logger.error(
                'Failed to list systemd unit files: %s',
                e,
            )
            raise

    async def get_unit_file_state(self, unit_name: str) -> str:
        """Get the enablement state of a unit file.

        Args:
            unit_name: The bare unit name (e.g., 'sshd.service')

        Returns:
            The state string reported by systemd (e.g., 'enabled')

        Raises:
            DBusError: If the D-Bus call fails or the unit doesn't exist
        """
        try:
            body = await self._call(
                ManagerMethods.GET_UNIT_FILE_STATE,
                's',
                [unit_name],
            )
            return body[0]
        except DBusError as e:
            self._logger.error(
                'Failed to get file state of %s: %s',
                unit_name,
                e,
            )
            raise

    async def enable_unit_files(
        self,
        unit_files: list[str],
        runtime: bool = False,
        force: bool = False,
    ) -> list[Any]:
        """Enable unit files.

        Args:
            unit_files: List of unit file names to enable
            runtime: Whether to enable for runtime only
            force: Whether to overwrite conflicting symlinks

        Returns:
            Reply body: [carries_install_info, changes]

        Raises:
            DBusError: If the D-Bus call fails
        """
        try:
            return await self._call(
                ManagerMethods.ENABLE_UNIT_FILES,
                'asbb',
                [unit_files, runtime, force],
            )
        except DBusError as e:
            self._logger.error(
                'Failed to enable unit files %s: %s',
                unit_files,
                e,
            )
            raise

    async def disable_unit_files(
        self,
        unit_files: list[str],
        runtime: bool = False,
    ) -> list[Any]:
        """Disable unit files.

        Args:
            unit_files: List of unit file names to disable
            runtime: Whether to disable for runtime only

        Returns:
            Reply body: [changes]

        Raises:
            DBusError: If the D-Bus call fails
        """
        try:
            return await self._call(
                ManagerMethods.DISABLE_UNIT_FILES,
                'asb',
                [unit_files, runtime],
            )
        except DBusError as e:
            self._logger.error(
                'Failed to disable unit files %s: %s',
                unit_files,
                e,
            )
            raise

    async def start_unit(
        self,
        unit_name: str,
        mode: str = UnitControlModes.FAIL,
    ) -> str:
        """Start a unit by name.

        Args:
            unit_name: The name of the unit to start
            mode: The job mode (default: 'fail')

        Returns:
            The job object path

        Raises:
            DBusError: If the D-Bus call fails
        """
        try:
            body = await self._call(
                ManagerMethods.START_UNIT,
                'ss',
                [unit_name, mode],
            )
            return body[0]
        except DBusError as e:
            self._logger.error(
                'Failed to start unit %s: %s',
                unit_name,
                e,
            )
            raise

    async def stop_unit(
        self,
        unit_name: str,
        mode: str = UnitControlModes.FAIL,
    ) -> str:
        """Stop a unit by name.

        Args:
            unit_name: The name of the unit to stop
            mode: The job mode (default: 'fail')

        Returns:
            The job object path

        Raises:
            DBusError: If the D-Bus call fails
        """
        try:
            body = await self._call(
                ManagerMethods.STOP_UNIT,
                'ss',
                [unit_name, mode],
            )
            return body[0]
        except DBusError as e:
            self._logger.error(
                'Failed to stop unit %s: %s',
                unit_name,
                e,
            )
            raise
