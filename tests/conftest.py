"""Pytest configuration and shared fixtures.

FakeSystemd stands in for DBusConnectionManager: it answers Manager method
calls with the reply bodies dbus-next would decode from systemd, and keeps
unit file states so enable/disable are visible in later listings.
"""

from typing import Any

import pytest
from dbus_next.errors import DBusError

from unitctl.dbus.connection import DBusConnectionManager
from unitctl.dbus.manager import SystemdManager
from unitctl.systemd import SystemdUnitClient

JOB_PATH = '/org/freedesktop/systemd1/job/42'
WANTS_DIR = '/etc/systemd/system/multi-user.target.wants'


class FakeSystemd:
    """In-process systemd manager reachable through `call`."""

    def __init__(self, unit_files: dict[str, str]) -> None:
        self.unit_files = dict(unit_files)
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.errors: dict[str, DBusError] = {}
        self.disconnected = False
        self._handlers = {
            'ListUnitFiles': self._list_unit_files,
            'GetUnitFileState': self._get_unit_file_state,
            'EnableUnitFiles': self._enable_unit_files,
            'DisableUnitFiles': self._disable_unit_files,
            'StartUnit': self._start_unit,
            'StopUnit': self._stop_unit,
        }

    async def call(
        self,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str = '',
        body: list[Any] | None = None,
    ) -> list[Any]:
        body = body or []
        self.calls.append((member, signature, body))
        if member in self.errors:
            raise self.errors[member]
        return self._handlers[member](*body)

    async def disconnect(self) -> None:
        self.disconnected = True

    def _find(self, name: str) -> str:
        for pathname in self.unit_files:
            if pathname.rsplit('/', 1)[-1] == name:
                return pathname
        raise DBusError(
            'org.freedesktop.systemd1.NoSuchUnit',
            f'Unit {name} not found.',
        )

    def _list_unit_files(self) -> list[Any]:
        return [[
            [pathname, state] for pathname, state in self.unit_files.items()
        ]]

    def _get_unit_file_state(self, name: str) -> list[Any]:
        return [self.unit_files[self._find(name)]]

    def _enable_unit_files(
        self,
        names: list[str],
        runtime: bool,
        force: bool,
    ) -> list[Any]:
        changes = []
        for name in names:
            pathname = self._find(name)
            if self.unit_files[pathname] != 'enabled':
                self.unit_files[pathname] = 'enabled'
                changes.append(['symlink', f'{WANTS_DIR}/{name}', pathname])
        return [True, changes]

    def _disable_unit_files(self, names: list[str], runtime: bool) -> list[Any]:
        changes = []
        for name in names:
            pathname = self._find(name)
            if self.unit_files[pathname] == 'enabled':
                self.unit_files[pathname] = 'disabled'
                changes.append(['unlink', f'{WANTS_DIR}/{name}', ''])
        return [changes]

    def _start_unit(self, name: str, mode: str) -> list[Any]:
        self._find(name)
        return [JOB_PATH]

    def _stop_unit(self, name: str, mode: str) -> list[Any]:
        self._find(name)
        return [JOB_PATH]


@pytest.fixture
def unit_files() -> dict[str, str]:
    """Unit files as ListUnitFiles reports them, deliberately unsorted."""
    return {
        '/usr/lib/systemd/system/sshd.service': 'enabled',
        '/usr/lib/systemd/system/bluetooth.service': 'disabled',
        '/usr/lib/systemd/system/dbus.service': 'static',
        '/usr/lib/systemd/system/cups.socket': 'disabled',
        '/usr/lib/systemd/system/fstrim.timer': 'enabled',
        '/usr/lib/systemd/system/foo.path': 'static',
        '/usr/lib/systemd/system/nfs.service': 'masked',
        '/etc/systemd/system/backup.service': 'enabled',
        '/usr/lib/systemd/system/multi-user.target': 'static',
        '/usr/lib/systemd/system/swapfile.swap': 'generated',
    }


@pytest.fixture
def fake_systemd(unit_files: dict[str, str]) -> FakeSystemd:
    return FakeSystemd(unit_files)


@pytest.fixture
def client(fake_systemd: FakeSystemd) -> SystemdUnitClient:
    return SystemdUnitClient(manager=SystemdManager(fake_systemd))


@pytest.fixture(autouse=True)
def reset_shared_connections():
    """Drop connection managers shared between tests."""
    DBusConnectionManager._instances.clear()
    yield
    DBusConnectionManager._instances.clear()
