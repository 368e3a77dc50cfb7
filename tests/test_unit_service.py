"""Unit tests for UnitService."""

import asyncio

import pytest

from unitctl.services.unit_service import UnitService
from unitctl.systemd import SystemdUnitClient, UnitOperation

from conftest import FakeSystemd


@pytest.fixture
def service(client: SystemdUnitClient) -> UnitService:
    return UnitService(client)


class TestGetSections:
    """Tests for UnitService.get_sections."""

    def test_three_sections_from_one_listing(
        self,
        service: UnitService,
        fake_systemd: FakeSystemd,
    ) -> None:
        sections = asyncio.run(service.get_sections())

        assert [s.title for s in sections] == [
            'Services (Activate on Startup)',
            'Sockets (Activate On Use)',
            'Timers (Activate Periodically)',
        ]
        assert [u.name for u in sections[0].units] == [
            'bluetooth.service',
            'sshd.service',
        ]
        assert [u.name for u in sections[1].units] == ['cups.socket']
        assert [u.name for u in sections[2].units] == ['fstrim.timer']
        assert [c[0] for c in fake_systemd.calls] == ['ListUnitFiles']


class TestToggle:
    """Tests for UnitService.toggle."""

    def test_disables_enabled_unit(
        self,
        service: UnitService,
        fake_systemd: FakeSystemd,
    ) -> None:
        async def scenario():
            sections = await service.get_sections()
            sshd = sections[0].units[1]
            return await service.toggle(sshd)

        result = asyncio.run(scenario())

        assert result.operation is UnitOperation.DISABLE
        assert result.success is True
        assert result.unit_name == 'sshd.service'
        assert fake_systemd.unit_files[
            '/usr/lib/systemd/system/sshd.service'
        ] == 'disabled'

    def test_uses_current_state_not_snapshot(
        self,
        service: UnitService,
        fake_systemd: FakeSystemd,
    ) -> None:
        """A unit enabled since the listing is disabled on toggle."""
        async def scenario():
            sections = await service.get_sections()
            bluetooth = sections[0].units[0]
            fake_systemd.unit_files[bluetooth.pathname] = 'enabled'
            return await service.toggle(bluetooth)

        result = asyncio.run(scenario())

        assert result.operation is UnitOperation.DISABLE


class TestStartStop:
    """Tests for UnitService.start and stop."""

    def test_start_uses_bare_name(
        self,
        service: UnitService,
        fake_systemd: FakeSystemd,
    ) -> None:
        async def scenario():
            sections = await service.get_sections()
            return await service.start(sections[2].units[0])

        result = asyncio.run(scenario())

        assert result.success is True
        assert fake_systemd.calls[-1] == (
            'StartUnit', 'ss', ['fstrim.timer', 'fail'],
        )

    def test_stop_uses_bare_name(
        self,
        service: UnitService,
        fake_systemd: FakeSystemd,
    ) -> None:
        async def scenario():
            sections = await service.get_sections()
            return await service.stop(sections[1].units[0])

        asyncio.run(scenario())

        assert fake_systemd.calls[-1] == (
            'StopUnit', 'ss', ['cups.socket', 'fail'],
        )
