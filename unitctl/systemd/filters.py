from typing import Final

from unitctl.systemd.models import Registry, Unit
from unitctl.systemd.types import UnitState, UnitType

TOGGLABLE_STATES: Final[frozenset[UnitState]] = frozenset({
    UnitState.ENABLED,
    UnitState.DISABLED,
})

# Units under /etc/ are administrator overrides, not vendor units
ADMIN_OVERRIDE_DIR: Final[str] = '/etc/'


def is_togglable(unit: Unit) -> bool:
    """Whether the unit is exactly enabled or disabled.
    """
    return unit.state in TOGGLABLE_STATES


def togglable_services(registry: Registry) -> list[Unit]:
    """Services that can be enabled and disabled, excluding /etc/ overrides.
    """
    return [
        unit for unit in registry.units
        if unit.utype == UnitType.SERVICE
        and is_togglable(unit)
        and ADMIN_OVERRIDE_DIR not in unit.pathname
    ]


def togglable_sockets(registry: Registry) -> list[Unit]:
    """Sockets that can be enabled and disabled.
    """
    return [
        unit for unit in registry.units
        if unit.utype == UnitType.SOCKET and is_togglable(unit)
    ]


def togglable_timers(registry: Registry) -> list[Unit]:
    """Timers that can be enabled and disabled.
    """
    return [
        unit for unit in registry.units
        if unit.utype == UnitType.TIMER and is_togglable(unit)
    ]
