from pathlib import PurePosixPath
from typing import Final

from unitctl.systemd.errors import UnknownUnitState, UnknownUnitType
from unitctl.systemd.types import UnitState, UnitType

_EXTENSION_TYPES: Final[dict[str, UnitType]] = {
    'automount': UnitType.AUTOMOUNT,
    'busname': UnitType.BUSNAME,
    'mount': UnitType.MOUNT,
    'path': UnitType.PATH,
    'scope': UnitType.SCOPE,
    'service': UnitType.SERVICE,
    'slice': UnitType.SLICE,
    'socket': UnitType.SOCKET,
    'target': UnitType.TARGET,
    'timer': UnitType.TIMER,
    'swap': UnitType.SWAP,
}

_PREFIX_STATES: Final[dict[str, UnitState]] = {
    's': UnitState.STATIC,
    'd': UnitState.DISABLED,
    'e': UnitState.ENABLED,
    'i': UnitState.INDIRECT,
    'l': UnitState.LINKED,
    'm': UnitState.MASKED,
    'b': UnitState.BAD,
    'g': UnitState.GENERATED,
    'a': UnitState.ALIAS,
    't': UnitState.TRANSIENT,
}


def classify_type(pathname: str) -> UnitType:
    """Determine the unit type from the extension of a unit file path.

    Matching is exact and case-sensitive.

    Raises:
        UnknownUnitType: If the extension is missing or not a unit type
    """
    extension = PurePosixPath(pathname).suffix.removeprefix('.')
    try:
        return _EXTENSION_TYPES[extension]
    except KeyError:
        raise UnknownUnitType(pathname) from None


def classify_state(token: str) -> UnitState:
    """Determine the unit state from the first character of a state token.

    Raises:
        UnknownUnitState: If the token is empty or its first character
            selects no state
    """
    if not isinstance(token, str) or not token:
        raise UnknownUnitState(token)

    try:
        return _PREFIX_STATES[token[0]]
    except KeyError:
        raise UnknownUnitState(token) from None
