from enum import StrEnum


class UnitType(StrEnum):
    """Systemd unit types, valued by their unit file extension.
    """

    AUTOMOUNT = 'automount'
    BUSNAME = 'busname'
    MOUNT = 'mount'
    PATH = 'path'
    SCOPE = 'scope'
    SERVICE = 'service'
    SLICE = 'slice'
    SOCKET = 'socket'
    TARGET = 'target'
    TIMER = 'timer'
    SWAP = 'swap'


class UnitState(StrEnum):
    """Systemd unit file states.

    Runtime variants ('enabled-runtime', 'masked-runtime', ...) fold into
    their base state.
    """

    BAD = 'bad'
    DISABLED = 'disabled'
    ENABLED = 'enabled'
    INDIRECT = 'indirect'
    LINKED = 'linked'
    MASKED = 'masked'
    STATIC = 'static'
    GENERATED = 'generated'
    ALIAS = 'alias'
    TRANSIENT = 'transient'


class UnitOperation(StrEnum):
    """Unit control operations.
    """

    ENABLE = 'enable'
    DISABLE = 'disable'
    START = 'start'
    STOP = 'stop'
