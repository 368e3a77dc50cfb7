from enum import StrEnum
from typing import Final


class SystemdDBusConstants(StrEnum):
    """Systemd D-Bus service and interface constants.
    """

    SERVICE_NAME = 'org.freedesktop.systemd1'
    OBJECT_PATH = '/org/freedesktop/systemd1'
    MANAGER_INTERFACE = 'org.freedesktop.systemd1.Manager'


class ManagerMethods(StrEnum):
    """Methods of the systemd Manager interface used by unitctl.
    """

    LIST_UNIT_FILES = 'ListUnitFiles'
    GET_UNIT_FILE_STATE = 'GetUnitFileState'
    ENABLE_UNIT_FILES = 'EnableUnitFiles'
    DISABLE_UNIT_FILES = 'DisableUnitFiles'
    START_UNIT = 'StartUnit'
    STOP_UNIT = 'StopUnit'


class UnitControlModes(StrEnum):
    """Job modes accepted by StartUnit/StopUnit.
    """

    # Refuse to queue the job if it conflicts with a pending one
    FAIL = 'fail'


class ConnectionConfig:
    """Configuration constants for D-Bus connection.
    """

    DEFAULT_MAX_RETRIES: Final[int] = 1
    DEFAULT_INITIAL_BACKOFF: Final[float] = 1.0
    BACKOFF_MULTIPLIER: Final[float] = 2.0
    DEFAULT_CALL_TIMEOUT: Final[float] = 4.0
