from unitctl.systemd.classifier import classify_state, classify_type
from unitctl.systemd.client import SystemdUnitClient
from unitctl.systemd.decoder import (
    decode_list_unit_files_reply,
    decode_unit_files,
)
from unitctl.systemd.errors import (
    DecodeError,
    MalformedReply,
    UnknownUnitState,
    UnknownUnitType,
)
from unitctl.systemd.filters import (
    togglable_services,
    togglable_sockets,
    togglable_timers,
)
from unitctl.systemd.models import Registry, Unit, UnitOperationResult
from unitctl.systemd.types import UnitOperation, UnitState, UnitType

__all__ = [
    'DecodeError',
    'MalformedReply',
    'Registry',
    'SystemdUnitClient',
    'Unit',
    'UnitOperation',
    'UnitOperationResult',
    'UnitState',
    'UnitType',
    'UnknownUnitState',
    'UnknownUnitType',
    'classify_state',
    'classify_type',
    'decode_list_unit_files_reply',
    'decode_unit_files',
    'togglable_services',
    'togglable_sockets',
    'togglable_timers',
]
