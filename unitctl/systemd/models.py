from operator import attrgetter
from pathlib import PurePosixPath

from pydantic import BaseModel, Field, field_validator

from unitctl.systemd.types import UnitOperation, UnitState, UnitType


class Unit(BaseModel):
    """A unit file known to the systemd manager.

    Units are snapshots: control operations never update them. Equality and
    hashing only consider the pathname.

    Args:
        pathname: Full path of the unit file
        state: Unit file state at list time
        utype: Unit type derived from the file extension
    """
    model_config = {'frozen': True}

    pathname: str = Field(..., min_length=1)
    state: UnitState = Field(...)
    utype: UnitType = Field(...)

    @property
    def name(self) -> str:
        """Unit name without directory components, e.g. 'sshd.service'.
        """
        return PurePosixPath(self.pathname).name

    @property
    def display_name(self) -> str:
        """Unit name without its extension, e.g. 'sshd'.
        """
        return self.name.rpartition('.')[0] or self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.pathname == other.pathname

    def __hash__(self) -> int:
        return hash(self.pathname)


class Registry(BaseModel):
    """All unit files returned by one ListUnitFiles call, sorted by pathname.

    A registry is never refreshed in place; list again to see the effect of
    an enable or disable.

    Args:
        units: Units in ascending pathname order
    """
    model_config = {'frozen': True}

    units: tuple[Unit, ...] = Field(default=())

    @field_validator('units')
    @classmethod
    def sort_by_pathname(cls, v: tuple[Unit, ...]) -> tuple[Unit, ...]:
        return tuple(sorted(v, key=attrgetter('pathname')))

    def get(self, pathname: str) -> Unit | None:
        for unit in self.units:
            if unit.pathname == pathname:
                return unit
        return None

    def __contains__(self, pathname: object) -> bool:
        return any(unit.pathname == pathname for unit in self.units)

    def __len__(self) -> int:
        return len(self.units)


class UnitOperationResult(BaseModel):
    """Result of a unit control operation.

    Args:
        success: Whether the daemon accepted the request
        unit_name: Name of the unit
        operation: Type of operation performed
        already_applied: Whether the unit was already in the target state
        message: Operation result message or error diagnostic
        job_path: D-Bus job path for start/stop
    """
    model_config = {'frozen': True}

    success: bool = Field(...)
    unit_name: str = Field(..., min_length=1)
    operation: UnitOperation = Field(...)
    already_applied: bool = Field(False)
    message: str = Field('')
    job_path: str = Field('')
