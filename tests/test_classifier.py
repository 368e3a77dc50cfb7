"""Unit tests for the unit type and state classifier."""

import pytest

from unitctl.systemd import (
    DecodeError,
    UnitState,
    UnitType,
    UnknownUnitState,
    UnknownUnitType,
    classify_state,
    classify_type,
)


class TestClassifyType:
    """Tests for classify_type."""

    @pytest.mark.parametrize('unit_type', list(UnitType))
    def test_every_known_extension(self, unit_type: UnitType) -> None:
        """Each extension in the table maps to its unit type."""
        pathname = f'/usr/lib/systemd/system/example.{unit_type.value}'
        assert classify_type(pathname) is unit_type

    def test_template_unit(self) -> None:
        """Template units classify by their final extension."""
        assert classify_type('/usr/lib/systemd/system/getty@.service') \
            is UnitType.SERVICE

    def test_dotted_name_uses_last_extension(self) -> None:
        """Only the last suffix decides the type."""
        assert classify_type('/run/systemd/system/dev-disk.by.uuid.mount') \
            is UnitType.MOUNT

    @pytest.mark.parametrize('pathname', [
        '/usr/lib/systemd/system/foo.conf',
        '/usr/lib/systemd/system/foo.Service',
        '/usr/lib/systemd/system/foo.SERVICE',
        '/usr/lib/systemd/system/foo',
        '/usr/lib/systemd/system/.service',
        '',
    ])
    def test_unknown_extension(self, pathname: str) -> None:
        """Missing, unknown or differently cased extensions are rejected."""
        with pytest.raises(UnknownUnitType) as exc_info:
            classify_type(pathname)

        assert exc_info.value.pathname == pathname

    def test_unknown_type_is_decode_error(self) -> None:
        """UnknownUnitType belongs to the DecodeError family."""
        with pytest.raises(DecodeError):
            classify_type('/usr/lib/systemd/system/foo.txt')


class TestClassifyState:
    """Tests for classify_state."""

    @pytest.mark.parametrize('token,expected', [
        ('static', UnitState.STATIC),
        ('disabled', UnitState.DISABLED),
        ('enabled', UnitState.ENABLED),
        ('indirect', UnitState.INDIRECT),
        ('linked', UnitState.LINKED),
        ('masked', UnitState.MASKED),
        ('bad', UnitState.BAD),
        ('generated', UnitState.GENERATED),
        ('alias', UnitState.ALIAS),
        ('transient', UnitState.TRANSIENT),
    ])
    def test_every_known_state(
        self,
        token: str,
        expected: UnitState,
    ) -> None:
        """Each state word maps to its state."""
        assert classify_state(token) is expected

    @pytest.mark.parametrize('prefix', list('sdeilmbgat'))
    def test_single_character_prefix(self, prefix: str) -> None:
        """The first character alone selects the state."""
        assert classify_state(prefix).value.startswith(prefix)

    @pytest.mark.parametrize('token,expected', [
        ('enabled-runtime', UnitState.ENABLED),
        ('linked-runtime', UnitState.LINKED),
        ('masked-runtime', UnitState.MASKED),
    ])
    def test_runtime_variants_fold_into_base_state(
        self,
        token: str,
        expected: UnitState,
    ) -> None:
        """Runtime variants share the first character of their base state."""
        assert classify_state(token) is expected

    @pytest.mark.parametrize('token', ['', 'x', 'Enabled', '-', 'unknown'])
    def test_unknown_state(self, token: str) -> None:
        """Empty tokens and unmatched first characters are rejected."""
        with pytest.raises(UnknownUnitState) as exc_info:
            classify_state(token)

        assert exc_info.value.token == token

    def test_non_string_state(self) -> None:
        """A token that is not a string is rejected."""
        with pytest.raises(UnknownUnitState):
            classify_state(None)  # type: ignore[arg-type]
