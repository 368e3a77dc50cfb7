from collections.abc import Sequence
from typing import Any

from unitctl.systemd.classifier import classify_state, classify_type
from unitctl.systemd.errors import MalformedReply
from unitctl.systemd.models import Registry, Unit


def decode_list_unit_files_reply(body: Sequence[Any]) -> Registry:
    """Decode the body of a ListUnitFiles method return.

    The body carries a single out argument, the a(ss) array.

    Raises:
        DecodeError: If the reply or any entry in it is malformed. Nothing
            is returned for the entries that did decode.
    """
    if not isinstance(body, (list, tuple)) or len(body) != 1:
        raise MalformedReply(
            f'Expected a single a(ss) argument, got {body!r:.80}'
        )

    return decode_unit_files(body[0])


def decode_unit_files(entries: Sequence[Any]) -> Registry:
    """Decode an a(ss) array of (pathname, state) pairs into a registry.
    """
    if not isinstance(entries, (list, tuple)):
        raise MalformedReply(
            f'Expected an array of unit files, got {type(entries).__name__}'
        )

    units = [
        decode_unit_file_entry(entry, index)
        for index, entry in enumerate(entries)
    ]
    return Registry(units=units)


def decode_unit_file_entry(entry: Sequence[Any], index: int = 0) -> Unit:
    """Decode one (pathname, state) struct.
    """
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise MalformedReply(
            f'Unit file entry {index} is not a (pathname, state) pair: '
            f'{entry!r:.80}'
        )

    pathname, state = entry
    if not isinstance(pathname, str):
        raise MalformedReply(
            f'Unit file entry {index} has a non-string pathname: '
            f'{pathname!r:.80}'
        )

    return Unit(
        pathname=pathname,
        utype=classify_type(pathname),
        state=classify_state(state),
    )
