"""Decode open-tab navigations from a Chromium SNSS session snapshot.

Only the "update tab navigation" commands are decoded; everything else in
the command stream is skipped.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from dia_search.exceptions import SessionParseError

logger = logging.getLogger(__name__)

SNSS_MAGIC = b"SNSS"
# Command ids carrying a serialized tab navigation.
TAB_NAVIGATION_COMMANDS = frozenset({1, 6})

_UINT16 = struct.Struct("<H")
_INT32 = struct.Struct("<i")
_UINT32 = struct.Struct("<I")


@dataclass
class TabNavigation:
    """One navigation entry of an open tab."""

    tab_id: int
    index: int
    url: str
    title: str


def parse_snss(data: bytes) -> list[TabNavigation]:
    """Decode every tab navigation in a session snapshot."""
    if len(data) < 8 or data[:4] != SNSS_MAGIC:
        raise SessionParseError("Session file does not start with an SNSS header")

    offset = 8  # magic + int32 version
    navigations: list[TabNavigation] = []
    skipped = 0
    while offset + _UINT16.size <= len(data):
        (size,) = _UINT16.unpack_from(data, offset)
        offset += _UINT16.size
        if size == 0 or offset + size > len(data):
            break
        command = data[offset:offset + size]
        offset += size

        if command[0] not in TAB_NAVIGATION_COMMANDS:
            continue
        try:
            navigations.append(_parse_navigation(command, 1))
        except (struct.error, UnicodeDecodeError):
            skipped += 1

    if skipped:
        logger.debug("Skipped %d truncated tab navigation commands", skipped)
    return navigations


def _parse_navigation(payload: bytes, pos: int) -> TabNavigation:
    pos += 4  # pickle payload size
    (tab_id,) = _INT32.unpack_from(payload, pos)
    (index,) = _INT32.unpack_from(payload, pos + 4)
    pos += 8

    url_bytes, pos = _read_padded(payload, pos, 1)
    title_bytes, pos = _read_padded(payload, pos, 2)
    return TabNavigation(
        tab_id=tab_id,
        index=index,
        url=url_bytes.decode("utf-8"),
        title=title_bytes.decode("utf-16-le", errors="replace"),
    )


def _read_padded(payload: bytes, pos: int, unit: int) -> tuple[bytes, int]:
    """Read a length-prefixed field; lengths count ``unit``-byte units."""
    (length,) = _UINT32.unpack_from(payload, pos)
    pos += _UINT32.size
    byte_len = length * unit
    padded = (byte_len + 3) & ~3
    if pos + padded > len(payload):
        raise struct.error("field runs past end of command")
    return payload[pos:pos + byte_len], pos + padded
