"""Builders for synthetic SNSS session snapshots."""

import struct

import pytest


def _padded(raw, length):
    pad = (len(raw) + 3) & ~3
    return struct.pack("<I", length) + raw + b"\x00" * (pad - len(raw))


def _navigation_command(tab_id, index, url, title, command_id=1):
    url_bytes = url.encode("utf-8")
    title_bytes = title.encode("utf-16-le")
    body = b"\x00" * 4 + struct.pack("<ii", tab_id, index)
    body += _padded(url_bytes, len(url_bytes))
    body += _padded(title_bytes, len(title_bytes) // 2)
    body += struct.pack("<I", 0)  # state
    body += struct.pack("<Ii", 0, 0)  # transition, post
    body += struct.pack("<I", 0)  # referrer
    body += struct.pack("<i", 0)  # referrer policy
    body += struct.pack("<I", 0)  # original request url
    body += struct.pack("<i", 0)  # user agent override
    return bytes([command_id]) + body


def _snapshot(*commands):
    data = b"SNSS" + struct.pack("<i", 1)
    for cmd in commands:
        data += struct.pack("<H", len(cmd)) + cmd
    return data


@pytest.fixture
def navigation_command():
    return _navigation_command


@pytest.fixture
def snapshot():
    return _snapshot
