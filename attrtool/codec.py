"""Big-endian binary encoding of attribute values."""

from __future__ import annotations

import struct

from attrtool.types import AttrType

_CODES = {1: "B", 2: "H", 4: "I", 8: "Q"}


def _code(data_size):
    try:
        return _CODES[data_size]
    except KeyError:
        raise ValueError(f"unsupported data size {data_size}") from None


def _element_format(attr):
    if attr.type is AttrType.COMPLEX:
        return ">" + "".join(_code(int(ch)) for ch in attr.spec)
    if attr.type is AttrType.STRING:
        return f">{attr.data_size}s"
    return ">" + _code(attr.data_size)


def _pack_args(attr, value):
    if attr.type is AttrType.COMPLEX:
        return value
    if attr.type is AttrType.STRING:
        return (value.encode("utf-8"),)
    return (value,)


def encode(attr):
    """Encode the values of attr as big-endian bytes."""
    element = struct.Struct(_element_format(attr))
    return b"".join(element.pack(*_pack_args(attr, value)) for value in attr.values)


def _unpacked_value(attr, item):
    if attr.type is AttrType.COMPLEX:
        return item
    if attr.type is AttrType.STRING:
        return item[0].split(b"\0", 1)[0].decode("utf-8", errors="replace")
    return item[0]


def decode(attr, data):
    """Return a copy of attr holding the values decoded from data."""
    expected = attr.size * attr.data_size
    if len(data) != expected:
        raise ValueError(f"{attr.name}: {len(data)} bytes, expected {expected}")
    element = struct.Struct(_element_format(attr))
    result = attr.copy()
    result.values = [_unpacked_value(attr, item) for item in element.iter_unpack(bytes(data))]
    return result