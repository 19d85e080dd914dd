"""Attribute types, attribute values and their textual forms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import IntEnum
from itertools import takewhile

_U64_MAX = (1 << 64) - 1
_NUMBER_SIZES = (1, 2, 4, 8)
_DIGITS = {
    8: frozenset("01234567"),
    10: frozenset("0123456789"),
    16: frozenset("0123456789abcdefABCDEF"),
}


class AttrType(IntEnum):
    """Data type of an attribute."""

    UNKNOWN = 0
    UINT8 = 1
    UINT16 = 2
    UINT32 = 3
    UINT64 = 4
    INT8 = 5
    INT16 = 6
    INT32 = 7
    INT64 = 8
    STRING = 9
    COMPLEX = 10

    @classmethod
    def from_label(cls, label):
        """Return the type with the given long label, or UNKNOWN."""
        for attr_type, (long_label, _) in _LABELS.items():
            if long_label == label:
                return attr_type
        return cls.UNKNOWN

    @classmethod
    def from_short_label(cls, label):
        """Return the type with the given short label, or UNKNOWN."""
        for attr_type, (_, short) in _LABELS.items():
            if short == label:
                return attr_type
        return cls.UNKNOWN

    def label(self):
        """Long label of the type, as used in the info database."""
        return _LABELS.get(self, ("<NULL>", "<NULL>"))[0]

    def short_label(self):
        """Short label of the type, as used in dump files."""
        return _LABELS.get(self, ("<NULL>", "<NULL>"))[1]

    def size(self):
        """Size in bytes of one value of a numeric type."""
        try:
            return _SIZES[self]
        except KeyError:
            raise ValueError(f"{self.name} has no fixed size") from None

    @property
    def is_numeric(self):
        return self in _SIZES


_LABELS = {
    AttrType.UINT8: ("uint8", "u8"),
    AttrType.UINT16: ("uint16", "u16"),
    AttrType.UINT32: ("uint32", "u32"),
    AttrType.UINT64: ("uint64", "u64"),
    AttrType.INT8: ("int8", "s8"),
    AttrType.INT16: ("int16", "s16"),
    AttrType.INT32: ("int32", "s32"),
    AttrType.INT64: ("int64", "s64"),
    AttrType.STRING: ("str", "str"),
    AttrType.COMPLEX: ("complex", "cpx"),
}

_SIZES = {
    AttrType.UINT8: 1,
    AttrType.INT8: 1,
    AttrType.UINT16: 2,
    AttrType.INT16: 2,
    AttrType.UINT32: 4,
    AttrType.INT32: 4,
    AttrType.UINT64: 8,
    AttrType.INT64: 8,
}


def parse_number(token):
    """Parse an unsigned 64-bit number, detecting hex and octal prefixes.

    Leading garbage-free digits are used; text without digits gives 0.
    Negative numbers wrap around and overlong numbers saturate.
    """
    text = token.lstrip(" \t\n\r\f\v")
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]

    if text[:2].lower() == "0x" and len(text) > 2 and text[2] in _DIGITS[16]:
        base, text = 16, text[2:]
    elif text.startswith("0"):
        base = 8
    else:
        base = 10

    digits = "".join(takewhile(_DIGITS[base].__contains__, text))
    if not digits:
        return 0

    value = int(digits, base)
    if value > _U64_MAX:
        return _U64_MAX
    if negative:
        value = -value & _U64_MAX
    return value


def _mask(data_size):
    return (1 << (8 * data_size)) - 1


def format_number(value, data_size):
    """Format a number as zero-padded hex for a field of data_size bytes."""
    if data_size not in _NUMBER_SIZES:
        raise ValueError(f"unsupported data size {data_size}")
    return f"0x{value & _mask(data_size):0{2 * data_size}x}"


def spec_size(spec):
    """Total byte size of one element of a complex attribute spec."""
    return sum(int(ch) for ch in spec)


def _truncate(text, limit):
    return text.encode("utf-8")[:limit].decode("utf-8", errors="ignore")


@dataclass
class Attr:
    """An attribute definition together with its element values.

    Numeric values are unsigned integers, string values are str and
    complex values are tuples with one integer per spec field.
    """

    name: str
    type: AttrType
    data_size: int = 0
    dims: tuple = ()
    enums: dict = field(default_factory=dict)
    spec: str | None = None
    values: list = field(default_factory=list)

    def __post_init__(self):
        self.type = AttrType(self.type)
        self.dims = tuple(self.dims)
        if self.type is AttrType.COMPLEX:
            if not self.spec:
                raise ValueError(f"{self.name}: complex attribute needs a spec")
            self.data_size = spec_size(self.spec)
        elif self.type is AttrType.STRING:
            if self.data_size <= 0:
                raise ValueError(f"{self.name}: string attribute needs a size")
        elif self.type is AttrType.UNKNOWN:
            raise ValueError(f"{self.name}: unknown attribute type")
        else:
            self.data_size = self.type.size()

        if not self.values:
            self.values = [self._zero() for _ in range(self.size)]
        elif len(self.values) != self.size:
            raise ValueError(
                f"{self.name}: {len(self.values)} values, expected {self.size}"
            )
        else:
            self.values = list(self.values)

    def _zero(self):
        if self.type is AttrType.COMPLEX:
            return (0,) * len(self.spec)
        if self.type is AttrType.STRING:
            return ""
        return 0

    @property
    def size(self):
        """Number of elements: the product of the dimensions."""
        return math.prod(self.dims)

    def copy(self):
        """Return an independent copy of this attribute."""
        return replace(
            self, dims=self.dims, enums=dict(self.enums), values=list(self.values)
        )

    def set_value(self, index, token):
        """Set a numeric or string element from its text form.

        Numeric tokens may name an enumerator; otherwise they are parsed
        as numbers and truncated to the element size.
        """
        if self.type is AttrType.COMPLEX:
            raise TypeError(f"{self.name}: complex values are set with set_complex")
        if self.type is AttrType.STRING:
            self.values[index] = _truncate(token, self.data_size)
            return
        number = self.enums.get(token)
        if number is None:
            number = parse_number(token)
        self.values[index] = number & _mask(self.data_size)

    def set_complex(self, index, tokens):
        """Set a complex element from one token per spec field."""
        if self.type is not AttrType.COMPLEX:
            raise TypeError(f"{self.name}: not a complex attribute")
        tokens = list(tokens)
        if len(tokens) != len(self.spec):
            raise ValueError(
                f"{self.name}: {len(tokens)} values, expected {len(self.spec)}"
            )
        self.values[index] = tuple(
            parse_number(token) & _mask(int(ch))
            for token, ch in zip(tokens, self.spec)
        )

    def format_value(self, index):
        """Text form of one element."""
        value = self.values[index]
        if self.type is AttrType.COMPLEX:
            return " ".join(
                format_number(part, int(ch)) for part, ch in zip(value, self.spec)
            )
        if self.type is AttrType.STRING:
            return f'"{value}"'
        if self.enums:
            return next(
                (key for key, number in self.enums.items() if number == value),
                "UNKNOWN_ENUM",
            )
        return format_number(value, self.data_size)

    def format_values(self):
        """Text form of all elements, separated by spaces."""
        return " ".join(self.format_value(index) for index in range(self.size))