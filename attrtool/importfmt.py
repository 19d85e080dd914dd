"""Parsing dump-file lines and command-line values into attribute values."""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from itertools import islice

from attrtool.types import AttrType

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_MAX_DIMS = 3


class DumpFormatError(ValueError):
    """A dump line or a list of values does not fit the attribute."""


@dataclass(frozen=True)
class AttrLine:
    """One attribute line of a dump file, split into its parts.

    index and dims hold the bracketed numbers after the name and after
    the data type; values holds the remaining tokens.
    """

    name: str
    index: tuple = ()
    data_type: str = ""
    dims: tuple = ()
    values: tuple = ()


def _atoi(token):
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


def _tokens(text, separator):
    return [part for part in text.split(separator) if part]


def _bracket_numbers(parts, line):
    numbers = []
    for part in parts[:_MAX_DIMS]:
        if not part.endswith("]"):
            raise DumpFormatError(f"unterminated bracket in {line!r}")
        numbers.append(_atoi(part[:-1]))
    return tuple(numbers)


def parse_target_line(line):
    """Return the target name of a ``target = <name>`` line."""
    parts = _tokens(line, "=")
    if len(parts) < 2:
        raise DumpFormatError(f"invalid target line {line!r}")
    return parts[1].lstrip(" ")


def parse_attr_line(line):
    """Split an attribute line; lines not naming an ATTR give None."""
    tokens = _tokens(line, " ")
    if not tokens:
        raise DumpFormatError("empty attribute line")

    name_parts = _tokens(tokens[0], "[")
    if not name_parts:
        raise DumpFormatError(f"missing attribute name in {line!r}")
    name = name_parts[0]
    if not name.startswith("ATTR"):
        return None
    index = _bracket_numbers(name_parts[1:], line)

    if len(tokens) < 2:
        raise DumpFormatError(f"{name}: missing data type")
    type_parts = _tokens(tokens[1], "[")
    if not type_parts:
        raise DumpFormatError(f"{name}: missing data type")
    data_type = type_parts[0]
    if data_type.endswith("e"):
        data_type = data_type[:-1]
    dims = _bracket_numbers(type_parts[1:], line)

    return AttrLine(name, index, data_type, dims, tuple(tokens[2:]))


def _brackets(numbers):
    return "".join(f"[{number}]" for number in numbers)


def apply_attr_line(attr, parsed):
    """Return a copy of attr with the element named by parsed set."""
    if AttrType.from_short_label(parsed.data_type) is not attr.type:
        raise DumpFormatError(f"{attr.name}: type mismatch")

    rank = len(attr.dims)
    declared = parsed.dims + (-1,) * max(0, rank - len(parsed.dims))
    if declared[:rank] != attr.dims:
        raise DumpFormatError(
            f"{attr.name}: dim mismatch {_brackets(declared[:rank])} "
            f"!= {_brackets(attr.dims)}"
        )

    index = parsed.index + (0,) * max(0, rank - len(parsed.index))
    if any(not 0 <= position < dim for position, dim in zip(index, attr.dims)):
        raise DumpFormatError(
            f"{attr.name}: index overflow {_brackets(index[:rank])} "
            f"> {_brackets(attr.dims)}"
        )

    flat = 0
    for position, dim in zip(index, attr.dims):
        flat = flat * dim + position

    result = attr.copy()
    if attr.type is AttrType.COMPLEX:
        parts = list(islice(parsed.values, len(attr.spec)))
        if len(parts) != len(attr.spec):
            raise DumpFormatError(f"{attr.name}: missing values")
        result.set_complex(flat, parts)
        return result

    if not parsed.values:
        raise DumpFormatError(f"{attr.name}: missing value")
    token = parsed.values[0]

    if attr.type is AttrType.STRING:
        if len(token) < 2 or token[0] != '"' or token[-1] != '"':
            raise DumpFormatError(f"{attr.name}: string value must be quoted")
        text = token[1:-1]
        if len(text.encode("utf-8")) > attr.data_size:
            warnings.warn(f"{attr.name}: value truncated", stacklevel=2)
        result.set_value(flat, text)
    else:
        result.set_value(flat, token)
    return result


def write_values(attr, tokens):
    """Return a copy of attr with every element set from tokens.

    Complex attributes take one token per spec field of each element.
    """
    tokens = list(tokens)
    per_element = len(attr.spec) if attr.type is AttrType.COMPLEX else 1
    expected = attr.size * per_element
    if len(tokens) != expected:
        raise DumpFormatError(
            f"Insufficient values {len(tokens)}, expected {expected}"
        )

    result = attr.copy()
    if attr.type is AttrType.COMPLEX:
        chunks = zip(*[iter(tokens)] * per_element)
        for index, chunk in enumerate(chunks):
            result.set_complex(index, chunk)
        return result

    for index, token in enumerate(tokens):
        if attr.type is AttrType.STRING:
            length = len(token.encode("utf-8"))
            if length > attr.data_size:
                raise DumpFormatError(
                    f"Value too long ({length}), expected ({attr.data_size})"
                )
        result.set_value(index, token)
    return result