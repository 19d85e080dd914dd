"""Text forms of attributes for the export, read and dump commands."""

from __future__ import annotations

from itertools import product

_MAX_DIMS = 3
_DUMP_INLINE_LIMIT = 4


def _data_type(attr):
    """Short type label, with an 'e' suffix for enumerated attributes."""
    label = attr.type.short_label()
    return f"{label}e" if attr.enums else label


def _brackets(numbers):
    return "".join(f"[{number}]" for number in numbers)


def export_lines(attr):
    """Yield the dump-file lines that describe every element of attr.

    A scalar gives one line with four-space separators; an array gives
    one line per element, in row-major order, each naming its index.
    """
    dims = attr.dims
    if len(dims) > _MAX_DIMS:
        raise ValueError(
            f"{attr.name}: unsupported array size ({len(dims)} dimensions)"
        )

    data_type = _data_type(attr)

    if not dims:
        yield f"{attr.name}    {data_type}    {attr.format_value(0)}"
        return

    shape = _brackets(dims)
    positions = product(*(range(dim) for dim in dims))
    for index, position in enumerate(positions):
        yield (
            f"{attr.name}{_brackets(position)} {data_type}{shape} "
            f"{attr.format_value(index)}"
        )


def format_read(attr):
    """One line showing all values of attr, with its shape if it is an array."""
    shape = f"<{','.join(str(dim) for dim in attr.dims)}>" if attr.dims else ""
    return f"{attr.name}{shape} = {attr.format_values()}"


def format_dump_entry(attr):
    """Indented line naming attr, its type and its values or element count."""
    head = f"  {attr.name}: {attr.type.label()}"
    if attr.size <= _DUMP_INLINE_LIMIT:
        return f"{head} {attr.format_values()}"
    return f"{head} [{attr.size}]"