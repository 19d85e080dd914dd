"""Reading the attribute information database.

The database is a line-oriented text file::

    all <attr-name> <attr-name> ...
    <attr-name> <type> [<spec>|<string-size>] <dim-count> <dims...>
        [<enum-count> <key> <value> ...] <defined> [<values...>]
    ...
    targets <target-name> <target-name> ...
    <target-name> <attr-id> <attr-id> ...
    ...

Each attribute and each target has a line of its own, in the order given
by the ``all`` and ``targets`` lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from attrtool.types import Attr, AttrType, parse_number

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InfoDbError(Exception):
    """The information database is missing or malformed."""


def _atoi(token):
    match = _LEADING_INT.match(token)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class TargetInfo:
    """A target class and the ids of the attributes it carries."""

    name: str
    ids: tuple = ()


@dataclass
class AttrInfo:
    """All attribute definitions and per-target attribute lists."""

    attrs: list = field(default_factory=list)
    targets: list = field(default_factory=list)

    def __post_init__(self):
        self._attr_index = {}
        for attr in self.attrs:
            self._attr_index.setdefault(attr.name, attr)
        self._target_index = {}
        for target in self.targets:
            self._target_index.setdefault(target.name, target)

    def attr(self, name):
        """Return the attribute definition called name, or None."""
        return self._attr_index.get(name)

    def target(self, name):
        """Return the target called name, or None."""
        return self._target_index.get(name)

    def attrs_for_target(self, name):
        """Return the attribute definitions of a target; [] if it is unknown."""
        target = self.target(name)
        if target is None:
            return []
        result = []
        for attr_id in target.ids:
            if not 0 <= attr_id < len(self.attrs):
                raise InfoDbError(
                    f"{name}: attribute id {attr_id} out of range "
                    f"(0..{len(self.attrs) - 1})"
                )
            result.append(self.attrs[attr_id])
        return result


class _LineReader:
    def __init__(self, lines):
        self._lines = iter(lines)

    def value(self, key):
        """Read the next line, check its key and return its tokens."""
        line = next(self._lines, None)
        if line is None:
            raise InfoDbError(f"Failed to read key '{key}'")
        line = line.rstrip("\n")
        head, _, rest = line.lstrip(" ").partition(" ")
        if head != key:
            raise InfoDbError(f"Expected {key}, got {head}")
        return rest.split()


def _take(tokens, what):
    try:
        return next(tokens)
    except StopIteration:
        raise InfoDbError(f"missing {what}") from None


def _parse_attr(name, tokens):
    tokens = iter(tokens)
    attr_type = AttrType.from_label(_take(tokens, "type"))
    if attr_type is AttrType.UNKNOWN:
        raise InfoDbError(f"{name}: unknown type")

    spec = None
    data_size = 0
    if attr_type is AttrType.COMPLEX:
        spec = _take(tokens, "spec")
        if not spec.isdigit():
            raise InfoDbError(f"{name}: bad spec {spec}")
    elif attr_type is AttrType.STRING:
        data_size = _atoi(_take(tokens, "string size"))
        if data_size <= 0:
            raise InfoDbError(f"{name}: bad string size {data_size}")

    dim_count = _atoi(_take(tokens, "dimension count"))
    if not 0 <= dim_count <= 3:
        raise InfoDbError(f"{name}: bad dimension count {dim_count}")
    dims = tuple(_atoi(_take(tokens, "dimension")) for _ in range(dim_count))
    if any(dim <= 0 for dim in dims):
        raise InfoDbError(f"{name}: bad dimensions {dims}")

    enums = {}
    if attr_type.is_numeric:
        enum_count = _atoi(_take(tokens, "enum count"))
        for _ in range(max(enum_count, 0)):
            key = _take(tokens, "enum key")
            enums.setdefault(key, parse_number(_take(tokens, "enum value")))

    defined = _atoi(_take(tokens, "defined flag"))
    if defined not in (0, 1):
        raise InfoDbError(f"{name}: bad defined flag {defined}")

    try:
        attr = Attr(
            name=name,
            type=attr_type,
            data_size=data_size,
            dims=dims,
            enums=enums,
            spec=spec,
        )
    except ValueError as exc:
        raise InfoDbError(str(exc)) from exc

    if defined:
        for index in range(attr.size):
            if attr.type is AttrType.COMPLEX:
                parts = [_take(tokens, "value") for _ in attr.spec]
                attr.set_complex(index, parts)
            else:
                attr.set_value(index, _take(tokens, "value"))
    return attr


def parse_infodb(lines):
    """Parse the database from an iterable of text lines."""
    reader = _LineReader(lines)

    try:
        names = reader.value("all")
    except InfoDbError as exc:
        raise InfoDbError(f"Failed to read all: {exc}") from exc

    attrs = []
    for name in names:
        try:
            attrs.append(_parse_attr(name, reader.value(name)))
        except InfoDbError as exc:
            raise InfoDbError(f"Failed to read {name}: {exc}") from exc

    try:
        target_names = reader.value("targets")
    except InfoDbError as exc:
        raise InfoDbError(f"Failed to read targets: {exc}") from exc

    targets = []
    for name in target_names:
        try:
            ids = tuple(_atoi(token) for token in reader.value(name))
        except InfoDbError as exc:
            raise InfoDbError(
                f"Failed to read per target attributes: {exc}"
            ) from exc
        targets.append(TargetInfo(name, ids))

    return AttrInfo(attrs, targets)


def load_infodb(path):
    """Load the database from the file at path."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_infodb(handle)
    except OSError as exc:
        raise InfoDbError(f"Failed to open db: {path}") from exc