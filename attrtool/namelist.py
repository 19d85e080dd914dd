"""Sorted lists of attribute names used to filter exports."""

from __future__ import annotations

from bisect import bisect_left


class NameList:
    """A sorted collection of names.

    An empty list stands for "no filter", so every name is contained in it.
    """

    def __init__(self, names=()):
        self._names = sorted(names)

    def __contains__(self, name):
        if not self._names:
            return True
        position = bisect_left(self._names, name)
        return position < len(self._names) and self._names[position] == name

    def __len__(self):
        return len(self._names)

    def __iter__(self):
        return iter(self._names)


def load_name_list(path):
    """Read one name per line from path; None gives an empty list."""
    if path is None:
        return NameList()
    with open(path, encoding="utf-8") as handle:
        return NameList(
            name for line in handle if (name := line.split("\n", 1)[0])
        )