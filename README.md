# attrtool

A library for hardware attributes kept as device tree properties: it reads
the attribute information database, encodes attribute values to and from
the big-endian bytes stored in a property, maps device tree, FAPI and
Cronus class names, parses and builds Cronus target names, and produces
and parses the text dump format used to export and import attribute
values.

It has no dependencies outside the standard library.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `attrtool.types`

- `AttrType`: an `IntEnum` of `UINT8` … `UINT64`, `INT8` … `INT64`,
  `STRING`, `COMPLEX` and `UNKNOWN`. `AttrType.from_label("uint32")` and
  `AttrType.from_short_label("u32")` look types up by their long and short
  labels (giving `UNKNOWN` when nothing matches); `label()`,
  `short_label()` and `size()` go the other way. `size()` raises
  `ValueError` for types without a fixed size.
- `Attr`: a dataclass holding an attribute's name, type, element size,
  dimensions (`dims`, a tuple), enumerators (`enums`, a dict of key to
  number), complex `spec` (one digit per field, each the field's byte size)
  and `values`, one per element. Values start at zero (or `""`) when not
  given. `size` is the number of elements; `copy()` gives an independent
  copy.
  - `set_value(index, token)` sets a numeric element from a number or an
    enumerator key, truncated to the element size, or a string element,
    truncated to `data_size` bytes.
  - `set_complex(index, tokens)` sets a complex element from one token per
    spec field.
  - `format_value(index)` and `format_values()` give the text form:
    zero-padded hex numbers, enumerator keys (`UNKNOWN_ENUM` for a number
    with no key), or quoted strings.
- `parse_number(token)` reads an unsigned 64-bit number with `0x` and
  leading-`0` (octal) prefixes; `format_number(value, data_size)` and
  `spec_size(spec)` are the other helpers.

### `attrtool.codec`

`encode(attr)` returns the big-endian bytes of an attribute's values.
`decode(attr, data)` returns a copy of `attr` holding the values read from
`data`, and raises `ValueError` if the length does not match.

### `attrtool.namelist`

`load_name_list(path)` reads one name per line into a `NameList`, a sorted
collection supporting `in`, `len()` and iteration. An empty list (also what
`load_name_list(None)` gives) contains every name, so it can be used as "no
filter".

### `attrtool.infodb`

`load_infodb(path)` and `parse_infodb(lines)` read the attribute
information database:

```
all <attr-name> <attr-name> ...
<attr-name> <type> [<spec>|<string-size>] <dim-count> <dims...> [<enum-count> <key> <value> ...] <defined> [<values...>]
...
targets <target-name> <target-name> ...
<target-name> <attr-id> <attr-id> ...
...
```

The result is an `AttrInfo` with `attrs` and `targets` lists;
`attr(name)` and `target(name)` look entries up (or give `None`), and
`attrs_for_target(name)` lists the `Attr` definitions of a target class
(`TargetInfo`). Missing or malformed input raises `InfoDbError`.

### `attrtool.target`

- `dtree_to_fapi_class`, `cronus_to_dtree_class` and
  `dtree_to_cronus_class` translate class names, giving `None` when
  unknown.
- `node_name_to_class("core12@1234")` gives `"core"`; an empty name gives
  `"root"`.
- `CronusTarget.parse(name, chip)` splits a name such as
  `p10.c:k0:n0:s0:p00:c1` into chip, class, cage, node, slot, chip
  position and chip unit (absent parts are `None`), raising `ValueError`
  for a malformed name or a chip other than `chip`. `str()` builds the name
  back: `k0`, `p10:k0:n0:s0:p00`, `p10.c:k0:n0:s0:p00:c1`, or, without a
  chip position, `p10.bmc:k0:n0:s0:c0`.

### `attrtool.dlist`

`LinkedList` is a circular doubly-linked list of `ListNode` objects
(subclass `ListNode` to put your own objects in it), with `add`,
`add_tail`, `add_before`, `remove`, `top`, `tail`, `pop`, iteration
(removing the current node while iterating is allowed), `reversed()`,
`len()` and truth testing. `check(message)` on a list or a node returns it
when the links are consistent; otherwise it returns `None`, or raises
`ListCorruptError` when a message is given. `remove` raises `IndexError` on
an empty list and `ValueError` for a node that is not in it.

### `attrtool.dumpfmt`

- `export_lines(attr)` yields the export lines of an attribute: one line
  for a scalar, one per element in row-major order for an array of up to
  three dimensions.
- `format_read(attr)` gives `NAME<dims> = values`.
- `format_dump_entry(attr)` gives `  NAME: type values`, or the element
  count in brackets when there are more than four elements.

### `attrtool.importfmt`

- `parse_target_line("target = p10:k0:n0:s0:p00")` gives the target name.
- `parse_attr_line(line)` splits an export line into an `AttrLine` (name,
  index, data type, dimensions, value tokens), or gives `None` when the
  name does not start with `ATTR`.
- `apply_attr_line(attr, parsed)` returns a copy of `attr` with the named
  element set, after checking type, dimensions and index; a string longer
  than the attribute's size issues a warning and is truncated.
- `write_values(attr, tokens)` returns a copy with every element set from
  tokens (one per spec field for complex attributes).

Errors raise `DumpFormatError`.

## Example

```python
from attrtool.codec import decode, encode
from attrtool.dumpfmt import export_lines, format_read
from attrtool.types import Attr, AttrType

attr = Attr(name="ATTR_FREQ", type=AttrType.UINT32, dims=(2,))
attr.set_value(0, "0x10")
attr.set_value(1, "20")

blob = encode(attr)          # b'\x00\x00\x00\x10\x00\x00\x00\x14'
back = decode(attr, blob)

print(format_read(back))     # ATTR_FREQ<2> = 0x00000010 0x00000014
for line in export_lines(back):
    print(line)              # ATTR_FREQ[0] u32[2] 0x00000010 ...
```

## What it does not do

The package has no command-line program, and it does not read or write
device tree blob files. Finding the device tree node that a Cronus target
names, or the Cronus name of a node, and storing encoded values back into a
device tree, are left to the caller: the package works on attribute values,
class names, target name strings and dump text.