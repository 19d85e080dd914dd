import pytest

from attrtool.dumpfmt import export_lines
from attrtool.importfmt import (
    AttrLine,
    DumpFormatError,
    apply_attr_line,
    parse_attr_line,
    parse_target_line,
    write_values,
)
from attrtool.types import Attr, AttrType


def _import_all(attr, lines):
    result = attr
    for line in lines:
        result = apply_attr_line(result, parse_attr_line(line))
    return result


def test_parse_target_line():
    assert parse_target_line("target = p10:k0:n0:s0:p00") == "p10:k0:n0:s0:p00"


def test_parse_target_line_without_value():
    with pytest.raises(DumpFormatError):
        parse_target_line("target")


def test_parse_attr_line_skips_non_attr():
    assert parse_attr_line("FOO u8 0x01") is None


def test_parse_attr_line_array():
    parsed = parse_attr_line("ATTR_FOO[1][2] u8e[2][3] ON")
    assert parsed == AttrLine("ATTR_FOO", (1, 2), "u8", (2, 3), ("ON",))


def test_parse_attr_line_scalar_with_wide_spacing():
    parsed = parse_attr_line("ATTR_BAR    u32    0x00000010")
    assert parsed.name == "ATTR_BAR"
    assert parsed.index == ()
    assert parsed.dims == ()
    assert parsed.data_type == "u32"
    assert parsed.values == ("0x00000010",)


def test_parse_attr_line_unterminated_bracket():
    with pytest.raises(DumpFormatError):
        parse_attr_line("ATTR_FOO[1 u8[2] 0x01")


def test_parse_attr_line_missing_type():
    with pytest.raises(DumpFormatError):
        parse_attr_line("ATTR_FOO")


def test_apply_scalar_numeric():
    attr = Attr("ATTR_X", AttrType.UINT8)
    result = apply_attr_line(attr, parse_attr_line("ATTR_X    u8    0x2a"))
    assert result.format_value(0) == "0x2a"
    assert attr.values == [0]


def test_round_trip_two_dimensional():
    source = Attr("ATTR_A", AttrType.UINT16, dims=(2, 3), values=[1, 2, 3, 4, 5, 6])
    result = _import_all(Attr("ATTR_A", AttrType.UINT16, dims=(2, 3)), export_lines(source))
    assert result.values == source.values


def test_round_trip_complex():
    source = Attr("ATTR_C", AttrType.COMPLEX, spec="14", dims=(2,), values=[(1, 7), (9, 300)])
    result = _import_all(Attr("ATTR_C", AttrType.COMPLEX, spec="14", dims=(2,)), export_lines(source))
    assert result.values == source.values


def test_round_trip_string():
    source = Attr("ATTR_S", AttrType.STRING, data_size=8, values=["hello"])
    result = _import_all(Attr("ATTR_S", AttrType.STRING, data_size=8), export_lines(source))
    assert result.values == ["hello"]


def test_round_trip_enum():
    enums = {"OFF": 0, "ON": 1}
    source = Attr("ATTR_E", AttrType.UINT8, enums=enums, values=[1])
    result = _import_all(Attr("ATTR_E", AttrType.UINT8, enums=enums), export_lines(source))
    assert result.format_value(0) == "ON"


def test_type_mismatch():
    attr = Attr("ATTR_X", AttrType.UINT8)
    with pytest.raises(DumpFormatError, match="type mismatch"):
        apply_attr_line(attr, parse_attr_line("ATTR_X u16 0x01"))


def test_dim_mismatch():
    attr = Attr("ATTR_X", AttrType.UINT8, dims=(2,))
    with pytest.raises(DumpFormatError, match="dim mismatch"):
        apply_attr_line(attr, parse_attr_line("ATTR_X[0] u8[3] 0x01"))


def test_index_overflow():
    attr = Attr("ATTR_X", AttrType.UINT8, dims=(2,))
    with pytest.raises(DumpFormatError, match="index overflow"):
        apply_attr_line(attr, parse_attr_line("ATTR_X[2] u8[2] 0x01"))


def test_unquoted_string_rejected():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=4)
    with pytest.raises(DumpFormatError):
        apply_attr_line(attr, parse_attr_line("ATTR_S str abc"))


def test_long_string_warns_and_truncates():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=4)
    with pytest.warns(UserWarning, match="truncated"):
        result = apply_attr_line(attr, parse_attr_line('ATTR_S str "abcdefgh"'))
    assert result.values == ["abcd"]


def test_complex_missing_values():
    attr = Attr("ATTR_C", AttrType.COMPLEX, spec="14")
    with pytest.raises(DumpFormatError):
        apply_attr_line(attr, parse_attr_line("ATTR_C cpx 0x01"))


def test_write_values_round_trip():
    attr = Attr("ATTR_A", AttrType.UINT32, dims=(3,))
    result = write_values(attr, ["0x00000001", "0x00000002", "0x00000003"])
    assert result.format_values() == "0x00000001 0x00000002 0x00000003"
    assert attr.values == [0, 0, 0]


def test_write_values_wrong_count():
    attr = Attr("ATTR_A", AttrType.UINT8, dims=(2,))
    with pytest.raises(DumpFormatError, match="Insufficient values 1, expected 2"):
        write_values(attr, ["1"])


def test_write_values_complex_needs_all_fields():
    attr = Attr("ATTR_C", AttrType.COMPLEX, spec="12", dims=(2,))
    with pytest.raises(DumpFormatError):
        write_values(attr, ["1", "2"])
    result = write_values(attr, ["0x01", "0x0002", "0x03", "0x0004"])
    assert result.format_values() == "0x01 0x0002 0x03 0x0004"


def test_write_values_string_too_long():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=3)
    with pytest.raises(DumpFormatError, match="Value too long"):
        write_values(attr, ["abcd"])


def test_write_values_enum():
    attr = Attr("ATTR_E", AttrType.UINT8, enums={"OFF": 0, "ON": 1})
    assert write_values(attr, ["ON"]).format_values() == "ON"