import pytest

from attrtool.codec import decode, encode
from attrtool.types import Attr, AttrType


def test_uint16_is_big_endian():
    attr = Attr("ATTR_X", AttrType.UINT16, values=[0x1234])
    assert encode(attr) == b"\x12\x34"


def test_uint64_is_big_endian():
    attr = Attr("ATTR_X", AttrType.UINT64, values=[1])
    assert encode(attr) == b"\x00" * 7 + b"\x01"


def test_string_is_null_padded():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=4, values=["ab"])
    assert encode(attr) == b"ab\x00\x00"


def test_complex_fields_are_packed():
    attr = Attr("ATTR_C", AttrType.COMPLEX, spec="18", values=[(1, 2)])
    assert encode(attr) == b"\x01" + b"\x00" * 7 + b"\x02"


@pytest.mark.parametrize(
    "attr",
    [
        Attr("ATTR_A", AttrType.UINT8, dims=(3,), values=[1, 2, 0xFF]),
        Attr("ATTR_B", AttrType.INT16, dims=(2, 2), values=[1, 2, 3, 0xFFFF]),
        Attr("ATTR_C", AttrType.UINT32, values=[0xDEADBEEF]),
        Attr("ATTR_D", AttrType.INT64, dims=(2,), values=[2**64 - 1, 7]),
        Attr("ATTR_E", AttrType.STRING, data_size=6, dims=(2,), values=["abc", "xyzxyz"]),
        Attr("ATTR_F", AttrType.COMPLEX, spec="1248", dims=(2,), values=[(1, 2, 3, 4), (5, 6, 7, 8)]),
    ],
)
def test_round_trip(attr):
    data = encode(attr)
    assert len(data) == attr.size * attr.data_size
    assert decode(attr, data).values == attr.values


def test_decode_wrong_length():
    attr = Attr("ATTR_X", AttrType.UINT32)
    with pytest.raises(ValueError):
        decode(attr, b"\x00\x01")


def test_decode_leaves_original_unchanged():
    attr = Attr("ATTR_X", AttrType.UINT16, dims=(2,))
    decoded = decode(attr, b"\x00\x05\x00\x06")
    assert attr.values == [0, 0]
    assert decoded.values == [5, 6]
    assert decoded.name == attr.name


def test_decode_string_stops_at_null():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=4)
    assert decode(attr, b"ab\x00z").values == ["ab"]


def test_decode_full_width_string():
    attr = Attr("ATTR_S", AttrType.STRING, data_size=4)
    assert decode(attr, b"abcd").values == ["abcd"]