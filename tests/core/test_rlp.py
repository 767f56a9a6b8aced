"""Tests for `actcodec.core.rlp` framing and primitive decoders."""

import pytest

from actcodec.core.errors import (
    FieldDecodeError,
    IntegerOverflow,
    InvalidLength,
    InvalidText,
    RlpExpectedData,
    RlpExpectedList,
    RlpNonCanonical,
    RlpTooDeep,
    RlpTrailingBytes,
    RlpTruncated,
)
from actcodec.core.rlp import (
    Encoded,
    decode_fixed,
    decode_item,
    decode_sequence,
    decode_text,
    decode_uint,
    encode,
    encode_uint,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (b"", "80"),
        (b"\x00", "00"),
        (b"\x7f", "7f"),
        (b"\x80", "8180"),
        (b"dog", "83646f67"),
        ([], "c0"),
        ([b"cat", b"dog"], "c88363617483646f67"),
        ([[], [[]], [[], [[]]]], "c7c0c1c0c3c0c1c0"),
    ],
)
def test_encode_known_vectors(value, expected: str) -> None:
    assert encode(value).hex() == expected


def test_encode_long_string_and_list_headers() -> None:
    data = b"a" * 56
    assert encode(data)[:2] == bytes([0xB8, 56])
    items = [b"b" * 60]
    encoded = encode(items)
    assert encoded[:2] == bytes([0xF8, 62])
    assert encode(b"c" * 1024)[:3] == bytes([0xB9, 0x04, 0x00])


def test_encode_rejects_unsupported_types() -> None:
    with pytest.raises(TypeError):
        encode("text")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        encode([1])  # type: ignore[list-item]


def test_encoded_is_spliced_verbatim() -> None:
    inner = encode([b"x", b"y"])
    assert encode([Encoded(inner)]) == encode([[b"x", b"y"]])


@pytest.mark.parametrize("value,expected", [(0, b""), (1, b"\x01"), (255, b"\xff"), (256, b"\x01\x00")])
def test_encode_uint_is_minimal(value: int, expected: bytes) -> None:
    assert encode_uint(value) == expected


def test_encode_uint_rejects_negative() -> None:
    with pytest.raises(ValueError):
        encode_uint(-1)


def test_decode_item_parses_nested_lists() -> None:
    item = decode_item(bytes.fromhex("c88363617483646f67"))
    assert item.is_list
    assert item.item_count() == 2
    assert item.at(0).data() == b"cat"
    assert item.at(1).raw == bytes.fromhex("83646f67")


def test_decode_item_long_payloads_roundtrip() -> None:
    value = [b"z" * 300, [b"q" * 70] * 5]
    item = decode_item(encode(value))
    assert item.at(0).data() == b"z" * 300
    assert [child.data() for child in item.at(1).items()] == [b"q" * 70] * 5


@pytest.mark.parametrize(
    "hex_input,error",
    [
        ("", RlpTruncated),
        ("83646f", RlpTruncated),
        ("c283646f67", RlpTruncated),
        ("b9", RlpTruncated),
        ("8000", RlpTrailingBytes),
        ("c0c0", RlpTrailingBytes),
        ("8105", RlpNonCanonical),
        ("c28105", RlpNonCanonical),
        ("b80161", RlpNonCanonical),
        ("f80180", RlpNonCanonical),
        ("b90038" + "61" * 56, RlpNonCanonical),
    ],
)
def test_decode_item_rejects_malformed_framing(hex_input: str, error: type[Exception]) -> None:
    with pytest.raises(error):
        decode_item(bytes.fromhex(hex_input))


def test_nested_list_cannot_overrun_parent() -> None:
    # Outer list declares 2 payload bytes; inner list claims 3.
    with pytest.raises(RlpTruncated):
        decode_item(bytes.fromhex("c2c3808080"))


def test_decode_item_depth_limit() -> None:
    nested: list = []
    for _ in range(9):
        nested = [nested]
    data = encode(nested)  # 10 levels of lists
    assert decode_item(data, max_depth=10).is_list
    with pytest.raises(RlpTooDeep):
        decode_item(data, max_depth=9)


def test_item_accessors_check_kind() -> None:
    data_item = decode_item(encode(b"abc"))
    list_item = decode_item(encode([b"abc"]))
    with pytest.raises(RlpExpectedList):
        data_item.items()
    with pytest.raises(RlpExpectedData):
        list_item.data()
    with pytest.raises(RlpTruncated):
        list_item.at(1)


def test_decode_uint_rules() -> None:
    assert decode_uint(decode_item(encode(b"")), 8) == 0
    assert decode_uint(decode_item(encode(b"\xff\xff")), 16) == 0xFFFF
    with pytest.raises(RlpNonCanonical):
        decode_uint(decode_item(encode(b"\x00\x01")), 16)
    with pytest.raises(RlpNonCanonical):
        decode_uint(decode_item(b"\x00"), 8)
    with pytest.raises(IntegerOverflow):
        decode_uint(decode_item(encode(b"\x01\x00\x00")), 16)


def test_decode_fixed_and_text() -> None:
    assert decode_fixed(decode_item(encode(b"\x01" * 20)), 20) == b"\x01" * 20
    with pytest.raises(InvalidLength):
        decode_fixed(decode_item(encode(b"\x01" * 19)), 20)
    assert decode_text(decode_item(encode("héllo".encode()))) == "héllo"
    with pytest.raises(InvalidText):
        decode_text(decode_item(encode(b"\xff\xfe")))


def test_decode_sequence_preserves_order() -> None:
    item = decode_item(encode([b"b", b"a", b"c"]))
    assert decode_sequence(item, lambda child: child.data()) == (b"b", b"a", b"c")


def test_all_framing_errors_are_field_decode_errors() -> None:
    for error in (RlpTruncated, RlpTrailingBytes, RlpNonCanonical, RlpTooDeep, InvalidText):
        assert issubclass(error, FieldDecodeError)
