"""
Strict recursive-length-prefix (RLP) encoding for action envelopes and their fields.

Every value on the wire is either a data item (a byte string) or a list of
items. Each item carries a length prefix, so the format is self-describing:

    single byte 0x00..0x7f        the byte itself
    0x80 + len, data              data of 0..55 bytes
    0xb7 + len(len), len, data    data of 56+ bytes
    0xc0 + len, payload           list whose encoded items total 0..55 bytes
    0xf7 + len(len), len, payload list whose encoded items total 56+ bytes

Responsibilities
- Encode nested byte strings / sequences into canonical bytes.
- Parse bytes into an `RlpItem` tree, rejecting every non-canonical form:
  single bytes below 0x80 wrapped in a header, long forms used for short
  payloads, length prefixes with leading zeros, truncated items, trailing bytes.
- Provide the primitive field decoders (unsigned integers, fixed-width bytes,
  text, sequences) used by `actcodec.core.serde`.

Notes
- Canonical means each logical value has exactly one encoding, so encoded bytes
  can be hashed and compared directly.
- All parse failures are `actcodec.core.errors.FieldDecodeError` subclasses.
  No other exception escapes `decode_item` for bytes input.
- Zero-IO; stdlib-only.

Examples:
    >>> from actcodec.core.rlp import encode, decode_item
    >>> encode([b"\\x04"]).hex()
    'c104'
    >>> decode_item(bytes.fromhex("c104")).item_count()
    1
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar, Union

from .constants import MAX_RLP_DEPTH
from .errors import (
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

__all__ = [
    "Encoded",
    "RlpItem",
    "RlpValue",
    "encode",
    "encode_uint",
    "decode_item",
    "decode_uint",
    "decode_fixed",
    "decode_bytes",
    "decode_text",
    "decode_sequence",
]

T = TypeVar("T")

_STRING_OFFSET = 0x80
_LIST_OFFSET = 0xC0
_SHORT_LIMIT = 56


@dataclass(frozen=True, slots=True)
class Encoded:
    """Bytes that are already a canonical item; spliced into the output verbatim."""

    raw: bytes


RlpValue = Union[bytes, bytearray, Encoded, Sequence["RlpValue"]]


@dataclass(frozen=True, slots=True)
class RlpItem:
    """
    One parsed item.

    Attributes:
        raw (bytes): Full encoding of the item, header included.
        payload (bytes): Data bytes for a data item; concatenated child
            encodings for a list.
        children (tuple[RlpItem, ...] | None): Parsed children for a list, None
            for a data item.
    """

    raw: bytes
    payload: bytes
    children: tuple[RlpItem, ...] | None = None

    @property
    def is_list(self) -> bool:
        return self.children is not None

    def items(self) -> tuple[RlpItem, ...]:
        if self.children is None:
            raise RlpExpectedList("expected a list, found a data item")
        return self.children

    def item_count(self) -> int:
        return len(self.items())

    def at(self, index: int) -> RlpItem:
        items = self.items()
        if not 0 <= index < len(items):
            raise RlpTruncated(f"list has {len(items)} items; no item at index {index}")
        return items[index]

    def data(self) -> bytes:
        if self.children is not None:
            raise RlpExpectedData("expected a data item, found a list")
        return self.payload


# ============================================================================
# Encoding
# ============================================================================


def encode_uint(value: int) -> bytes:
    """
    Minimal big-endian bytes for a non-negative integer (0 encodes as b"").

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError(f"unsigned integer must be non-negative, got {value}")
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


def _header(length: int, offset: int) -> bytes:
    if length < _SHORT_LIMIT:
        return bytes([offset + length])
    size = encode_uint(length)
    return bytes([offset + _SHORT_LIMIT - 1 + len(size)]) + size


def encode(value: RlpValue) -> bytes:
    """
    Encode a byte string, an `Encoded` item or a (nested) sequence of them.

    Args:
        value (RlpValue): Value to encode. Sequences become lists and keep their order.

    Returns:
        bytes: Canonical encoding.

    Raises:
        TypeError: If value (or any nested element) is not encodable.
    """
    if isinstance(value, Encoded):
        return value.raw
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
        if len(data) == 1 and data[0] < _STRING_OFFSET:
            return data
        return _header(len(data), _STRING_OFFSET) + data
    if isinstance(value, (list, tuple)):
        payload = b"".join(encode(element) for element in value)
        return _header(len(payload), _LIST_OFFSET) + payload
    raise TypeError(f"cannot RLP-encode value of type {type(value).__name__}")


# ============================================================================
# Decoding
# ============================================================================


def _read_length(buf: bytes, start: int, count: int, limit: int) -> int:
    if start + count > limit:
        raise RlpTruncated("length prefix runs past end of input")
    if buf[start] == 0:
        raise RlpNonCanonical("length prefix has a leading zero byte")
    return int.from_bytes(buf[start : start + count], "big")


def _parse(buf: bytes, offset: int, limit: int, depth: int, max_depth: int) -> tuple[RlpItem, int]:
    if offset >= limit:
        raise RlpTruncated("expected an item, found end of input")

    prefix = buf[offset]
    if prefix < _STRING_OFFSET:
        single = buf[offset : offset + 1]
        return RlpItem(raw=single, payload=single), offset + 1

    if prefix < _LIST_OFFSET:
        is_list = False
        short_max = _STRING_OFFSET + _SHORT_LIMIT - 1
        base = _STRING_OFFSET
    else:
        is_list = True
        short_max = _LIST_OFFSET + _SHORT_LIMIT - 1
        base = _LIST_OFFSET

    if prefix <= short_max:
        length = prefix - base
        start = offset + 1
    else:
        size = prefix - short_max
        length = _read_length(buf, offset + 1, size, limit)
        if length < _SHORT_LIMIT:
            raise RlpNonCanonical(f"long form used for a {length}-byte payload")
        start = offset + 1 + size

    end = start + length
    if end > limit:
        raise RlpTruncated(f"item declares {length} payload bytes; only {limit - start} remain")

    payload = buf[start:end]
    raw = buf[offset:end]
    if not is_list:
        if length == 1 and payload[0] < _STRING_OFFSET:
            raise RlpNonCanonical("single byte below 0x80 must be encoded as itself")
        return RlpItem(raw=raw, payload=payload), end

    if depth > max_depth:
        raise RlpTooDeep(f"list nesting exceeds {max_depth}")
    children: list[RlpItem] = []
    pos = start
    while pos < end:
        child, pos = _parse(buf, pos, end, depth + 1, max_depth)
        children.append(child)
    return RlpItem(raw=raw, payload=payload, children=tuple(children)), end


def decode_item(data: bytes | bytearray | memoryview, *, max_depth: int = MAX_RLP_DEPTH) -> RlpItem:
    """
    Parse exactly one canonical item from `data`.

    Args:
        data (bytes | bytearray | memoryview): Encoded input.
        max_depth (int): Deepest list nesting accepted; the outermost list is depth 1.

    Returns:
        RlpItem: Parsed item tree.

    Raises:
        RlpTruncated: Input ends inside an item.
        RlpTrailingBytes: Input continues after the item.
        RlpNonCanonical: Item is not in canonical form.
        RlpTooDeep: Lists nest deeper than max_depth.
    """
    buf = bytes(data)
    item, end = _parse(buf, 0, len(buf), 1, max_depth)
    if end != len(buf):
        raise RlpTrailingBytes(f"{len(buf) - end} bytes after the top-level item")
    return item


def decode_uint(item: RlpItem, bits: int) -> int:
    """Decode a minimal big-endian unsigned integer no wider than `bits`."""
    data = item.data()
    if data[:1] == b"\x00":
        raise RlpNonCanonical("integer has a leading zero byte")
    if len(data) * 8 > bits:
        raise IntegerOverflow(f"{len(data)}-byte integer does not fit in {bits} bits")
    return int.from_bytes(data, "big")


def decode_fixed(item: RlpItem, size: int) -> bytes:
    """Decode a data item that must be exactly `size` bytes."""
    data = item.data()
    if len(data) != size:
        raise InvalidLength(f"expected {size} bytes, got {len(data)}")
    return data


def decode_bytes(item: RlpItem) -> bytes:
    return item.data()


def decode_text(item: RlpItem) -> str:
    try:
        return item.data().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidText(f"text is not valid UTF-8: {exc.reason}") from exc


def decode_sequence(item: RlpItem, element: Callable[[RlpItem], T]) -> tuple[T, ...]:
    """Decode a list item element-wise, preserving order."""
    return tuple(element(child) for child in item.items())
