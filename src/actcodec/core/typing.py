"""
Primitive field types used across the action schema.

Provides pydantic-annotated aliases for the fixed-width and bounded primitives
an action carries (addresses, public keys, signatures, hashes, unsigned
integers, opaque blobs). Each alias validates on construction, so any value
that reaches the encoder already has its canonical width.

Notes:
    - Byte-valued aliases accept `bytes`/`bytearray` or hex strings (with or
      without a `0x` prefix) and serialize to `0x`-prefixed hex in JSON mode.
    - Integer aliases are strict: booleans and numeric strings are rejected.
    - `Transaction` holds the canonical encoding of exactly one RLP item; its
      contents belong to the asset layer and are not interpreted here.

Examples:
    >>> from pydantic import TypeAdapter
    >>> from actcodec.core.typing import Address
    >>> TypeAdapter(Address).validate_python("0x" + "11" * 20) == b"\\x11" * 20
    True
"""

from __future__ import annotations

from typing import Annotated, Any, NewType

from pydantic import BeforeValidator, Field, PlainSerializer

from .constants import (
    ADDRESS_SIZE,
    H160_SIZE,
    H256_SIZE,
    MAX_RLP_DEPTH,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    U16_MAX,
    U64_MAX,
)
from .errors import DecodeError
from .rlp import decode_item

__all__ = [
    "Address",
    "Public",
    "Signature",
    "H160",
    "H256",
    "Blob",
    "Transaction",
    "U16",
    "U64",
    "ShardId",
    "Tag",
    "to_hex",
    "coerce_bytes",
]

# Discriminant byte as read off the wire.
Tag = NewType("Tag", int)


def to_hex(value: bytes) -> str:
    return "0x" + value.hex()


def coerce_bytes(value: Any, label: str) -> bytes:
    """
    Coerce bytes-like or hex text into bytes.

    Raises:
        ValueError: If value is neither bytes-like nor valid hex.
    """
    if isinstance(value, str):
        text = value[2:] if value[:2] in ("0x", "0X") else value
        try:
            return bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"{label} must be a hex string, got {value!r}") from exc
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ValueError(f"{label} must be bytes or a hex string, got {type(value).__name__}")


def _fixed_width(size: int, label: str) -> Any:
    def _validate(value: Any) -> bytes:
        raw = coerce_bytes(value, label)
        if len(raw) != size:
            raise ValueError(f"{label} must be {size} bytes, got {len(raw)}")
        return raw

    return Annotated[
        bytes,
        BeforeValidator(_validate),
        PlainSerializer(to_hex, return_type=str, when_used="json"),
    ]


def _validate_transaction(value: Any) -> bytes:
    raw = coerce_bytes(value, "transaction")
    try:
        # The envelope adds one list level above the transaction.
        decode_item(raw, max_depth=MAX_RLP_DEPTH - 1)
    except DecodeError as exc:
        raise ValueError(f"transaction must be exactly one canonical RLP item: {exc}") from exc
    return raw


Address = _fixed_width(ADDRESS_SIZE, "address")
Public = _fixed_width(PUBLIC_KEY_SIZE, "public key")
Signature = _fixed_width(SIGNATURE_SIZE, "signature")
H160 = _fixed_width(H160_SIZE, "H160")
H256 = _fixed_width(H256_SIZE, "H256")

Blob = Annotated[
    bytes,
    BeforeValidator(lambda v: coerce_bytes(v, "blob")),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]

Transaction = Annotated[
    bytes,
    BeforeValidator(_validate_transaction),
    PlainSerializer(to_hex, return_type=str, when_used="json"),
]

U16 = Annotated[int, Field(strict=True, ge=0, le=U16_MAX)]
U64 = Annotated[int, Field(strict=True, ge=0, le=U64_MAX)]

# Shard identifiers are 16-bit on the wire.
ShardId = U16
