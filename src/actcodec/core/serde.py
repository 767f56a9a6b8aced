"""
Canonical binary encoding and strict decoding of actions, plus JSON helpers.

Every action is encoded as an RLP list whose first item is the kind's
discriminant byte and whose remaining items are the variant's fields in
declared order. Decoding reverses this and rejects anything that is not the
unique canonical encoding of some action.

Decode algorithm
1. Parse the envelope with `actcodec.core.rlp.decode_item` (strict framing,
   depth limit, optional size limit). The envelope must be a list.
2. Read item 0 as an unsigned byte and look it up in the discriminant table
   (`UnknownDiscriminant`). An empty envelope raises `IncorrectArity`.
3. Compare the envelope's item count with the kind's arity (`IncorrectArity`).
   This happens before any field is decoded.
4. Decode each field at its fixed position with its field codec. Field
   failures propagate unchanged.

Notes:
    - Encoding is total over constructed actions; field validation already ran
      in the models.
    - `action_to_json` / `action_from_json` use the canonical JSON policy
      (sorted keys, compact separators, ensure_ascii=False).
    - Zero-IO; module logger emits DEBUG records for rejected payloads only.

Examples:
    >>> from actcodec.core.schema import CreateShard
    >>> from actcodec.core.serde import encode_action, decode_action
    >>> encode_action(CreateShard()).hex()
    'c104'
    >>> decode_action(bytes.fromhex("c104"))
    CreateShard(kind='create_shard')
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final

from .constants import (
    ADDRESS_SIZE,
    H160_SIZE,
    H256_SIZE,
    MAX_RLP_DEPTH,
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
)
from .errors import DecodeError, IncorrectArity, PayloadTooLarge
from .grammar import ActionKind, arity_of, canonical_action_key, kind_from_tag, tag_of
from .rlp import (
    Encoded,
    RlpItem,
    RlpValue,
    decode_bytes,
    decode_fixed,
    decode_item,
    decode_sequence,
    decode_text,
    decode_uint,
    encode,
    encode_uint,
)
from .schema import ACTION_ADAPTER, ACTION_MODELS, Action, ActionBase

__all__ = [
    "FieldCodec",
    "ACTION_LAYOUT",
    "encode_action",
    "decode_action",
    "json_dumps_canonical",
    "json_loads",
    "action_to_json",
    "action_from_json",
    "describe_action",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FieldCodec:
    """
    Wire codec for one positional field of an action.

    Attributes:
        name (str): Model attribute the field maps to.
        encode (Callable[[Any], RlpValue]): Model value to encodable value.
        decode (Callable[[RlpItem], Any]): Parsed item to model value.
    """

    name: str
    encode: Callable[[Any], RlpValue]
    decode: Callable[[RlpItem], Any]


def _fixed(name: str, size: int) -> FieldCodec:
    return FieldCodec(name, lambda v: v, lambda item: decode_fixed(item, size))


def _uint(name: str, bits: int) -> FieldCodec:
    return FieldCodec(name, encode_uint, lambda item: decode_uint(item, bits))


def _fixed_list(name: str, size: int) -> FieldCodec:
    return FieldCodec(
        name,
        lambda v: list(v),
        lambda item: decode_sequence(item, lambda child: decode_fixed(child, size)),
    )


_TRANSACTION = FieldCodec("transaction", Encoded, lambda item: item.raw)
_TEXT = FieldCodec("content", lambda v: v.encode("utf-8"), decode_text)


# Field order is the wire order. Changing it changes every encoding of the kind.
ACTION_LAYOUT: Final[Mapping[ActionKind, tuple[FieldCodec, ...]]] = MappingProxyType(
    {
        ActionKind.ASSET_TRANSACTION: (
            _TRANSACTION,
            _fixed_list("approvals", SIGNATURE_SIZE),
        ),
        ActionKind.PAYMENT: (
            _fixed("receiver", ADDRESS_SIZE),
            _uint("amount", 64),
        ),
        ActionKind.SET_REGULAR_KEY: (_fixed("key", PUBLIC_KEY_SIZE),),
        ActionKind.CREATE_SHARD: (),
        ActionKind.SET_SHARD_OWNERS: (
            _uint("shard_id", 16),
            _fixed_list("owners", ADDRESS_SIZE),
        ),
        ActionKind.SET_SHARD_USERS: (
            _uint("shard_id", 16),
            _fixed_list("users", ADDRESS_SIZE),
        ),
        ActionKind.WRAP_CCC: (
            _uint("shard_id", 16),
            _fixed("lock_script_hash", H160_SIZE),
            FieldCodec(
                "parameters",
                lambda v: list(v),
                lambda item: decode_sequence(item, decode_bytes),
            ),
            _uint("amount", 64),
        ),
        ActionKind.STORE: (
            _TEXT,
            _fixed("certifier", ADDRESS_SIZE),
            _fixed("signature", SIGNATURE_SIZE),
        ),
        ActionKind.REMOVE: (
            _fixed("hash", H256_SIZE),
            _fixed("signature", SIGNATURE_SIZE),
        ),
        ActionKind.CUSTOM: (
            _uint("handler_id", 64),
            FieldCodec("bytes", lambda v: v, decode_bytes),
        ),
    }
)

for _kind, _layout in ACTION_LAYOUT.items():
    if 1 + len(_layout) != arity_of(_kind):
        raise AssertionError(f"layout for {_kind.value} disagrees with its arity")


def encode_action(action: ActionBase) -> bytes:
    """
    Encode an action to its canonical bytes.

    Args:
        action (ActionBase): Any constructed action variant.

    Returns:
        bytes: RLP list [tag, field_1, ..., field_n].
    """
    kind = action.kind_enum
    items: list[RlpValue] = [encode_uint(tag_of(kind))]
    for codec in ACTION_LAYOUT[kind]:
        items.append(codec.encode(getattr(action, codec.name)))
    return encode(items)


def _decode_envelope(envelope: RlpItem) -> Action:
    items = envelope.items()
    if not items:
        raise IncorrectArity(None, None, 0)

    kind = kind_from_tag(decode_uint(items[0], 8))
    expected = arity_of(kind)
    if len(items) != expected:
        raise IncorrectArity(kind.value, expected, len(items))

    fields = {
        codec.name: codec.decode(item) for codec, item in zip(ACTION_LAYOUT[kind], items[1:])
    }
    return ACTION_MODELS[kind](**fields)  # type: ignore[return-value]


def decode_action(
    data: bytes | bytearray | memoryview,
    *,
    max_depth: int = MAX_RLP_DEPTH,
    max_size: int | None = None,
) -> Action:
    """
    Decode canonical bytes into an action.

    Args:
        data (bytes | bytearray | memoryview): Encoded action.
        max_depth (int): Deepest list nesting accepted; at most MAX_RLP_DEPTH.
        max_size (int | None): Reject inputs longer than this many bytes.

    Returns:
        Action: The decoded variant; equal to the value that was encoded.

    Raises:
        PayloadTooLarge: Input exceeds max_size.
        UnknownDiscriminant: Leading item is not a known discriminant.
        IncorrectArity: Envelope item count differs from the kind's arity.
        FieldDecodeError: Framing or field-level failure (subclass names the cause).
        ValueError: If max_depth is out of range (not a DecodeError).
    """
    if not 1 <= max_depth <= MAX_RLP_DEPTH:
        raise ValueError(f"max_depth must be in 1..{MAX_RLP_DEPTH}, got {max_depth}")
    try:
        if max_size is not None and len(data) > max_size:
            raise PayloadTooLarge(len(data), max_size)
        return _decode_envelope(decode_item(data, max_depth=max_depth))
    except DecodeError as exc:
        logger.debug("rejected %d-byte action: %s: %s", len(data), type(exc).__name__, exc)
        raise


# ============================================================================
# JSON
# ============================================================================


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Notes:
        sort_keys=True, separators=(",", ":"), ensure_ascii=False. The input
        must already be JSON-serializable.
    """
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def json_loads(s: str | bytes) -> Any:
    return json.loads(s)


def action_to_json(action: ActionBase) -> str:
    """
    Render an action as canonical JSON with byte fields as 0x-hex.

    Examples:
        >>> from actcodec.core.schema import Payment
        >>> action_to_json(Payment(receiver=b"\\x01" * 20, amount=5))[:30]
        '{"amount":5,"kind":"payment","'
    """
    return json_dumps_canonical(action.model_dump(mode="json"))


def action_from_json(text: str | bytes) -> Action:
    """
    Parse JSON produced by `action_to_json` (or hand-written equivalents).

    Raises:
        pydantic.ValidationError: If the document is not a valid action.
        json.JSONDecodeError: If text is not JSON.
    """
    return ACTION_ADAPTER.validate_python(json_loads(text))


def describe_action(action: ActionBase) -> str:
    """Short log label for an action (kind plus scalar fields)."""
    params = {
        name: value
        for name, value in action.model_dump(exclude={"kind"}).items()
        if isinstance(value, int)
    }
    return canonical_action_key(action.kind_enum, **params)
