"""
actcodec — canonical binary codec for ledger action payloads.

## Responsibilities
- Model the closed set of actions a signed transaction may request
  (payments, shard management, key registration, currency wrapping,
  certified content, custom handlers).
- Encode actions to unique, deterministic bytes; decode bytes strictly back
  to equal actions or reject them with a typed error.
- Derive each action's 32-byte content hash from its canonical bytes.

## Public API
- `encode(action) -> bytes`
- `decode(data) -> Action` (raises `DecodeError`)
- `hash_action(action) -> bytes`
- Action variants and `Action` union from `actcodec.core.schema`.

## Layout
- actcodec.core — zero-IO contracts (grammar, schema, rlp, serde, hashing).
- actcodec.handlers — registry for interpreting `Custom` payloads.
- actcodec.config — CodecSettings (env > TOML > defaults).
- actcodec.cli — `actcodec encode|decode|hash|tags`.
"""

from __future__ import annotations

from .core.errors import (
    DecodeError,
    FieldDecodeError,
    IncorrectArity,
    PayloadTooLarge,
    UnknownDiscriminant,
)
from .core.grammar import ActionKind
from .core.hashing import hash_action, hash_action_hex
from .core.schema import (
    Action,
    ActionBase,
    AssetTransaction,
    CreateShard,
    Custom,
    Payment,
    Remove,
    SetRegularKey,
    SetShardOwners,
    SetShardUsers,
    Store,
    WrapCCC,
)
from .core.serde import decode_action as decode
from .core.serde import encode_action as encode

__all__ = [
    "Action",
    "ActionBase",
    "ActionKind",
    "AssetTransaction",
    "CreateShard",
    "Custom",
    "DecodeError",
    "FieldDecodeError",
    "IncorrectArity",
    "PayloadTooLarge",
    "Payment",
    "Remove",
    "SetRegularKey",
    "SetShardOwners",
    "SetShardUsers",
    "Store",
    "UnknownDiscriminant",
    "WrapCCC",
    "decode",
    "encode",
    "hash_action",
    "hash_action_hex",
]

__version__ = "0.1.0"
