"""
Core package aggregator for action codec contracts (grammar, schema, RLP, serde, hashing).

## Contracts (single source of truth)
- Grammar — `ActionKind`, discriminant table, arity table, lookups.
- Schema — frozen pydantic models for the ten action variants and the `Action` union.
- RLP — strict length-prefixed list-of-items framing and primitive field decoders.
- Serde — `encode_action` / `decode_action` and canonical JSON helpers.
- Hashing — BLAKE2b-256 content hash over the canonical encoding.
- Typing/Constants/Errors — primitive aliases, field widths and limits, decode error taxonomy.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Naming policy: enum `.value` and field names are lower_snake.
- Decoding is strict: unknown discriminants, wrong arities and non-canonical
  framing are always rejected, never coerced.

## Downstream usage
- actcodec.cli — reads JSON/hex, calls serde and hashing, prints results.
- actcodec.handlers — interprets `Custom` payloads after decoding.
- Transaction builders, block validators and gossip layers consume
  `encode_action`, `decode_action` and `hash_action` directly.

## Examples
```python
from actcodec.core.schema import SetShardOwners
from actcodec.core.serde import encode_action, decode_action
from actcodec.core.hashing import hash_action

action = SetShardOwners(shard_id=1, owners=(b"\\x01" * 20, b"\\x02" * 20))
data = encode_action(action)
decode_action(data) == action  # True
len(hash_action(action))  # 32
```
"""
