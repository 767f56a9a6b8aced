"""Shared sample values for the test suite."""

from __future__ import annotations

from actcodec.core.rlp import encode
from actcodec.core.schema import (
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

ADDR_A = b"\x11" * 20
ADDR_B = b"\x22" * 20
PUBLIC = b"\x33" * 64
LOCK_HASH = b"\x44" * 20
CONTENT_HASH = b"\x55" * 32
SIG = bytes(range(65))
SIG_2 = bytes(range(100, 165))
TX_BODY = encode([b"\x01", [b"asset", b"\x02"], b""])


def sample_actions() -> list:
    return [
        AssetTransaction(transaction=TX_BODY, approvals=(SIG, SIG_2)),
        AssetTransaction(transaction=encode(b""), approvals=()),
        Payment(receiver=ADDR_A, amount=1_000),
        Payment(receiver=ADDR_B, amount=0),
        Payment(receiver=ADDR_B, amount=2**64 - 1),
        SetRegularKey(key=PUBLIC),
        CreateShard(),
        SetShardOwners(shard_id=1, owners=(ADDR_A, ADDR_B)),
        SetShardOwners(shard_id=0, owners=()),
        SetShardUsers(shard_id=0xFFFF, users=(ADDR_B, ADDR_A)),
        WrapCCC(
            shard_id=3,
            lock_script_hash=LOCK_HASH,
            parameters=(b"", b"\x00", b"p" * 80),
            amount=42,
        ),
        Store(content="CodeChain", certifier=ADDR_A, signature=SIG),
        Store(content="", certifier=ADDR_B, signature=SIG_2),
        Store(content="ünïcødé ✓" * 10, certifier=ADDR_A, signature=SIG),
        Remove(hash=CONTENT_HASH, signature=SIG),
        Custom(handler_id=7, bytes=b"\xde\xad\xbe\xef"),
        Custom(handler_id=0, bytes=b""),
    ]


