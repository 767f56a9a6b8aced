"""
Content hashing for actions.

An action's identity is the BLAKE2b-256 digest of its canonical encoding:

    hash_action(a) == blake256(encode_action(a))

Because the encoding is canonical, logically equal actions always hash
identically; distinct actions collide only if BLAKE2b-256 does.

Notes:
    - Digests are 32 raw bytes; `hash_action_hex` gives the 0x-prefixed form.
    - A `Remove` action's `hash` field is expected (by the state layer) to
      reference previously stored content. This module only computes digests;
      it does not check that reference.
    - Zero-IO; stdlib-only (hashlib).

Examples:
    >>> from actcodec.core.hashing import hash_action
    >>> from actcodec.core.schema import CreateShard
    >>> hash_action(CreateShard()) == hash_action(CreateShard())
    True
    >>> len(hash_action(CreateShard()))
    32
"""

from __future__ import annotations

import hashlib

from .constants import DIGEST_SIZE
from .schema import ActionBase
from .serde import encode_action
from .typing import to_hex

__all__ = [
    "blake256",
    "hash_action",
    "hash_action_hex",
]


def blake256(data: bytes) -> bytes:
    """BLAKE2b with a 32-byte digest size (not a truncated BLAKE2b-512)."""
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


def hash_action(action: ActionBase) -> bytes:
    """
    Compute the content hash of an action.

    Args:
        action (ActionBase): Any constructed action variant.

    Returns:
        bytes: 32-byte BLAKE2b digest over the canonical encoding.
    """
    return blake256(encode_action(action))


def hash_action_hex(action: ActionBase) -> str:
    return to_hex(hash_action(action))
