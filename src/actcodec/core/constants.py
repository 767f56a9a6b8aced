"""
Wire-level constants for the action codec.

Defines primitive field widths, integer bounds and decoder limits consumed by
`actcodec.core.typing`, `actcodec.core.rlp` and `actcodec.config`. This module
is zero-IO and uses only the Python standard library.

Notes:
    - Field widths are part of the wire contract; changing them changes every
      encoding that carries the field.
    - Decoder limits bound worst-case decode cost. `actcodec.config.CodecSettings`
      takes its defaults from here.
"""

from __future__ import annotations

__all__ = [
    "ADDRESS_SIZE",
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "H160_SIZE",
    "H256_SIZE",
    "DIGEST_SIZE",
    "U16_MAX",
    "U64_MAX",
    "MAX_RLP_DEPTH",
    "MAX_PAYLOAD_BYTES",
]

# Account address (H160).
ADDRESS_SIZE: int = 20

# Uncompressed secp256k1 public key without the 0x04 prefix (H512).
PUBLIC_KEY_SIZE: int = 64

# ECDSA signature laid out as r || s || v.
SIGNATURE_SIZE: int = 65

H160_SIZE: int = 20
H256_SIZE: int = 32

# BLAKE2b-256 content hash.
DIGEST_SIZE: int = 32

U16_MAX: int = 0xFFFF
U64_MAX: int = 0xFFFF_FFFF_FFFF_FFFF

# Deepest list nesting accepted by the decoder (top-level envelope counts as 1).
MAX_RLP_DEPTH: int = 32

# Largest encoded action accepted by the decoder.
MAX_PAYLOAD_BYTES: int = 1024 * 1024
