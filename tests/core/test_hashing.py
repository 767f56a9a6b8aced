import hashlib

from actcodec.core.hashing import blake256, hash_action, hash_action_hex
from actcodec.core.schema import CreateShard, Payment
from actcodec.core.serde import decode_action, encode_action
from samples import ADDR_A


def test_blake256_matches_hashlib() -> None:
    assert blake256(b"") == hashlib.blake2b(b"", digest_size=32).digest()
    assert len(blake256(b"abc")) == 32


def test_hash_is_digest_of_canonical_encoding(actions: list) -> None:
    for action in actions:
        assert hash_action(action) == hashlib.blake2b(encode_action(action), digest_size=32).digest()


def test_hash_is_stable_across_roundtrip(actions: list) -> None:
    for action in actions:
        assert hash_action(decode_action(encode_action(action))) == hash_action(action)


def test_distinct_actions_hash_differently(actions: list) -> None:
    assert len({hash_action(a) for a in actions}) == len(actions)
    assert hash_action(Payment(receiver=ADDR_A, amount=1)) != hash_action(
        Payment(receiver=ADDR_A, amount=2)
    )


def test_hash_hex_form() -> None:
    digest_hex = hash_action_hex(CreateShard())
    assert digest_hex.startswith("0x")
    assert len(digest_hex) == 66
    assert bytes.fromhex(digest_hex[2:]) == hash_action(CreateShard())
