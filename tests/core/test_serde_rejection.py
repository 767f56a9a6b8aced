from __future__ import annotations

import random

import pytest

from actcodec.core.errors import (
    DecodeError,
    IncorrectArity,
    IntegerOverflow,
    InvalidLength,
    InvalidText,
    PayloadTooLarge,
    RlpExpectedData,
    RlpExpectedList,
    RlpNonCanonical,
    RlpTooDeep,
    RlpTrailingBytes,
    RlpTruncated,
    UnknownDiscriminant,
)
from actcodec.core.rlp import encode
from actcodec.core.schema import AssetTransaction, Payment
from actcodec.core.serde import decode_action, encode_action
from samples import ADDR_A, SIG, TX_BODY


def test_missing_field_is_incorrect_arity() -> None:
    with pytest.raises(IncorrectArity) as excinfo:
        decode_action(encode([b"\x02", ADDR_A]))
    assert (excinfo.value.kind, excinfo.value.expected, excinfo.value.actual) == (
        "payment",
        3,
        2,
    )


def test_arity_is_checked_before_fields() -> None:
    # The receiver is malformed too, but the extra item is reported first.
    with pytest.raises(IncorrectArity):
        decode_action(encode([b"\x02", b"\x11" * 19, b"\x01", b"extra"]))


def test_empty_envelope_is_incorrect_arity() -> None:
    with pytest.raises(IncorrectArity) as excinfo:
        decode_action(b"\xc0")
    assert excinfo.value.kind is None
    assert excinfo.value.actual == 0


@pytest.mark.parametrize("tag", [b"", b"\x0a", b"\x63", b"\xfe"])
def test_unassigned_tags_are_unknown(tag: bytes) -> None:
    with pytest.raises(UnknownDiscriminant) as excinfo:
        decode_action(encode([tag, ADDR_A, b"\x01"]))
    assert excinfo.value.tag == int.from_bytes(tag, "big")


def test_unknown_tag_wins_over_arity() -> None:
    with pytest.raises(UnknownDiscriminant):
        decode_action(encode([b"\x63"]))


@pytest.mark.parametrize(
    "payload,error",
    [
        (encode(b"\x04"), RlpExpectedList),
        (encode([[b"\x04"]]), RlpExpectedData),
        (encode([b"\x01\x00"]), IntegerOverflow),
        (encode([b"\x00\x04"]), RlpNonCanonical),
        (encode([b"\x02", ADDR_A, b"\x00\x05"]), RlpNonCanonical),
        (encode([b"\x02", ADDR_A, b"\x01" + b"\x00" * 8]), IntegerOverflow),
        (encode([b"\x02", ADDR_A[:19], b"\x01"]), InvalidLength),
        (encode([b"\x02", [ADDR_A], b"\x01"]), RlpExpectedData),
        (encode([b"\x05", b"\x01\x00\x00", []]), IntegerOverflow),
        (encode([b"\x05", b"\x01", ADDR_A]), RlpExpectedList),
        (encode([b"\x05", b"\x01", [[ADDR_A]]]), RlpExpectedData),
        (encode([b"\x06", b"\x01", [ADDR_A, ADDR_A + b"\x00"]]), InvalidLength),
        (encode([b"\x08", b"\xff", ADDR_A, SIG]), InvalidText),
        (encode([b"\x08", b"ok", ADDR_A, SIG[:64]]), InvalidLength),
        (encode([b"\x01", TX_BODY, [SIG[:64]]]), InvalidLength),
        (encode([b"\xff", b"\x01", []]), RlpExpectedData),
        (encode([b"\x07", b"\x01", ADDR_A, b"param", b"\x01"]), RlpExpectedList),
    ],
)
def test_field_errors_propagate_unchanged(payload: bytes, error: type[DecodeError]) -> None:
    with pytest.raises(error):
        decode_action(payload)


def test_trailing_bytes_after_action() -> None:
    data = encode_action(Payment(receiver=ADDR_A, amount=1))
    with pytest.raises(RlpTrailingBytes):
        decode_action(data + b"\x00")


def test_every_proper_prefix_is_rejected(actions: list) -> None:
    for action in actions:
        data = encode_action(action)
        for end in range(len(data)):
            with pytest.raises(DecodeError):
                decode_action(data[:end])


def test_truncated_envelope_reports_truncation() -> None:
    data = encode_action(Payment(receiver=ADDR_A, amount=1))
    with pytest.raises(RlpTruncated):
        decode_action(data[:-1])


def test_max_size_limit() -> None:
    data = encode_action(Payment(receiver=ADDR_A, amount=1))
    assert decode_action(data, max_size=len(data)).amount == 1
    with pytest.raises(PayloadTooLarge) as excinfo:
        decode_action(data, max_size=len(data) - 1)
    assert excinfo.value.size == len(data)


def test_max_depth_limit_covers_embedded_transaction() -> None:
    # Envelope, transaction body and its inner list: three levels.
    data = encode_action(AssetTransaction(transaction=TX_BODY, approvals=()))
    assert decode_action(data, max_depth=3).transaction == TX_BODY
    with pytest.raises(RlpTooDeep):
        decode_action(data, max_depth=2)


@pytest.mark.parametrize("depth", [0, -1, 33])
def test_max_depth_out_of_range_is_a_usage_error(depth: int) -> None:
    with pytest.raises(ValueError) as excinfo:
        decode_action(b"\xc1\x04", max_depth=depth)
    assert not isinstance(excinfo.value, DecodeError)


def test_random_inputs_decode_or_raise_decode_error() -> None:
    rng = random.Random(20240511)
    for _ in range(2000):
        blob = bytes(rng.randrange(256) for _ in range(rng.randrange(0, 40)))
        try:
            action = decode_action(blob)
        except DecodeError:
            continue
        # Anything accepted must be the canonical encoding of what it decodes to.
        assert encode_action(action) == blob


def test_mutated_encodings_never_escape_taxonomy(actions: list) -> None:
    rng = random.Random(7)
    for action in actions:
        data = bytearray(encode_action(action))
        for _ in range(50):
            mutated = bytearray(data)
            mutated[rng.randrange(len(mutated))] = rng.randrange(256)
            try:
                decoded = decode_action(bytes(mutated))
            except DecodeError:
                continue
            assert encode_action(decoded) == bytes(mutated)
