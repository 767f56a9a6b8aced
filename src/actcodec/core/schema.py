"""
Pydantic v2 models for the ten action variants and the `Action` union.

Each variant is an immutable, fixed-arity record whose field order is part of
the wire contract (see `actcodec.core.serde`). Field-level validation happens
on construction through the primitive aliases in `actcodec.core.typing`, so
every constructed action is encodable.

Responsibilities
- Define one frozen model per `ActionKind`, discriminated by the `kind` field.
- Expose the `Action` discriminated union and a shared `TypeAdapter` for it.
- Report per-action heap usage of variable-length children.

Style
- Zero-IO (stdlib + pydantic only).
- Google-style docstrings with Attributes, Notes and Examples sections.

References
- grammar: src/actcodec/core/grammar.py (kinds, discriminants, arities)
- typing: src/actcodec/core/typing.py (primitive aliases)
- tests: tests/core/*
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Final, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .constants import ADDRESS_SIZE, SIGNATURE_SIZE
from .grammar import ActionKind, tag_of
from .typing import (
    H160,
    H256,
    U64,
    Address,
    Blob,
    Public,
    ShardId,
    Signature,
    Transaction,
)

__all__ = [
    "ActionBase",
    "AssetTransaction",
    "Payment",
    "SetRegularKey",
    "CreateShard",
    "SetShardOwners",
    "SetShardUsers",
    "WrapCCC",
    "Store",
    "Remove",
    "Custom",
    "Action",
    "ACTION_ADAPTER",
    "ACTION_MODELS",
]


class ActionBase(BaseModel):
    """
    Common behaviour shared by every action variant.

    Attributes:
        kind (str): Lower_snake `ActionKind` value; fixed per subclass.

    Notes:
        Models are frozen and compare by value, so decoded actions compare
        equal to the values they were encoded from.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: str

    @property
    def kind_enum(self) -> ActionKind:
        return ActionKind(self.kind)

    @property
    def tag(self) -> int:
        return tag_of(self.kind_enum)

    def heap_size(self) -> int:
        """Bytes held by variable-length collection children (0 when there are none)."""
        return 0


class AssetTransaction(ActionBase):
    """
    Wrap an asset-layer transaction together with the approvals it requires.

    Attributes:
        transaction (bytes): Canonical encoding of the asset transaction (one RLP item).
        approvals (tuple[bytes, ...]): Approval signatures, in order.

    Notes:
        The transaction body is opaque here; the asset layer decodes it.
    """

    kind: Literal["asset_transaction"] = "asset_transaction"
    transaction: Transaction
    approvals: tuple[Signature, ...]

    def heap_size(self) -> int:
        return len(self.transaction) + SIGNATURE_SIZE * len(self.approvals)


class Payment(ActionBase):
    """
    Transfer native currency to a receiver.

    Attributes:
        receiver (bytes): Receiving address.
        amount (int): Transferred amount (u64).
    """

    kind: Literal["payment"] = "payment"
    receiver: Address
    amount: U64


class SetRegularKey(ActionBase):
    """Register a regular key for the sender's account."""

    kind: Literal["set_regular_key"] = "set_regular_key"
    key: Public


class CreateShard(ActionBase):
    """
    Request a new shard. Carries no fields; encodes to the single-item list [4].

    Examples:
        >>> from actcodec.core.schema import CreateShard
        >>> CreateShard() == CreateShard()
        True
    """

    kind: Literal["create_shard"] = "create_shard"


class SetShardOwners(ActionBase):
    """
    Replace the owner list of a shard.

    Attributes:
        shard_id (int): Target shard (u16).
        owners (tuple[bytes, ...]): Owner addresses; order is significant.
    """

    kind: Literal["set_shard_owners"] = "set_shard_owners"
    shard_id: ShardId
    owners: tuple[Address, ...]

    def heap_size(self) -> int:
        return ADDRESS_SIZE * len(self.owners)


class SetShardUsers(ActionBase):
    """
    Replace the user list of a shard.

    Attributes:
        shard_id (int): Target shard (u16).
        users (tuple[bytes, ...]): User addresses; order is significant.
    """

    kind: Literal["set_shard_users"] = "set_shard_users"
    shard_id: ShardId
    users: tuple[Address, ...]

    def heap_size(self) -> int:
        return ADDRESS_SIZE * len(self.users)


class WrapCCC(ActionBase):
    """
    Lock native currency into an asset on a shard.

    Attributes:
        shard_id (int): Shard that receives the wrapped asset (u16).
        lock_script_hash (bytes): H160 of the lock script guarding the asset.
        parameters (tuple[bytes, ...]): Lock script parameters, in order.
        amount (int): Wrapped amount (u64).
    """

    kind: Literal["wrap_ccc"] = "wrap_ccc"
    shard_id: ShardId
    lock_script_hash: H160
    parameters: tuple[Blob, ...]
    amount: U64

    def heap_size(self) -> int:
        """Total payload bytes of `parameters`; per-element container overhead is not counted."""
        return sum(len(p) for p in self.parameters)


class Store(ActionBase):
    """
    Publish certified text content.

    Attributes:
        content (str): UTF-8 text.
        certifier (bytes): Address of the certifying account.
        signature (bytes): Certifier's signature over the content.

    Notes:
        A later `Remove` references the stored text by hash. Checking that
        reference is the job of the state layer, not this codec.
    """

    kind: Literal["store"] = "store"
    content: str = Field(strict=True)
    certifier: Address
    signature: Signature

    @field_validator("content")
    @classmethod
    def _check_content_encodable(cls, v: str) -> str:
        """
        Reject text with no UTF-8 encoding (e.g. lone surrogates).

        Raises:
            ValueError: If v cannot be encoded as UTF-8.
        """
        try:
            v.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"content must be encodable as UTF-8: {exc.reason}") from exc
        return v


class Remove(ActionBase):
    """
    Revoke previously stored content.

    Attributes:
        hash (bytes): H256 identifying the stored text.
        signature (bytes): Authorizing signature.

    Notes:
        `hash` is carried as an opaque 256-bit value; it is not resolved here.
    """

    kind: Literal["remove"] = "remove"
    hash: H256
    signature: Signature


class Custom(ActionBase):
    """
    Opaque payload routed to a pluggable handler by numeric id.

    Attributes:
        handler_id (int): Handler identifier (u64).
        bytes (bytes): Handler-defined payload; never interpreted by the codec.

    Notes:
        See `actcodec.handlers.HandlerRegistry` for dispatch to handlers.
    """

    kind: Literal["custom"] = "custom"
    handler_id: U64
    bytes: Blob


Action = Annotated[
    Union[
        AssetTransaction,
        Payment,
        SetRegularKey,
        CreateShard,
        SetShardOwners,
        SetShardUsers,
        WrapCCC,
        Store,
        Remove,
        Custom,
    ],
    Field(discriminator="kind"),
]

ACTION_ADAPTER: Final[TypeAdapter[Action]] = TypeAdapter(Action)

ACTION_MODELS: Final[Mapping[ActionKind, type[ActionBase]]] = MappingProxyType(
    {
        ActionKind.ASSET_TRANSACTION: AssetTransaction,
        ActionKind.PAYMENT: Payment,
        ActionKind.SET_REGULAR_KEY: SetRegularKey,
        ActionKind.CREATE_SHARD: CreateShard,
        ActionKind.SET_SHARD_OWNERS: SetShardOwners,
        ActionKind.SET_SHARD_USERS: SetShardUsers,
        ActionKind.WRAP_CCC: WrapCCC,
        ActionKind.STORE: Store,
        ActionKind.REMOVE: Remove,
        ActionKind.CUSTOM: Custom,
    }
)
