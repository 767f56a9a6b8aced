"""
Canonical action grammar: kinds, discriminant bytes and arities.

Defines the closed set of action kinds, the one-byte discriminant that
identifies each kind on the wire, and the fixed number of top-level items an
encoded action of each kind carries.

Responsibilities
- Define `ActionKind` with lower_snake serialized values (JSON `kind` field).
- Own the discriminant table and arity table; provide lookups in both directions.
- Provide normalization helpers for kind names and a compact log label builder.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (JSON): lower_snake

2) Fixed wire identity:
   - Discriminants 1..9 are assigned in declaration order.
   - `custom` is pinned to 0xFF, apart from the sequential range. Values
     10..0xFE stay unassigned; external systems hardcode these bytes.

Wire table
----------
| Kind              | Tag  | Items (tag included) |
|-------------------|------|----------------------|
| asset_transaction | 0x01 | 3                    |
| payment           | 0x02 | 3                    |
| set_regular_key   | 0x03 | 2                    |
| create_shard      | 0x04 | 1                    |
| set_shard_owners  | 0x05 | 3                    |
| set_shard_users   | 0x06 | 3                    |
| wrap_ccc          | 0x07 | 5                    |
| store             | 0x08 | 4                    |
| remove            | 0x09 | 3                    |
| custom            | 0xff | 3                    |

Examples
--------
>>> from actcodec.core.grammar import ActionKind, kind_from_tag, tag_of, arity_of
>>> kind_from_tag(0xFF) is ActionKind.CUSTOM
True
>>> tag_of(ActionKind.CREATE_SHARD), arity_of(ActionKind.CREATE_SHARD)
(4, 1)
>>> canonical_action_key(ActionKind.PAYMENT, amount=10)
'payment:amount=10'
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final

from .errors import GrammarError, UnknownDiscriminant

__all__ = [
    "ActionKind",
    "ACTION_TAGS",
    "ACTION_ARITY",
    "TAG_TO_KIND",
    "is_lower_snake",
    "assert_lower_snake",
    "action_value",
    "action_kind_from_value",
    "tag_of",
    "kind_from_tag",
    "arity_of",
    "canonical_action_key",
    "ensure_all_enum_values_lower_snake",
]


class ActionKind(Enum):
    """
    Every state-transition request a signed transaction may carry.

    Serialized values are used in:
      - the `kind` discriminator of every `actcodec.core.schema` variant
      - JSON produced by `actcodec.core.serde.action_to_json`
      - CLI `tags` output
    """

    ASSET_TRANSACTION = "asset_transaction"
    PAYMENT = "payment"
    SET_REGULAR_KEY = "set_regular_key"
    CREATE_SHARD = "create_shard"
    SET_SHARD_OWNERS = "set_shard_owners"
    SET_SHARD_USERS = "set_shard_users"
    WRAP_CCC = "wrap_ccc"
    STORE = "store"
    REMOVE = "remove"
    CUSTOM = "custom"


ACTION_TAGS: Final[Mapping[ActionKind, int]] = MappingProxyType(
    {
        ActionKind.ASSET_TRANSACTION: 0x01,
        ActionKind.PAYMENT: 0x02,
        ActionKind.SET_REGULAR_KEY: 0x03,
        ActionKind.CREATE_SHARD: 0x04,
        ActionKind.SET_SHARD_OWNERS: 0x05,
        ActionKind.SET_SHARD_USERS: 0x06,
        ActionKind.WRAP_CCC: 0x07,
        ActionKind.STORE: 0x08,
        ActionKind.REMOVE: 0x09,
        ActionKind.CUSTOM: 0xFF,
    }
)

ACTION_ARITY: Final[Mapping[ActionKind, int]] = MappingProxyType(
    {
        ActionKind.ASSET_TRANSACTION: 3,
        ActionKind.PAYMENT: 3,
        ActionKind.SET_REGULAR_KEY: 2,
        ActionKind.CREATE_SHARD: 1,
        ActionKind.SET_SHARD_OWNERS: 3,
        ActionKind.SET_SHARD_USERS: 3,
        ActionKind.WRAP_CCC: 5,
        ActionKind.STORE: 4,
        ActionKind.REMOVE: 3,
        ActionKind.CUSTOM: 3,
    }
)

TAG_TO_KIND: Final[Mapping[int, ActionKind]] = MappingProxyType(
    {tag: kind for kind, tag in ACTION_TAGS.items()}
)

if len(TAG_TO_KIND) != len(ACTION_TAGS):
    raise AssertionError("action discriminants must be unique")

_LOWER_SNAKE_RE = re.compile(r"^[a-z][a-z0-9_]*$")


def is_lower_snake(s: str) -> bool:
    return bool(_LOWER_SNAKE_RE.match(s or ""))


def assert_lower_snake(s: str, field_name: str) -> None:
    """
    Raise GrammarError unless s is lower_snake.

    Args:
      s (str): Candidate value.
      field_name (str): Field label used in the error message.
    """
    if not is_lower_snake(s):
        raise GrammarError(f"{field_name} must be lower_snake (got {s!r})")


def action_value(kind: ActionKind) -> str:
    """
    Get the serialized (lower_snake) value for an ActionKind.

    Args:
      kind (ActionKind): Action kind enum.

    Returns:
      str: Lower_snake serialized value (e.g., "set_shard_owners").
    """
    return kind.value


def action_kind_from_value(s: str) -> ActionKind:
    """
    Parse a lower_snake action string into an ActionKind.

    Args:
      s (str): Lower_snake action kind string.

    Returns:
      ActionKind: Parsed action kind.

    Raises:
      GrammarError: If s is not lower_snake or is not a known action kind.
    """
    assert_lower_snake(s, "kind")
    try:
        return ActionKind(s)
    except ValueError as exc:
        raise GrammarError(f"unknown action kind: {s!r}") from exc


def tag_of(kind: ActionKind) -> int:
    return ACTION_TAGS[kind]


def kind_from_tag(tag: int) -> ActionKind:
    """
    Look up the action kind for a discriminant byte.

    Raises:
      UnknownDiscriminant: If tag is not in the discriminant table.
    """
    kind = TAG_TO_KIND.get(tag)
    if kind is None:
        raise UnknownDiscriminant(tag)
    return kind


def arity_of(kind: ActionKind) -> int:
    return ACTION_ARITY[kind]


def canonical_action_key(kind: ActionKind, **params: object) -> str:
    """
    Build a compact, human-friendly log key for an action.

    Args:
      kind (ActionKind): Action kind to label.
      **params (object): Optional parameters to include in the label.

    Returns:
      str: Key formatted as "kind:sorted_k=v|k=v".

    Examples:
      >>> canonical_action_key(ActionKind.SET_SHARD_USERS, shard_id=1, users=2)
      'set_shard_users:shard_id=1|users=2'

    Notes:
      The key is for logs only; program logic must use structured fields
      rather than parsing this string.
    """
    parts = [kind.value]
    if params:
        parts.append("|".join(f"{k}={v}" for k, v in sorted(params.items())))
    return ":".join(parts)


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.
    """
    for E in enums:
        for m in E:
            if not is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
