"""
Core exception types raised by the grammar helpers, the RLP layer and the action decoder.

Provides typed exceptions for core-domain failures:
- DecodeError as the base of every decode rejection.
- UnknownDiscriminant / IncorrectArity for malformed action envelopes.
- FieldDecodeError and its subclasses for failures inside a single item
  (RLP framing, fixed widths, integers, text).
- GrammarError for unknown or non-lower_snake action kind names.
- ConfigError for invalid codec settings.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Decoding is all-or-nothing: when any of these is raised no action value
      was produced.
    - Field failures raised by `actcodec.core.rlp` reach callers of
      `decode_action` unchanged.

Examples:
    Catch any decode rejection.

    >>> from actcodec.core.errors import DecodeError, UnknownDiscriminant
    >>> try:
    ...     raise UnknownDiscriminant(99)
    ... except DecodeError as e:
    ...     msg = str(e)
    >>> "99" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "DecodeError",
    "UnknownDiscriminant",
    "IncorrectArity",
    "PayloadTooLarge",
    "FieldDecodeError",
    "RlpTruncated",
    "RlpTrailingBytes",
    "RlpNonCanonical",
    "RlpExpectedList",
    "RlpExpectedData",
    "RlpTooDeep",
    "InvalidLength",
    "IntegerOverflow",
    "InvalidText",
    "GrammarError",
    "ConfigError",
]


class DecodeError(ValueError):
    """Bytes could not be decoded into an action."""


class UnknownDiscriminant(DecodeError):
    """The leading item of an action envelope is not a known discriminant.

    Attributes:
        tag (int): The discriminant value that was read.
    """

    def __init__(self, tag: int) -> None:
        self.tag = tag
        super().__init__(f"unknown action discriminant: {tag:#04x}")


class IncorrectArity(DecodeError):
    """The action envelope has the wrong number of top-level items.

    Attributes:
        kind (str | None): Action kind implied by the discriminant, or None when
            the envelope was empty.
        expected (int | None): Required item count, discriminant included.
        actual (int): Item count found.
    """

    def __init__(self, kind: str | None, expected: int | None, actual: int) -> None:
        self.kind = kind
        self.expected = expected
        self.actual = actual
        if kind is None:
            super().__init__(f"action envelope has {actual} items; no discriminant to read")
        else:
            super().__init__(f"{kind} expects {expected} items, got {actual}")


class PayloadTooLarge(DecodeError):
    """Encoded input exceeds the configured maximum size."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"encoded action is {size} bytes; limit is {limit}")


class FieldDecodeError(DecodeError):
    """A single item could not be decoded into its declared type."""


class RlpTruncated(FieldDecodeError):
    """A header or payload runs past the end of the input."""


class RlpTrailingBytes(FieldDecodeError):
    """Bytes remain after the top-level item."""


class RlpNonCanonical(FieldDecodeError):
    """The item is well-framed but not in its unique canonical form."""


class RlpExpectedList(FieldDecodeError):
    """A data item was found where a list was required."""


class RlpExpectedData(FieldDecodeError):
    """A list was found where a data item was required."""


class RlpTooDeep(FieldDecodeError):
    """List nesting exceeds the decoder depth limit."""


class InvalidLength(FieldDecodeError):
    """A fixed-width field has the wrong number of bytes."""


class IntegerOverflow(FieldDecodeError):
    """An unsigned integer does not fit its declared width."""


class InvalidText(FieldDecodeError):
    """A text field is not valid UTF-8."""


class GrammarError(ValueError):
    """Action kind name is not lower_snake or not a known kind."""


class ConfigError(ValueError):
    """Codec settings carry an invalid value."""
