"""
Registry of pluggable handlers for `Custom` action payloads.

The codec carries a `Custom` action's payload as opaque bytes keyed by a
numeric `handler_id`. Interpreting those bytes is the handler's job: a
component registers a `CustomHandler` here and callers dispatch decoded
`Custom` actions to it.

Notes
- The registry is an ordinary object; create one per host. There is no
  module-level default instance.
- `actcodec.core` never consults a registry; decoding a `Custom` action with
  an unregistered handler id succeeds.

Examples
--------
>>> from actcodec.handlers import HandlerRegistry
>>> from actcodec.core.schema import Custom
>>> class Echo:
...     handler_id = 7
...     def interpret(self, payload: bytes) -> bytes:
...         return payload
>>> registry = HandlerRegistry()
>>> registry.register(Echo())
>>> registry.dispatch(Custom(handler_id=7, bytes=b"hi"))
b'hi'
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from .core.schema import Custom

__all__ = [
    "CustomHandler",
    "HandlerRegistry",
    "UnknownHandler",
    "HandlerConflict",
]

logger = logging.getLogger(__name__)


class UnknownHandler(LookupError):
    """No handler is registered for the requested handler id."""

    def __init__(self, handler_id: int) -> None:
        self.handler_id = handler_id
        super().__init__(f"no custom handler registered for id {handler_id}")


class HandlerConflict(ValueError):
    """A handler is already registered under the same id."""


@runtime_checkable
class CustomHandler(Protocol):
    """Interprets the payload of `Custom` actions carrying its `handler_id`."""

    handler_id: int

    def interpret(self, payload: bytes) -> Any: ...


class HandlerRegistry:
    """
    Map of handler id to `CustomHandler`.

    Args:
        handlers (Iterable[CustomHandler]): Handlers to register up front.

    Raises:
        HandlerConflict: If two handlers share an id.
    """

    def __init__(self, handlers: Iterable[CustomHandler] = ()) -> None:
        self._handlers: dict[int, CustomHandler] = {}
        for handler in handlers:
            self.register(handler)

    def register(self, handler: CustomHandler) -> None:
        handler_id = handler.handler_id
        if handler_id in self._handlers:
            raise HandlerConflict(f"handler id {handler_id} is already registered")
        self._handlers[handler_id] = handler
        logger.debug("registered custom handler %s for id %d", type(handler).__name__, handler_id)

    def unregister(self, handler_id: int) -> CustomHandler:
        try:
            return self._handlers.pop(handler_id)
        except KeyError as exc:
            raise UnknownHandler(handler_id) from exc

    def get(self, handler_id: int) -> CustomHandler:
        try:
            return self._handlers[handler_id]
        except KeyError as exc:
            raise UnknownHandler(handler_id) from exc

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def handler_ids(self) -> tuple[int, ...]:
        return tuple(sorted(self._handlers))

    def dispatch(self, action: Custom) -> Any:
        """
        Pass a `Custom` action's payload to its handler.

        Returns:
            Any: Whatever the handler's `interpret` returns.

        Raises:
            UnknownHandler: If no handler is registered for `action.handler_id`.
        """
        return self.get(action.handler_id).interpret(action.bytes)
