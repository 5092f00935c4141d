"""
Event bus channel for in-process pub/sub.

Provides:
- Subscription by event key with an unsubscribe callable
- Synchronous dispatch in subscription order
- Per-handler fault isolation routed to an ``on_error`` hook

Example:
    from typed_events import create_event_bus_channel

    def report(error, key, payload):
        print(f"handler for {key!r} failed: {error}")

    bus = create_event_bus_channel(on_error=report)

    unsubscribe = bus.on("user.logged_in", lambda user: print(user))
    bus.emit("user.logged_in", {"id": 1, "name": "Alice"})
    unsubscribe()
"""

from __future__ import annotations

from collections.abc import Mapping
from types import BuiltinMethodType, MethodType
from typing import Any, Generic, TypeVar

from typed_events.bus.config import EventBusConfig
from typed_events.bus.types import ErrorHandler, EventHandler, EventKey, Unsubscribe
from typed_events.logging_config import get_logger

logger = get_logger(__name__)

P = TypeVar("P")

_BOUND_METHOD_TYPES = (MethodType, BuiltinMethodType)


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__


def _same_handler(a: EventHandler, b: EventHandler) -> bool:
    """Identity match; bound methods match on their instance and function."""
    if a is b:
        return True
    # Method equality compares __self__ by identity
    if isinstance(a, _BOUND_METHOD_TYPES) and type(a) is type(b):
        return a == b
    return False


class EventBusChannel(Generic[P]):
    """
    Registry of handlers keyed by event.

    Handlers run synchronously in the order they were subscribed. A handler
    that raises never stops delivery to the handlers after it; the error goes
    to the configured ``on_error`` hook or is discarded.

    The channel holds no lock. Share an instance across threads only behind
    an external lock.
    """

    def __init__(self, config: EventBusConfig | Mapping[str, Any] | None = None):
        """
        Initialize an empty channel.

        Args:
            config: ``EventBusConfig``, an options mapping, or None
        """
        if config is None:
            config = EventBusConfig()
        elif isinstance(config, Mapping):
            config = EventBusConfig.from_dict(config)
        elif not isinstance(config, EventBusConfig):
            raise TypeError(
                f"config must be EventBusConfig or a mapping, got {type(config).__name__}"
            )

        self.config = config
        self._handlers: dict[EventKey, list[EventHandler]] = {}

    def on(self, key: EventKey, handler: EventHandler) -> Unsubscribe:
        """
        Subscribe a handler to an event key.

        Args:
            key: Event key
            handler: Callable taking the payload

        Returns:
            Unsubscribe function, equivalent to ``off(key, handler)``
        """
        self._handlers.setdefault(key, []).append(handler)

        logger.debug(
            "event_subscribed",
            key=key,
            handler=_handler_name(handler),
        )

        def unsubscribe() -> None:
            self.off(key, handler)

        return unsubscribe

    def off(self, key: EventKey, handler: EventHandler) -> None:
        """
        Remove every subscription of ``handler`` under ``key``.

        Unknown keys and handlers are ignored.
        """
        handlers = self._handlers.get(key)
        if not handlers:
            return

        remaining = [h for h in handlers if not _same_handler(h, handler)]
        if len(remaining) == len(handlers):
            return

        if remaining:
            self._handlers[key] = remaining
        else:
            del self._handlers[key]

        logger.debug(
            "event_unsubscribed",
            key=key,
            handler=_handler_name(handler),
            removed=len(handlers) - len(remaining),
        )

    def emit(self, key: EventKey, payload: P | None = None) -> None:
        """
        Deliver ``payload`` to every handler subscribed to ``key``.

        The handler list is copied before dispatch, so subscriptions made or
        removed by a running handler apply from the next ``emit`` on.

        Args:
            key: Event key
            payload: Value passed as the handler's only argument
        """
        handlers = self._handlers.get(key)
        if not handlers:
            return

        snapshot = list(handlers)
        logger.debug("event_dispatching", key=key, handlers=len(snapshot))

        for handler in snapshot:
            try:
                handler(payload)
            except Exception as e:
                self._handle_error(e, key, payload, handler)

        logger.debug("event_dispatched", key=key)

    def _handle_error(
        self,
        error: Exception,
        key: EventKey,
        payload: Any,
        handler: EventHandler,
    ) -> None:
        """Route a handler failure to ``on_error``; contain failures of the hook itself."""
        logger.debug(
            "event_handler_failed",
            key=key,
            handler=_handler_name(handler),
            error=repr(error),
        )

        on_error = self.config.on_error
        if on_error is None:
            return

        try:
            on_error(error, key, payload)
        except Exception:
            logger.exception(
                "event_error_handler_failed",
                key=key,
                handler=_handler_name(handler),
            )


def create_event_bus_channel(
    config: EventBusConfig | Mapping[str, Any] | None = None,
    *,
    on_error: ErrorHandler | None = None,
) -> EventBusChannel:
    """
    Create a new, independent event bus channel.

    Args:
        config: ``EventBusConfig`` or options mapping
        on_error: Shorthand for ``EventBusConfig(on_error=...)``

    Returns:
        Empty EventBusChannel
    """
    if on_error is not None:
        if config is not None:
            raise ValueError("Pass either config or on_error, not both")
        config = EventBusConfig(on_error=on_error)
    return EventBusChannel(config)
