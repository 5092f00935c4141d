"""
Typed event bus.

A lightweight in-process publish/subscribe registry:
- Subscribe handlers to event keys (strings, integers or tokens)
- Emit payloads synchronously, in subscription order
- Isolate handler failures behind an ``on_error`` hook
"""

from typed_events.bus import (
    ErrorHandler,
    EventBusChannel,
    EventBusConfig,
    EventHandler,
    EventKey,
    EventToken,
    Unsubscribe,
    create_event_bus_channel,
)

__version__ = "1.0.0"

__all__ = [
    "ErrorHandler",
    "EventBusChannel",
    "EventBusConfig",
    "EventHandler",
    "EventKey",
    "EventToken",
    "Unsubscribe",
    "create_event_bus_channel",
]
