"""
Event bus module.

Provides a synchronous, in-process pub/sub channel for decoupled
communication between components.
"""

from typed_events.bus.channel import EventBusChannel, create_event_bus_channel
from typed_events.bus.config import EventBusConfig
from typed_events.bus.types import (
    ErrorHandler,
    EventHandler,
    EventKey,
    EventToken,
    Unsubscribe,
)

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
