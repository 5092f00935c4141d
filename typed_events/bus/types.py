"""
Key and handler types for the event bus.

Payload shapes per key are a contract between publishers and subscribers;
they are documented and tested, never checked at runtime.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class EventToken:
    """
    Opaque, unique event key.

    Two tokens are never equal unless they are the same object, even when
    they share a description. Useful for private event channels that no
    other module can address by accident.

    Example:
        READY = EventToken("ready")
        bus.on(READY, handler)
        bus.emit(READY, None)
    """

    __slots__ = ("_description",)

    def __init__(self, description: str = ""):
        self._description = description

    @property
    def description(self) -> str:
        """Human-readable label, used only in ``repr``."""
        return self._description

    def __repr__(self) -> str:
        return f"EventToken({self._description!r})"


# Handler signatures
EventKey = str | int | EventToken
EventHandler = Callable[[Any], None]
ErrorHandler = Callable[[Exception, EventKey | None, Any], None]
Unsubscribe = Callable[[], None]
