"""
Event bus configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from typed_events.bus.types import ErrorHandler

# Accepted spellings for each option in mapping-style configuration
_OPTION_ALIASES = {
    "on_error": "on_error",
    "onError": "on_error",
}


@dataclass(frozen=True)
class EventBusConfig:
    """
    Configuration for an event bus channel.

    Args:
        on_error: Called as ``on_error(error, event_key, payload)`` when a
            handler raises during dispatch. When omitted, handler errors
            are discarded.
    """

    on_error: ErrorHandler | None = None

    def __post_init__(self):
        if self.on_error is not None and not callable(self.on_error):
            raise TypeError(
                f"on_error must be callable, got {type(self.on_error).__name__}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EventBusConfig:
        """Create from a mapping such as ``{"on_error": report}``."""
        options: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key)
            if name is None:
                raise ValueError(f"Unknown event bus option: {key!r}")
            if name in options:
                raise ValueError(f"Option given more than once: {name!r}")
            options[name] = value
        return cls(**options)
