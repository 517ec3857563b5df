"""
Core business logic package.

This package contains the transport-agnostic permission engine.
The server package provides HTTP bindings around it.
"""

from .events import Event, EventBus, NullEventBus
from .exceptions import CoreError, InvalidOperationError, NotFoundError, UnknownModeError

__all__ = [
    # Exceptions
    "CoreError",
    "NotFoundError",
    "InvalidOperationError",
    "UnknownModeError",
    # Events
    "Event",
    "EventBus",
    "NullEventBus",
]
