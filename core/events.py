"""
Event types and EventBus protocol.

Core publishes permission prompts and notices through an EventBus. The server
layer provides an SSE-based implementation; whoever is subscribed to it is
the interactive surface.
"""

from typing import Any, Protocol

from pydantic import BaseModel

PERMISSION_REQUESTED = "permission.requested"
PERMISSION_RESPONDED = "permission.responded"
PERMISSION_NOTICE = "permission.notice"


class Event(BaseModel):
    """Domain event that can be published to subscribers."""

    type: str
    properties: dict[str, Any]


class EventBus(Protocol):
    """Abstract interface for publishing events."""

    @property
    def has_subscribers(self) -> bool:
        """Whether anyone is listening for events."""
        ...

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers."""
        ...


class NullEventBus:
    """No-op EventBus with no listeners."""

    has_subscribers = False

    async def publish(self, event: Event) -> None:
        """Discard the event."""
        pass
