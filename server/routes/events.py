"""
Global event SSE endpoint.

Subscribers receive permission prompts and notices and answer prompts via
POST /permissions/respond.
"""

import json
import logging
from typing import AsyncGenerator

from fastapi import APIRouter
from sse_starlette.sse import EventSourceResponse

from ..event_bus import get_event_bus

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/global/event")
async def global_event() -> EventSourceResponse:
    """Subscribe to permission events via SSE."""
    event_bus = get_event_bus()

    async def event_generator() -> AsyncGenerator[dict, None]:
        queue = event_bus.subscribe()
        logger.info("Event subscriber connected (%d total)", len(event_bus.subscribers))
        try:
            while True:
                event = await queue.get()
                yield {"event": event["type"], "data": json.dumps(event)}
        finally:
            event_bus.unsubscribe(queue)
            logger.info("Event subscriber disconnected (%d left)", len(event_bus.subscribers))

    return EventSourceResponse(event_generator())
