"""
Permission server entry point.

Loads permission settings, applies command-line overrides, and serves the
decision API. Connect to GET /global/event to receive approval prompts.
"""
import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from config import get_permissions_config, parse_flags
from core.permissions import DecisionEngine, EventBusApprovalPort
from server import app, set_engine
from server.event_bus import get_event_bus
from server.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_engine(project_root: Path | None = None) -> tuple[DecisionEngine, EventBusApprovalPort]:
    """Build an engine that prompts through the global SSE event bus."""
    settings = get_permissions_config(project_root)
    approval_port = EventBusApprovalPort(get_event_bus())
    engine = DecisionEngine(settings, approval_port=approval_port, cwd=str(project_root or Path.cwd()))
    return engine, approval_port


def main() -> None:
    """Start the permission server."""
    options = parse_flags()
    setup_logging(options.log_level)

    project_root = Path(os.environ.get("WORKING_DIR", os.getcwd()))
    logger.info("Working directory: %s", project_root)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Initializing permission engine...")
        engine, approval_port = create_engine(project_root)
        engine.modes.start_session(
            skip_permissions=options.overrides.skip_permissions,
            permission_mode=options.overrides.permission_mode,
        )
        set_engine(engine, approval_port)
        logger.info("Permission engine ready (mode: %s)", engine.mode.value)

        yield

        set_engine(None)
        logger.info("Permission engine stopped")

    app.router.lifespan_context = lifespan

    logger.info("Server listening on %s:%d", options.host, options.port)
    uvicorn.run(app, host=options.host, port=options.port)


if __name__ == "__main__":
    main()
