"""
Permission API server.

Exposes the decision engine over HTTP; prompts are delivered to SSE
subscribers and answered through the respond endpoint.
"""

from .app import app
from .routes import register_routes
from .state import get_approval_port, get_commands, get_engine, set_engine

# Register all routes with the app
register_routes(app)

__all__ = ["app", "set_engine", "get_engine", "get_commands", "get_approval_port"]
