"""
Server-side state management.

The server hosts one permission session: a decision engine, its command
surface, and the event-bus approval port that SSE subscribers answer.
"""

from core.permissions import DecisionEngine, EventBusApprovalPort, PermissionCommands


# =============================================================================
# Permission Engine
# =============================================================================

_engine: DecisionEngine | None = None
_commands: PermissionCommands | None = None
_approval_port: EventBusApprovalPort | None = None


def set_engine(engine: DecisionEngine | None, approval_port: EventBusApprovalPort | None = None) -> None:
    """Set the engine instance and the approval port it prompts through."""
    global _engine, _commands, _approval_port
    _engine = engine
    _commands = PermissionCommands(engine) if engine is not None else None
    _approval_port = approval_port


def get_engine() -> DecisionEngine | None:
    """Get the current engine instance."""
    return _engine


def get_commands() -> PermissionCommands | None:
    """Get the command surface bound to the current engine."""
    return _commands


def get_approval_port() -> EventBusApprovalPort | None:
    """Get the approval port that pending prompts are answered through."""
    return _approval_port
