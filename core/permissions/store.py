"""Session-scoped approval storage."""

import logging

from .models import SessionAllowSnapshot

logger = logging.getLogger(__name__)


class SessionAllowCache:
    """
    Approvals granted "for session" by the user.

    Holds tool names and exact bash command strings. Entries never expire on
    their own; the cache only shrinks through clear(), which the mode
    controller calls on session start and on every mode transition.
    """

    def __init__(self):
        self.tools: set[str] = set()
        self.commands: set[str] = set()

    def allow_tool(self, tool_name: str) -> None:
        self.tools.add(tool_name)
        logger.info("Session-approved tool: %s", tool_name)

    def allow_command(self, command: str) -> None:
        self.commands.add(command)
        logger.info("Session-approved command: %s", command)

    def is_allowed(self, tool_name: str, command: str | None = None) -> bool:
        """
        Check for a memoized approval.

        Args:
            tool_name: The tool being invoked
            command: The exact bash command, for bash calls

        Returns:
            True if the exact command or the whole tool was approved
        """
        if command is not None and command in self.commands:
            return True
        return tool_name in self.tools

    def clear(self) -> None:
        if self.tools or self.commands:
            logger.debug(
                "Clearing session approvals (%d tools, %d commands)",
                len(self.tools),
                len(self.commands),
            )
        self.tools.clear()
        self.commands.clear()

    def snapshot(self) -> SessionAllowSnapshot:
        return SessionAllowSnapshot(tools=sorted(self.tools), commands=sorted(self.commands))

    def __len__(self) -> int:
        return len(self.tools) + len(self.commands)
