"""Decision engine: turns a tool call into allow, block, or prompt."""

import asyncio
import logging

from .approval import ApprovalCoordinator, ApprovalPort, approval_prompt, shell_trick_prompt
from .models import Allow, Block, Decision, PermissionMode, Prompt, ToolRequest
from .modes import ModeController
from .paths import PathResolver
from .patterns import PatternClassifier
from .settings import PermissionSettings

logger = logging.getLogger(__name__)

GATED_TOOLS = frozenset({"write", "edit", "bash"})

UNOVERRIDABLE = "This cannot be overridden."


class DecisionEngine:
    """
    Ordered permission pipeline for gated tool calls.

    Unconditional blocks (critical deletes, catastrophic patterns, protected
    paths) are checked first and ignore both the mode and session approvals.
    Shell tricks come next, then mode auto-approval, then the session cache,
    and finally an interactive prompt.
    """

    def __init__(
        self,
        settings: PermissionSettings | None = None,
        approval_port: ApprovalPort | None = None,
        home: str | None = None,
        cwd: str | None = None,
    ):
        """
        Initialize the decision engine.

        Args:
            settings: Resolved settings (built-in defaults if omitted)
            approval_port: Interactive surface; None means non-interactive
            home: Home directory for ``~`` expansion
            cwd: Directory relative write targets resolve against
        """
        self.settings = settings or PermissionSettings()
        self.classifier = PatternClassifier(
            dangerous=self.settings.dangerous_patterns,
            catastrophic=self.settings.catastrophic_patterns,
        )
        self.paths = PathResolver(self.settings.protected_paths, home=home, cwd=cwd)
        self.modes = ModeController(self.settings.mode)
        self.session_allow = self.modes.session_allow
        self.coordinator = (
            ApprovalCoordinator(approval_port, self.modes) if approval_port else None
        )
        self._lock = asyncio.Lock()

    @property
    def mode(self) -> PermissionMode:
        return self.modes.mode

    @property
    def has_ui(self) -> bool:
        return self.coordinator is not None and self.coordinator.available

    def unconditional_block(self, request: ToolRequest) -> Block | None:
        """Checks that no mode and no session approval can override."""
        tool_name = request.tool_name

        if tool_name == "bash":
            command = request.command

            critical = self.paths.critical_delete(command)
            if critical:
                return Block(reason=f"Catastrophic command blocked: {critical}. {UNOVERRIDABLE}")

            catastrophe = self.classifier.catastrophe(command)
            if catastrophe:
                return Block(
                    reason=f"Catastrophic command blocked: {catastrophe.description}. {UNOVERRIDABLE}"
                )

        if tool_name in ("write", "edit"):
            target = self.paths.protected_target(request.path)
            if target:
                return Block(reason=f"Protected path blocked: {target}. {UNOVERRIDABLE}")

        if tool_name == "bash":
            readable = self.paths.protected_reference(request.command)
            if readable:
                return Block(
                    reason=f"Bash command references protected path {readable}. {UNOVERRIDABLE}"
                )

        return None

    def evaluate(self, request: ToolRequest) -> Decision:
        """
        Run the pipeline without interacting with the user.

        Returns:
            Allow, Block, or a Prompt describing the confirmation still needed
        """
        tool_name = request.tool_name
        if tool_name not in GATED_TOOLS:
            return Allow()

        blocked = self.unconditional_block(request)
        if blocked:
            return blocked

        mode = self.modes.mode
        command = request.command if tool_name == "bash" else None

        if command is not None and mode != PermissionMode.BYPASS_PERMISSIONS:
            trick = self.classifier.shell_trick(command)
            if trick:
                return Prompt(descriptor=shell_trick_prompt(command, trick.description))

        dangerous = command is not None and self.classifier.danger(command) is not None
        if self.modes.auto_approves(tool_name, dangerous=dangerous):
            logger.debug("Auto-approved %s in %s mode", tool_name, mode.value)
            return Allow()

        if self.session_allow.is_allowed(tool_name, command):
            logger.debug("Session-approved %s", tool_name)
            return Allow()

        return Prompt(descriptor=approval_prompt(request, self.classifier))

    async def decide(self, request: ToolRequest) -> Allow | Block:
        """
        Decide a tool call, prompting the user if needed.

        Requests are handled one at a time. Without an interactive surface a
        pending confirmation becomes a Block.
        """
        async with self._lock:
            decision = self.evaluate(request)

            if isinstance(decision, Block):
                logger.warning("Blocked %s: %s", request.tool_name, decision.reason)
                if self.coordinator:
                    await self.coordinator.notify(f"🚫 {decision.reason}", "error")
                return decision

            if isinstance(decision, Allow):
                return decision

            descriptor = decision.descriptor
            if not self.has_ui:
                if descriptor.kind == "shell_trick":
                    reason = f"Blocked shell trick: {descriptor.trigger} (no UI for confirmation)"
                else:
                    reason = (
                        f"Blocked {request.tool_name} "
                        f"(no UI for confirmation, mode: {self.modes.mode.value})"
                    )
                logger.warning("%s", reason)
                return Block(reason=reason)

            logger.info("Requesting approval for %s", request.tool_name)
            return await self.coordinator.resolve(descriptor)
