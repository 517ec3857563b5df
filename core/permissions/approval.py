"""Interactive approval round-trip."""

import asyncio
import logging
import secrets
import time
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from core.events import PERMISSION_NOTICE, PERMISSION_REQUESTED, PERMISSION_RESPONDED, Event, EventBus
from core.exceptions import NotFoundError

from .models import Allow, Block, PromptDescriptor, ToolRequest
from .patterns import PatternClassifier
from .modes import ModeController

logger = logging.getLogger(__name__)

MAX_DISPLAY_COMMAND = 200

ALLOW_ONCE = "Allow once"
DENY = "Deny"


class ApprovalPort(Protocol):
    """Capability for asking the user to pick one of several options."""

    @property
    def interactive(self) -> bool:
        """Whether a user is available to answer right now."""
        ...

    async def select(self, title: str, options: list[str]) -> int | None:
        """
        Present options and wait for the user's pick.

        Returns:
            Index into ``options``, or None if the prompt was cancelled
        """
        ...

    async def notify(self, message: str, level: str = "info") -> None:
        """Show a non-blocking message."""
        ...


def display_command(command: str) -> str:
    if len(command) > MAX_DISPLAY_COMMAND:
        return command[:MAX_DISPLAY_COMMAND] + "…"
    return command


def describe_request(request: ToolRequest, classifier: PatternClassifier) -> tuple[str, str]:
    """
    Build the icon and description line for an approval prompt.

    Bash commands are annotated with the first catastrophic or dangerous rule
    they match.
    """
    tool_name = request.tool_name
    if tool_name == "bash":
        command = request.command
        description = f"bash: {display_command(command)}"
        catastrophe = classifier.catastrophe(command)
        if catastrophe:
            return "🚫", f"{description}\n   🚫 CATASTROPHIC: {catastrophe.description}"
        danger = classifier.danger(command)
        if danger:
            return "⚠️", f"{description}\n   ⚠️  DANGEROUS: {danger.description}"
        return "🔒", description
    if tool_name in ("write", "edit"):
        return "🔒", f"{tool_name}: {request.input.path}"
    return "🔒", tool_name


def approval_prompt(request: ToolRequest, classifier: PatternClassifier) -> PromptDescriptor:
    """Three-way prompt: once, for session, deny."""
    icon, description = describe_request(request, classifier)
    session_option = (
        "Allow this command for session"
        if request.tool_name == "bash"
        else f"Allow all {request.tool_name} for session"
    )
    return PromptDescriptor(
        kind="approval",
        tool_name=request.tool_name,
        title=f"{icon} {description}",
        options=[ALLOW_ONCE, session_option, DENY],
        command=request.input.command,
    )


def shell_trick_prompt(command: str, trick: str) -> PromptDescriptor:
    """Binary prompt for a shell trick; there is no session option."""
    return PromptDescriptor(
        kind="shell_trick",
        tool_name="bash",
        title=f"⚠️ bash: {display_command(command)}\n   ⚠️  SHELL TRICK: {trick}",
        options=[ALLOW_ONCE, DENY],
        command=command,
        trigger=trick,
    )


class ApprovalCoordinator:
    """Resolves prompts through an approval port and records session approvals."""

    def __init__(self, port: ApprovalPort, modes: ModeController):
        self.port = port
        self.modes = modes

    @property
    def available(self) -> bool:
        return self.port.interactive

    async def resolve(self, descriptor: PromptDescriptor) -> Allow | Block:
        """
        Ask the user and turn the answer into a decision.

        Cancellation and unrecognized answers are denials.
        """
        generation = self.modes.generation
        choice = await self.port.select(descriptor.title, descriptor.options)
        logger.info("Approval answer for %s: %s", descriptor.tool_name, choice)

        if descriptor.kind == "shell_trick":
            if choice == 0:
                return Allow()
            return Block(reason=f"User denied shell trick: {descriptor.trigger}")

        if choice == 0:
            return Allow()

        if choice == 1:
            command = (descriptor.command or "") if descriptor.tool_name == "bash" else None
            self.modes.allow_for_session(generation, descriptor.tool_name, command)
            return Allow()

        return Block(reason=f"User denied {descriptor.tool_name}")

    async def notify(self, message: str, level: str = "info") -> None:
        if self.available:
            await self.port.notify(message, level)


class ApprovalRequest(BaseModel):
    """A prompt waiting for an answer from an event-bus subscriber."""

    id: str
    title: str
    options: list[str]
    requested_at: float = Field(default_factory=time.time)


class ApprovalResponse(BaseModel):
    """Answer to a pending prompt. ``choice`` None means cancelled."""

    model_config = ConfigDict(populate_by_name=True)

    request_id: str = Field(alias="requestId")
    choice: int | None = None


def gen_id(prefix: str) -> str:
    return f"{prefix}{secrets.token_urlsafe(12)}"


class EventBusApprovalPort:
    """
    Approval port that publishes prompts as events and waits for a response.

    Interactive only while the bus has subscribers. By default a prompt waits
    indefinitely; with ``timeout`` set, an unanswered prompt counts as
    cancelled.
    """

    def __init__(self, event_bus: EventBus, timeout: float | None = None):
        self.event_bus = event_bus
        self.timeout = timeout
        self._pending: dict[str, ApprovalRequest] = {}
        self._response_futures: dict[str, asyncio.Future] = {}

    @property
    def interactive(self) -> bool:
        return self.event_bus.has_subscribers

    def pending(self) -> list[ApprovalRequest]:
        return list(self._pending.values())

    async def select(self, title: str, options: list[str]) -> int | None:
        request = ApprovalRequest(id=gen_id("perm_"), title=title, options=options)
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._pending[request.id] = request
        self._response_futures[request.id] = future

        await self.event_bus.publish(
            Event(type=PERMISSION_REQUESTED, properties={"request": request.model_dump()})
        )

        try:
            choice = await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Approval request timed out: %s", request.id)
            choice = None
        finally:
            self._pending.pop(request.id, None)
            self._response_futures.pop(request.id, None)

        await self.event_bus.publish(
            Event(
                type=PERMISSION_RESPONDED,
                properties={"request_id": request.id, "choice": choice},
            )
        )
        return choice

    def respond(self, response: ApprovalResponse) -> None:
        """
        Deliver an answer to a pending prompt.

        Raises:
            NotFoundError: If no prompt with that id is pending
        """
        future = self._response_futures.get(response.request_id)
        if future is None:
            raise NotFoundError("Approval request", response.request_id)
        if not future.done():
            future.set_result(response.choice)
            logger.debug("Approval response received: %s -> %s", response.request_id, response.choice)

    async def notify(self, message: str, level: str = "info") -> None:
        await self.event_bus.publish(
            Event(type=PERMISSION_NOTICE, properties={"message": message, "level": level})
        )
