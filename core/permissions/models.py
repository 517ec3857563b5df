"""Permission system models."""

import re
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class PermissionMode(str, Enum):
    """Permission mode, ordered from most to least restrictive."""

    DEFAULT = "default"
    ACCEPT_EDITS = "acceptEdits"
    FULL_AUTO = "fullAuto"
    BYPASS_PERMISSIONS = "bypassPermissions"


class ModeInfo(BaseModel):
    """Display metadata for a permission mode."""

    id: PermissionMode
    label: str
    description: str
    indicator: str


class PatternRule(BaseModel):
    """Literal substring rule. Order within a rule list is significant."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(min_length=1)
    description: str


class ShellTrickRule(BaseModel):
    """Fixed regex rule for constructs that hide the executed command."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pattern: re.Pattern
    description: str


class ToolInput(BaseModel):
    """Tool call arguments the engine inspects. Other arguments pass through."""

    model_config = ConfigDict(frozen=True, extra="allow")

    path: str | None = None
    command: str | None = None


class ToolRequest(BaseModel):
    """A single attempted tool invocation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    tool_name: str = Field(alias="toolName")
    input: ToolInput = Field(default_factory=ToolInput)

    @property
    def command(self) -> str:
        return self.input.command or ""

    @property
    def path(self) -> str:
        return self.input.path or ""


class PromptDescriptor(BaseModel):
    """What the interactive surface should ask, and why."""

    kind: Literal["approval", "shell_trick"]
    tool_name: str
    title: str
    options: list[str]
    command: str | None = None
    trigger: str | None = None


class Allow(BaseModel):
    """Let the tool call run."""

    kind: Literal["allow"] = "allow"

    def to_result(self) -> dict[str, Any] | None:
        return None


class Block(BaseModel):
    """Stop the tool call."""

    kind: Literal["block"] = "block"
    reason: str

    def to_result(self) -> dict[str, Any] | None:
        return {"block": True, "reason": self.reason}


class Prompt(BaseModel):
    """The call needs an interactive decision before it can run."""

    kind: Literal["prompt"] = "prompt"
    descriptor: PromptDescriptor


Decision = Annotated[Union[Allow, Block, Prompt], Field(discriminator="kind")]


class SessionAllowSnapshot(BaseModel):
    """Read-only view of the session approvals."""

    tools: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)


class ModeStatus(BaseModel):
    """Status report for the current mode and session approvals."""

    mode: PermissionMode
    label: str
    description: str
    indicator: str
    session_tools: list[str] = Field(default_factory=list)
    session_commands: int = 0

    def format(self) -> str:
        text = f"Mode: {self.label} ({self.mode.value})\n{self.description}"
        if self.session_tools:
            text += f"\nSession-approved tools: {', '.join(self.session_tools)}"
        if self.session_commands:
            text += f"\nSession-approved commands: {self.session_commands}"
        return text
