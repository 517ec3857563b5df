"""
Shared pytest fixtures for all tests.
"""
import asyncio
import tempfile
from pathlib import Path
from typing import Iterator

import pytest

from core.permissions import DecisionEngine, PermissionMode, PermissionSettings, ToolRequest

HOME = "/home/tester"
PROJECT = "/work/project"


class ScriptedApprovalPort:
    """Approval port that answers prompts from a fixed list of choices."""

    def __init__(self, answers: list[int | None] | None = None, interactive: bool = True):
        self.answers = list(answers or [])
        self.interactive = interactive
        self.prompts: list[tuple[str, list[str]]] = []
        self.notices: list[tuple[str, str]] = []

    async def select(self, title: str, options: list[str]) -> int | None:
        self.prompts.append((title, options))
        return self.answers.pop(0) if self.answers else None

    async def notify(self, message: str, level: str = "info") -> None:
        self.notices.append((message, level))


class GatedApprovalPort(ScriptedApprovalPort):
    """Scripted port that holds each answer until ``gate`` is set."""

    def __init__(self, answers: list[int | None] | None = None):
        super().__init__(answers)
        self.asked = asyncio.Event()
        self.gate = asyncio.Event()

    async def select(self, title: str, options: list[str]) -> int | None:
        self.prompts.append((title, options))
        self.asked.set()
        await self.gate.wait()
        return self.answers.pop(0) if self.answers else None


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_port():
    """Factory for scripted approval ports."""
    return ScriptedApprovalPort


@pytest.fixture
def make_engine():
    """Factory for engines with a fixed home and project directory."""

    def _make(
        mode: PermissionMode = PermissionMode.DEFAULT,
        port: ScriptedApprovalPort | None = None,
        **settings,
    ) -> DecisionEngine:
        return DecisionEngine(
            PermissionSettings(mode=mode, **settings),
            approval_port=port,
            home=HOME,
            cwd=PROJECT,
        )

    return _make


@pytest.fixture
def bash():
    """Build a bash tool request."""

    def _bash(command: str) -> ToolRequest:
        return ToolRequest(tool_name="bash", input={"command": command})

    return _bash


@pytest.fixture
def write():
    """Build a write tool request."""

    def _write(path: str, tool_name: str = "write") -> ToolRequest:
        return ToolRequest(tool_name=tool_name, input={"path": path})

    return _write


@pytest.fixture
def make_gated_port():
    """Factory for approval ports whose answers wait on a gate."""
    return GatedApprovalPort
