"""Mode commands, picker, status, and the cycle shortcut."""

import logging

from .models import ModeInfo, ModeStatus, PermissionMode
from .modes import MODES, get_mode_info
from .engine import DecisionEngine

logger = logging.getLogger(__name__)

PICKER_TITLE = "Permission Mode"


def complete_mode(prefix: str) -> list[ModeInfo] | None:
    """Argument completions for the mode command; None when nothing matches."""
    matches = [m for m in MODES if m.id.value.startswith(prefix)]
    return matches or None


def picker_choices(current: PermissionMode) -> list[str]:
    choices = []
    for info in MODES:
        marker = " (current)" if info.id == current else ""
        choices.append(f"{info.indicator} {info.label}{marker} — {info.description}")
    return choices


class PermissionCommands:
    """User-facing mode operations bound to one engine."""

    def __init__(self, engine: DecisionEngine):
        self.engine = engine

    async def _announce(self, mode: PermissionMode) -> None:
        if self.engine.coordinator:
            await self.engine.coordinator.notify(f"Permission mode: {get_mode_info(mode).label}")

    async def set_mode(self, name: str) -> PermissionMode:
        """
        Set the mode by id.

        Raises:
            UnknownModeError: If ``name`` is not a mode id; the mode is unchanged
        """
        mode = self.engine.modes.set_by_name(name.strip())
        await self._announce(mode)
        return mode

    async def pick_mode(self) -> PermissionMode | None:
        """
        Let the user choose a mode interactively.

        Returns:
            The new mode, or None if there is no surface or the picker was cancelled
        """
        coordinator = self.engine.coordinator
        if coordinator is None or not coordinator.available:
            return None

        choice = await coordinator.port.select(PICKER_TITLE, picker_choices(self.engine.mode))
        if choice is None or not 0 <= choice < len(MODES):
            return None

        mode = self.engine.modes.set(MODES[choice].id)
        await self._announce(mode)
        return mode

    async def handle(self, args: str = "") -> PermissionMode | None:
        """Mode command: set directly when given an argument, else open the picker."""
        if args and args.strip():
            return await self.set_mode(args)
        return await self.pick_mode()

    async def cycle(self) -> PermissionMode:
        """Keyboard shortcut: next mode, wrapping."""
        mode = self.engine.modes.cycle()
        await self._announce(mode)
        return mode

    def status(self) -> ModeStatus:
        return self.engine.modes.status()
