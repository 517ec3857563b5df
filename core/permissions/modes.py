"""Permission mode state machine."""

import logging
import threading

from core.exceptions import UnknownModeError

from .models import ModeInfo, ModeStatus, PermissionMode
from .store import SessionAllowCache

logger = logging.getLogger(__name__)

DEFAULT_MODE = PermissionMode.ACCEPT_EDITS

# Cycle order; each mode widens the auto-approval scope of the previous one
MODES = [
    ModeInfo(
        id=PermissionMode.DEFAULT,
        label="Default",
        description="Confirm every write, edit, and bash command",
        indicator="⏵",
    ),
    ModeInfo(
        id=PermissionMode.ACCEPT_EDITS,
        label="Accept Edits",
        description="Allow write/edit silently, confirm bash",
        indicator="⏵⏵",
    ),
    ModeInfo(
        id=PermissionMode.FULL_AUTO,
        label="Full Auto",
        description="Allow write/edit/bash, confirm dangerous only",
        indicator="⏵⏵⏵",
    ),
    ModeInfo(
        id=PermissionMode.BYPASS_PERMISSIONS,
        label="Bypass Permissions",
        description="Allow everything, block catastrophic commands",
        indicator="⏵⏵⏵⏵",
    ),
]

EDIT_TOOLS = frozenset({"write", "edit"})


def get_mode_info(mode: PermissionMode) -> ModeInfo:
    return next(m for m in MODES if m.id == mode)


def find_mode(name: str) -> PermissionMode | None:
    """Look up a mode by its id, e.g. ``"fullAuto"``."""
    for info in MODES:
        if info.id.value == name:
            return info.id
    return None


class ModeController:
    """
    Holds the current permission mode and the session approvals it scopes.

    Every transition clears the session approvals under the same lock that
    guards the mode, so no approval granted in one mode survives into another.
    """

    def __init__(
        self,
        mode: PermissionMode = DEFAULT_MODE,
        session_allow: SessionAllowCache | None = None,
    ):
        self._mode = mode
        self.session_allow = session_allow if session_allow is not None else SessionAllowCache()
        self._lock = threading.RLock()
        self._generation = 0

    @property
    def mode(self) -> PermissionMode:
        return self._mode

    @property
    def info(self) -> ModeInfo:
        return get_mode_info(self._mode)

    @property
    def generation(self) -> int:
        """Counter bumped on every transition; session approvals belong to one generation."""
        return self._generation

    def set(self, mode: PermissionMode) -> PermissionMode:
        with self._lock:
            previous = self._mode
            self._mode = mode
            self._generation += 1
            self.session_allow.clear()
        logger.info("Permission mode: %s -> %s", previous.value, mode.value)
        return mode

    def set_by_name(self, name: str) -> PermissionMode:
        """
        Set the mode from its id.

        Raises:
            UnknownModeError: If the name is not a known mode; the mode is unchanged
        """
        mode = find_mode(name)
        if mode is None:
            raise UnknownModeError(name, [m.id.value for m in MODES])
        return self.set(mode)

    def cycle(self) -> PermissionMode:
        """Advance to the next mode, wrapping after bypassPermissions."""
        with self._lock:
            idx = [m.id for m in MODES].index(self._mode)
            return self.set(MODES[(idx + 1) % len(MODES)].id)

    def start_session(
        self,
        skip_permissions: bool = False,
        permission_mode: str | None = None,
    ) -> PermissionMode:
        """
        Reset session approvals and apply command-line overrides.

        ``skip_permissions`` wins over ``permission_mode``. Unknown mode names
        are ignored and the configured mode is kept.
        """
        with self._lock:
            self._generation += 1
            self.session_allow.clear()
            if skip_permissions:
                self._mode = PermissionMode.BYPASS_PERMISSIONS
            elif permission_mode:
                found = find_mode(permission_mode)
                if found is not None:
                    self._mode = found
                else:
                    logger.warning("Ignoring unknown permission mode override: %s", permission_mode)
        logger.info("Session started in %s mode", self._mode.value)
        return self._mode

    def auto_approves(self, tool_name: str, dangerous: bool = False) -> bool:
        """
        Check whether the current mode approves a call without asking.

        Args:
            tool_name: The gated tool being invoked
            dangerous: For bash, whether the command matched a dangerous rule
        """
        mode = self._mode
        if mode == PermissionMode.BYPASS_PERMISSIONS:
            return True
        if mode in (PermissionMode.ACCEPT_EDITS, PermissionMode.FULL_AUTO) and tool_name in EDIT_TOOLS:
            return True
        if mode == PermissionMode.FULL_AUTO and tool_name == "bash":
            return not dangerous
        return False

    def allow_for_session(self, generation: int, tool_name: str, command: str | None = None) -> bool:
        """
        Record a session approval granted while ``generation`` was current.

        Returns:
            False, recording nothing, if the mode changed since then
        """
        with self._lock:
            if generation != self._generation:
                logger.info("Mode changed during prompt; not recording session approval for %s", tool_name)
                return False
            if command is not None:
                self.session_allow.allow_command(command)
            else:
                self.session_allow.allow_tool(tool_name)
            return True

    def status(self) -> ModeStatus:
        with self._lock:
            info = self.info
            snapshot = self.session_allow.snapshot()
        return ModeStatus(
            mode=info.id,
            label=info.label,
            description=info.description,
            indicator=info.indicator,
            session_tools=snapshot.tools,
            session_commands=len(snapshot.commands),
        )
