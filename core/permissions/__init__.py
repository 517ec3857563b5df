"""
Permission system for gated tool calls.

Decides allow/block/prompt for write, edit and bash calls under four
permission modes (default, acceptEdits, fullAuto, bypassPermissions).
"""

from .approval import (
    ApprovalCoordinator,
    ApprovalPort,
    ApprovalRequest,
    ApprovalResponse,
    EventBusApprovalPort,
)
from .commands import PermissionCommands, complete_mode
from .dangerous import CRITICAL_DIRS, DEFAULT_CATASTROPHIC, DEFAULT_DANGEROUS, check_critical_rm_rf
from .engine import GATED_TOOLS, DecisionEngine
from .models import (
    Allow,
    Block,
    Decision,
    ModeInfo,
    ModeStatus,
    PatternRule,
    PermissionMode,
    Prompt,
    PromptDescriptor,
    ShellTrickRule,
    ToolInput,
    ToolRequest,
)
from .modes import DEFAULT_MODE, MODES, ModeController, find_mode
from .paths import DEFAULT_PROTECTED_PATHS, PathResolver
from .patterns import SHELL_TRICK_PATTERNS, PatternClassifier, find_match, find_shell_trick
from .settings import PermissionSettings
from .store import SessionAllowCache

__all__ = [
    # Modes
    "PermissionMode",
    "ModeInfo",
    "ModeStatus",
    "MODES",
    "DEFAULT_MODE",
    "find_mode",
    # Models
    "ToolRequest",
    "ToolInput",
    "PatternRule",
    "ShellTrickRule",
    "PromptDescriptor",
    "Decision",
    "Allow",
    "Block",
    "Prompt",
    "PermissionSettings",
    "ApprovalRequest",
    "ApprovalResponse",
    # Rule tables
    "DEFAULT_DANGEROUS",
    "DEFAULT_CATASTROPHIC",
    "DEFAULT_PROTECTED_PATHS",
    "CRITICAL_DIRS",
    "SHELL_TRICK_PATTERNS",
    "GATED_TOOLS",
    # Functions
    "find_match",
    "find_shell_trick",
    "check_critical_rm_rf",
    "complete_mode",
    # Classes
    "PatternClassifier",
    "PathResolver",
    "ModeController",
    "SessionAllowCache",
    "ApprovalPort",
    "ApprovalCoordinator",
    "EventBusApprovalPort",
    "DecisionEngine",
    "PermissionCommands",
]
