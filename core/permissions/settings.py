"""Resolved permission settings with built-in defaults."""

from pydantic import BaseModel, Field

from .dangerous import DEFAULT_CATASTROPHIC, DEFAULT_DANGEROUS
from .models import PatternRule, PermissionMode
from .modes import DEFAULT_MODE
from .paths import DEFAULT_PROTECTED_PATHS


class PermissionSettings(BaseModel):
    """Settings the decision engine runs with, after config layers are merged."""

    mode: PermissionMode = DEFAULT_MODE
    dangerous_patterns: list[PatternRule] = Field(default_factory=lambda: list(DEFAULT_DANGEROUS))
    catastrophic_patterns: list[PatternRule] = Field(
        default_factory=lambda: list(DEFAULT_CATASTROPHIC)
    )
    protected_paths: list[str] = Field(default_factory=lambda: list(DEFAULT_PROTECTED_PATHS))
