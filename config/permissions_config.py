"""PermissionsConfig model: one configuration layer as read from disk."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.permissions import PatternRule, PermissionMode


class PermissionsConfig(BaseModel):
    """
    A single permissions config layer (global or project).

    Every key is optional; an unset key falls through to the next layer.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    mode: PermissionMode | None = Field(
        default=None,
        description="Permission mode to start in",
    )
    dangerous_patterns: list[PatternRule] | None = Field(
        default=None,
        alias="dangerousPatterns",
        description="Substring rules that require confirmation",
    )
    catastrophic_patterns: list[PatternRule] | None = Field(
        default=None,
        alias="catastrophicPatterns",
        description="Substring rules that are always blocked",
    )
    protected_paths: list[str] | None = Field(
        default=None,
        alias="protectedPaths",
        description="Paths that can never be written or edited",
    )

    @field_validator("protected_paths")
    @classmethod
    def _non_empty_paths(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        cleaned = [p.strip() for p in value]
        if any(not p for p in cleaned):
            raise ValueError("protectedPaths entries must be non-empty")
        return cleaned
