"""Session-start overrides from command-line flags and environment."""

import argparse
import os
from typing import Sequence

from pydantic import BaseModel, Field

from .defaults import DEFAULT_HOST, DEFAULT_PORT, PERMISSION_MODE_ENV, SKIP_PERMISSIONS_ENV

TRUTHY = {"1", "true", "yes", "on"}


class SessionOverrides(BaseModel):
    """Overrides applied at session start, above every config layer."""

    skip_permissions: bool = Field(
        default=False,
        description="Force bypassPermissions",
    )
    permission_mode: str | None = Field(
        default=None,
        description="Mode id to start in; unknown ids are ignored",
    )


class ServerOptions(BaseModel):
    """Options for the HTTP host."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str | None = None
    overrides: SessionOverrides = Field(default_factory=SessionOverrides)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Permission decision server for agent tool calls")
    parser.add_argument(
        "--permission-mode",
        default=None,
        help="Permission mode (default, acceptEdits, fullAuto, bypassPermissions)",
    )
    parser.add_argument(
        "--dangerously-skip-permissions",
        action="store_true",
        help="Bypass all permission checks (shortcut for --permission-mode bypassPermissions)",
    )
    parser.add_argument("--host", default=os.environ.get("HOST", DEFAULT_HOST))
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", str(DEFAULT_PORT))))
    parser.add_argument("--log-level", default=None)
    return parser


def overrides_from_env() -> SessionOverrides:
    """Read overrides from PERMISSION_MODE and DANGEROUSLY_SKIP_PERMISSIONS."""
    return SessionOverrides(
        skip_permissions=os.environ.get(SKIP_PERMISSIONS_ENV, "").lower() in TRUTHY,
        permission_mode=os.environ.get(PERMISSION_MODE_ENV) or None,
    )


def parse_flags(argv: Sequence[str] | None = None) -> ServerOptions:
    """
    Parse command-line flags. Flags win over the environment equivalents.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])
    """
    args = build_parser().parse_args(argv)
    env = overrides_from_env()
    return ServerOptions(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        overrides=SessionOverrides(
            skip_permissions=args.dangerously_skip_permissions or env.skip_permissions,
            permission_mode=args.permission_mode or env.permission_mode,
        ),
    )
