"""
Configuration module for the permission engine.

Loads permission settings from global and project config files and parses
session-start overrides.
"""

from .defaults import CONFIG_DIRNAME, CONFIG_FILENAMES
from .flags import ServerOptions, SessionOverrides, overrides_from_env, parse_flags
from .loader import (
    get_permissions_config,
    load_config_file,
    load_permissions_config,
    load_permissions_layer,
    merge_layers,
    strip_jsonc_comments,
)
from .permissions_config import PermissionsConfig

__all__ = [
    # Constants
    "CONFIG_DIRNAME",
    "CONFIG_FILENAMES",
    # Config models
    "PermissionsConfig",
    "SessionOverrides",
    "ServerOptions",
    # Loader functions
    "load_config_file",
    "load_permissions_layer",
    "load_permissions_config",
    "get_permissions_config",
    "merge_layers",
    "strip_jsonc_comments",
    # Flags
    "parse_flags",
    "overrides_from_env",
]
