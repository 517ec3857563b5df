"""Configuration loading utilities."""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from core.permissions import DEFAULT_MODE, PermissionSettings

from .defaults import CONFIG_DIRNAME, CONFIG_FILENAMES
from .permissions_config import PermissionsConfig

logger = logging.getLogger(__name__)


def strip_jsonc_comments(content: str) -> str:
    """
    Strip comments from JSONC content to convert to valid JSON.

    Handles:
    - Single-line comments: // comment
    - Multi-line comments: /* comment */

    Lines are only treated as comments where ``//`` is not part of a URL-like
    ``://`` sequence.

    Args:
        content: JSONC content string

    Returns:
        JSON string with comments removed
    """
    content = re.sub(r"(?<!:)//.*?$", "", content, flags=re.MULTILINE)
    content = re.sub(r"/\*.*?\*/", "", content, flags=re.DOTALL)
    return content


def load_config_file(path: Path) -> dict[str, Any] | None:
    """
    Load a config file from the given path.

    Supports both .json and .jsonc files with comment stripping.

    Args:
        path: Path to the config file

    Returns:
        Parsed config dictionary or None if the file is missing or unreadable
    """
    if not path.exists():
        return None

    try:
        content = path.read_text()
        if path.suffix == ".jsonc":
            content = strip_jsonc_comments(content)
        data = json.loads(content)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", path)
        return None
    return data


def load_permissions_layer(directory: Path) -> PermissionsConfig | None:
    """
    Load the first permissions config file found in a directory.

    A file that fails validation is skipped as a whole, so the layer below
    it applies instead.

    Args:
        directory: Directory holding permissions.jsonc or permissions.json

    Returns:
        Validated layer, or None if no usable file exists
    """
    for filename in CONFIG_FILENAMES:
        path = directory / filename
        data = load_config_file(path)
        if data is None:
            continue
        try:
            return PermissionsConfig.model_validate(data)
        except ValidationError as e:
            logger.warning("Invalid permissions config %s, ignoring: %s", path, e)
            return None
    return None


def merge_layers(
    project: PermissionsConfig | None,
    global_: PermissionsConfig | None,
) -> PermissionSettings:
    """
    Resolve each key as project, else global, else built-in default.

    Keys are taken whole from one layer; rule lists are not concatenated.

    Args:
        project: Project-level layer (highest precedence)
        global_: Global layer

    Returns:
        Fully resolved PermissionSettings
    """
    defaults = PermissionSettings()
    layers = [layer for layer in (project, global_) if layer is not None]

    def pick(key: str, fallback: Any) -> Any:
        for layer in layers:
            value = getattr(layer, key)
            if value is not None:
                return value
        return fallback

    return PermissionSettings(
        mode=pick("mode", DEFAULT_MODE),
        dangerous_patterns=pick("dangerous_patterns", defaults.dangerous_patterns),
        catastrophic_patterns=pick("catastrophic_patterns", defaults.catastrophic_patterns),
        protected_paths=pick("protected_paths", defaults.protected_paths),
    )


def load_permissions_config(
    project_root: Path | None = None,
    home: Path | None = None,
) -> PermissionSettings:
    """
    Load permission settings from the global and project config directories.

    Looks for:
    1. Project-level: <project_root>/.agent/permissions.jsonc or permissions.json
    2. Global: ~/.agent/permissions.jsonc or permissions.json

    Args:
        project_root: Project root directory (defaults to current working directory)
        home: Home directory (defaults to the user's home)

    Returns:
        Resolved PermissionSettings
    """
    if project_root is None:
        project_root = Path.cwd()
    if home is None:
        home = Path.home()

    global_layer = load_permissions_layer(home / CONFIG_DIRNAME)
    project_layer = load_permissions_layer(project_root / CONFIG_DIRNAME)

    settings = merge_layers(project_layer, global_layer)
    logger.debug(
        "Loaded permissions config (project=%s, global=%s, mode=%s)",
        project_layer is not None,
        global_layer is not None,
        settings.mode.value,
    )
    return settings


@lru_cache(maxsize=1)
def get_permissions_config(project_root: Path | None = None) -> PermissionSettings:
    """
    Get cached permission settings.

    To reload, clear the cache with get_permissions_config.cache_clear().
    """
    return load_permissions_config(project_root or Path.cwd())
