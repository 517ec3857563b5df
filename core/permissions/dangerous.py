"""Dangerous and catastrophic command detection."""

import os
import re

from .models import PatternRule


# Require confirmation in every mode except bypassPermissions
DEFAULT_DANGEROUS = [
    PatternRule(pattern="rm -rf", description="recursive force delete"),
    PatternRule(pattern="chmod -R 777", description="insecure recursive permissions"),
    PatternRule(pattern="chown -R", description="recursive ownership change"),
    PatternRule(pattern="> /dev/", description="direct device write"),
]

# Always blocked, every mode, no session override.
# rm -rf lives in check_critical_rm_rf so project-local deletes stay possible.
DEFAULT_CATASTROPHIC = [
    PatternRule(pattern="sudo mkfs", description="sudo filesystem format"),
    PatternRule(pattern="mkfs.", description="filesystem format"),
    PatternRule(pattern="dd if=", description="raw disk write"),
    PatternRule(pattern=":(){ :|:& };:", description="fork bomb"),
    PatternRule(pattern="> /dev/sda", description="overwrite disk"),
    PatternRule(pattern="> /dev/nvme", description="overwrite disk"),
    PatternRule(pattern="sudo dd", description="sudo raw disk operation"),
]

# Exact-match targets only: /etc is catastrophic, /etc/nginx/conf.d is not
CRITICAL_DIRS = [
    "/",
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/lib",
    "/lib64",
    "/opt",
    "/proc",
    "/root",
    "/run",
    "/sbin",
    "/srv",
    "/sys",
    "/tmp",
    "/usr",
    "/var",
]

# rm -rf, rm -fr, rm -rfi, rm -r -f, rm -f -r
RM_RF_PATTERNS = [
    re.compile(r"\brm\s+(?:-[a-z]*r[a-z]*f[a-z]*|-[a-z]*f[a-z]*r[a-z]*)\s+(.*)", re.IGNORECASE),
    re.compile(r"\brm\s+-r\s+-f\s+(.*)", re.IGNORECASE),
    re.compile(r"\brm\s+-f\s+-r\s+(.*)", re.IGNORECASE),
]

SUDO_PREFIX = re.compile(r"\bsudo\s+(?=rm\b)")


def _resolve_target(target: str, home: str) -> str | None:
    """Resolve an rm target to an absolute path, or None for relative paths."""
    if target == "~":
        return home
    if target.startswith("~/"):
        return os.path.normpath(os.path.join(home, target[2:]))
    if target == "/*":
        return "/"
    if target.startswith("/"):
        return target
    return None


def _check_rm_targets(command: str, home: str) -> str | None:
    home = home.rstrip("/") or "/"

    for pattern in RM_RF_PATTERNS:
        match = pattern.search(command)
        if not match:
            continue

        targets = [t for t in match.group(1).split() if not t.startswith("-")]
        for target in targets:
            resolved = _resolve_target(target, home)
            if resolved is None:
                continue

            normalized = resolved.rstrip("/") or "/"

            if normalized == "/":
                return "rm -rf / — recursive delete root"

            if normalized in CRITICAL_DIRS:
                return f"rm -rf {normalized} — recursive delete critical system directory"

            if normalized == home:
                return "rm -rf ~ — recursive delete entire home directory"

    return None


def check_critical_rm_rf(command: str, home: str | None = None) -> str | None:
    """
    Check if a command recursively force-deletes a critical directory.

    Only exact matches against root, the critical system directories and the
    home directory are catastrophic. Relative paths and anything deeper than
    a critical directory are treated as safe.

    Args:
        command: The raw bash command
        home: Home directory used to expand ``~`` (defaults to the user's home)

    Returns:
        Human-readable description if catastrophic, None otherwise
    """
    home = home or os.path.expanduser("~")

    # One sudo directly before rm is stripped; the remainder is checked without recursion
    if SUDO_PREFIX.search(command):
        result = _check_rm_targets(SUDO_PREFIX.sub("", command, count=1), home)
        return f"sudo {result}" if result else None

    return _check_rm_targets(command, home)
