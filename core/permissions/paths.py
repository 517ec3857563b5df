"""Protected path resolution and matching."""

import os

from .dangerous import check_critical_rm_rf


# Writes/edits to these are always blocked, every mode
DEFAULT_PROTECTED_PATHS = [
    "~/.ssh",
    "~/.aws",
    "~/.gnupg",
    "~/.gpg",
    "~/.bashrc",
    "~/.bash_profile",
    "~/.profile",
    "~/.zshrc",
    "~/.zprofile",
    "~/.config/git/credentials",
    "~/.netrc",
    "~/.npmrc",
    "~/.docker/config.json",
    "~/.kube/config",
    "~/.agent/auth.json",
]


def expand_home(path: str, home: str) -> str:
    """Expand a bare ``~`` or ``~/`` prefix against the given home directory."""
    if path == "~":
        return home
    if path.startswith("~/"):
        return os.path.join(home, path[2:])
    return path


class PathResolver:
    """
    Resolves command and file targets against critical and protected paths.

    Protected entries are resolved once, at construction. Relative entries and
    relative write targets are resolved against ``cwd``.
    """

    def __init__(
        self,
        protected_paths: list[str] | None = None,
        home: str | None = None,
        cwd: str | None = None,
    ):
        self.home = os.path.normpath(home or os.path.expanduser("~"))
        self.cwd = cwd or os.getcwd()
        entries = DEFAULT_PROTECTED_PATHS if protected_paths is None else protected_paths
        self.protected_paths = [self.resolve(p) for p in entries]

    def resolve(self, path: str) -> str:
        """Return the absolute, normalized form of a path."""
        return os.path.normpath(os.path.join(self.cwd, expand_home(path, self.home)))

    def readable(self, path: str) -> str:
        """Return the home-alias form of an absolute path."""
        return path.replace(self.home, "~", 1)

    def critical_delete(self, command: str) -> str | None:
        return check_critical_rm_rf(command, self.home)

    def protected_target(self, path: str) -> str | None:
        """
        Check a write/edit target against the protected entries.

        Returns:
            The resolved target if it is protected, None otherwise
        """
        target = self.resolve(path)
        for entry in self.protected_paths:
            if target == entry or target.startswith(entry.rstrip("/") + "/"):
                return target
        return None

    def protected_reference(self, command: str) -> str | None:
        """
        Check whether a command mentions a protected entry.

        Plain substring containment of either the absolute or the home-alias
        form; incidental mentions also match.

        Returns:
            The protected entry in home-alias form, or None
        """
        for entry in self.protected_paths:
            if entry in command or self.readable(entry) in command:
                return self.readable(entry)
        return None
