"""Pattern matching logic for permissions."""

import re

from .dangerous import DEFAULT_CATASTROPHIC, DEFAULT_DANGEROUS
from .models import PatternRule, ShellTrickRule


# Constructs that can hide arbitrary commands from substring matching
SHELL_TRICK_PATTERNS = [
    ShellTrickRule(pattern=re.compile(r"\$\("), description="command substitution $(…)"),
    ShellTrickRule(pattern=re.compile(r"`[^`]+`"), description="backtick command substitution"),
    ShellTrickRule(pattern=re.compile(r"\beval\b"), description="eval execution"),
    ShellTrickRule(pattern=re.compile(r"\bbash\s+-c\b"), description="bash -c execution"),
    ShellTrickRule(pattern=re.compile(r"\bsh\s+-c\b"), description="sh -c execution"),
    ShellTrickRule(pattern=re.compile(r"\|\s*(ba)?sh\b"), description="pipe to shell"),
    ShellTrickRule(pattern=re.compile(r"\bexec\b"), description="exec execution"),
    ShellTrickRule(pattern=re.compile(r"\bsource\b"), description="source execution"),
    ShellTrickRule(pattern=re.compile(r">\("), description="process substitution >(…)"),
    ShellTrickRule(pattern=re.compile(r"<\("), description="process substitution <(…)"),
]


def find_match(command: str, rules: list[PatternRule]) -> PatternRule | None:
    """
    Find the first rule whose pattern appears in the command.

    Args:
        command: The raw bash command
        rules: Ordered substring rules

    Returns:
        The first matching rule in list order, or None
    """
    for rule in rules:
        if rule.pattern in command:
            return rule
    return None


def find_shell_trick(command: str) -> ShellTrickRule | None:
    """Return the first shell-trick rule matching the command, if any."""
    for rule in SHELL_TRICK_PATTERNS:
        if rule.pattern.search(command):
            return rule
    return None


class PatternClassifier:
    """Classifies bash commands against the configured rule lists."""

    def __init__(
        self,
        dangerous: list[PatternRule] | None = None,
        catastrophic: list[PatternRule] | None = None,
    ):
        self.dangerous = list(DEFAULT_DANGEROUS if dangerous is None else dangerous)
        self.catastrophic = list(DEFAULT_CATASTROPHIC if catastrophic is None else catastrophic)

    def catastrophe(self, command: str) -> PatternRule | None:
        return find_match(command, self.catastrophic)

    def danger(self, command: str) -> PatternRule | None:
        return find_match(command, self.dangerous)

    def shell_trick(self, command: str) -> ShellTrickRule | None:
        return find_shell_trick(command)
