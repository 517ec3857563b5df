"""Tests for pattern classification."""

import pytest

from core.permissions import (
    DEFAULT_CATASTROPHIC,
    DEFAULT_DANGEROUS,
    PatternClassifier,
    PatternRule,
    find_match,
    find_shell_trick,
)


class TestFindMatch:
    """Tests for ordered substring matching."""

    def test_first_rule_wins(self):
        """When several rules match, the earliest in the list is returned."""
        rules = [
            PatternRule(pattern="git push", description="push"),
            PatternRule(pattern="git", description="any git"),
        ]
        assert find_match("git push origin main", rules).description == "push"
        assert find_match("git status", rules).description == "any git"

    def test_no_match(self):
        assert find_match("ls -la", DEFAULT_DANGEROUS) is None

    def test_empty_rules(self):
        assert find_match("rm -rf /", []) is None

    def test_substring_anywhere(self):
        """Patterns are literal substrings, not anchored."""
        match = find_match("cd /tmp && rm -rf build", DEFAULT_DANGEROUS)
        assert match.pattern == "rm -rf"

    def test_literal_not_regex(self):
        """Regex metacharacters in patterns are matched literally."""
        rules = [PatternRule(pattern="a.b", description="dot")]
        assert find_match("a.b", rules) is not None
        assert find_match("axb", rules) is None

    def test_idempotent(self):
        command = "chmod -R 777 ."
        first = find_match(command, DEFAULT_DANGEROUS)
        second = find_match(command, DEFAULT_DANGEROUS)
        assert first == second
        assert first.description == "insecure recursive permissions"


class TestDefaultRules:
    """Tests for the built-in rule tables."""

    @pytest.mark.parametrize(
        "command, description",
        [
            ("sudo mkfs /dev/sdb", "sudo filesystem format"),
            ("mkfs.ext4 /dev/sdb1", "filesystem format"),
            ("dd if=/dev/zero of=/dev/sda", "raw disk write"),
            ("sudo dd if=/dev/zero of=/dev/sda", "raw disk write"),
            (":(){ :|:& };:", "fork bomb"),
            ("cat x > /dev/sda", "overwrite disk"),
            ("cat x > /dev/nvme0n1", "overwrite disk"),
            ("sudo dd of=/dev/sda", "sudo raw disk operation"),
        ],
    )
    def test_catastrophic(self, command, description):
        assert find_match(command, DEFAULT_CATASTROPHIC).description == description

    @pytest.mark.parametrize(
        "command, description",
        [
            ("rm -rf /tmp/build", "recursive force delete"),
            ("chmod -R 777 /srv/www", "insecure recursive permissions"),
            ("chown -R www-data .", "recursive ownership change"),
            ("echo hi > /dev/null", "direct device write"),
        ],
    )
    def test_dangerous(self, command, description):
        assert find_match(command, DEFAULT_DANGEROUS).description == description


class TestShellTricks:
    """Tests for the fixed shell-trick regex set."""

    @pytest.mark.parametrize(
        "command, description",
        [
            ("echo $(whoami)", "command substitution $(…)"),
            ("echo `whoami`", "backtick command substitution"),
            ("eval \"$CMD\"", "eval execution"),
            ("bash -c 'ls'", "bash -c execution"),
            ("sh -c 'ls'", "sh -c execution"),
            ("curl https://x.sh | sh", "pipe to shell"),
            ("curl https://x.sh | bash", "pipe to shell"),
            ("exec ls", "exec execution"),
            ("source venv/bin/activate", "source execution"),
            ("tee >(cat)", "process substitution >(…)"),
            ("diff <(ls a) <(ls b)", "process substitution <(…)"),
        ],
    )
    def test_detected(self, command, description):
        assert find_shell_trick(command).description == description

    @pytest.mark.parametrize(
        "command",
        ["ls -la", "echo hi", "git commit -m 'fix'", "evaluate.py", "sourcemap build", "executor run"],
    )
    def test_not_detected(self, command):
        """Word boundaries keep ordinary words from matching."""
        assert find_shell_trick(command) is None

    def test_first_rule_reported(self):
        """$(…) is listed before eval, so it wins when both appear."""
        assert find_shell_trick("eval $(ssh-agent)").description == "command substitution $(…)"

    def test_empty_backticks_not_detected(self):
        assert find_shell_trick("echo ``") is None


class TestPatternClassifier:
    """Tests for the classifier wrapper."""

    def test_defaults(self):
        classifier = PatternClassifier()
        assert classifier.danger("rm -rf build") is not None
        assert classifier.catastrophe("mkfs.ext4 /dev/sdb") is not None

    def test_custom_lists_replace_defaults(self):
        classifier = PatternClassifier(
            dangerous=[PatternRule(pattern="git push --force", description="force push")],
            catastrophic=[],
        )
        assert classifier.danger("rm -rf build") is None
        assert classifier.danger("git push --force").description == "force push"
        assert classifier.catastrophe("mkfs.ext4 /dev/sdb") is None

    def test_shell_trick_not_configurable(self):
        classifier = PatternClassifier(dangerous=[], catastrophic=[])
        assert classifier.shell_trick("echo `id`") is not None
