"""Tests for critical recursive-delete detection."""

import pytest

from core.permissions import CRITICAL_DIRS, check_critical_rm_rf

HOME = "/home/tester"


class TestCriticalTargets:
    """rm -rf against root, critical directories and home."""

    @pytest.mark.parametrize("command", ["rm -rf /", "rm -rf /*", "rm -rf //", "rm -fr /"])
    def test_root(self, command):
        """Root in any spelling is catastrophic."""
        assert check_critical_rm_rf(command, HOME) == "rm -rf / — recursive delete root"

    @pytest.mark.parametrize("directory", [d for d in CRITICAL_DIRS if d != "/"])
    def test_critical_directories(self, directory):
        """Each critical directory is blocked on exact match."""
        result = check_critical_rm_rf(f"rm -rf {directory}", HOME)
        assert result == f"rm -rf {directory} — recursive delete critical system directory"

    def test_trailing_slash_is_normalized(self):
        """/etc/ is the same as /etc."""
        assert "/etc" in check_critical_rm_rf("rm -rf /etc/", HOME)

    @pytest.mark.parametrize("target", ["~", "~/", "/home/tester", "/home/tester/"])
    def test_home_directory(self, target):
        """The whole home directory is catastrophic."""
        result = check_critical_rm_rf(f"rm -rf {target}", HOME)
        assert result == "rm -rf ~ — recursive delete entire home directory"

    @pytest.mark.parametrize("target", ["~/.", "~/./", "~/x/.."])
    def test_home_relative_dots_collapse_to_home(self, target):
        result = check_critical_rm_rf(f"rm -rf {target}", HOME)
        assert result == "rm -rf ~ — recursive delete entire home directory"

    def test_home_parent_is_critical(self):
        result = check_critical_rm_rf("rm -rf ~/..", HOME)
        assert result == "rm -rf /home — recursive delete critical system directory"


class TestFlagVariants:
    """Recursive and force flags in any order or split."""

    @pytest.mark.parametrize(
        "command",
        [
            "rm -rf /usr",
            "rm -fr /usr",
            "rm -rfi /usr",
            "rm -Rf /usr",
            "rm -r -f /usr",
            "rm -f -r /usr",
            "rm -rf --no-preserve-root /usr",
        ],
    )
    def test_variants_detected(self, command):
        assert check_critical_rm_rf(command, HOME) is not None

    @pytest.mark.parametrize("command", ["rm -r /usr", "rm -f /usr", "rm /usr", "rmdir /usr"])
    def test_missing_flag_not_detected(self, command):
        """Both recursive and force are required."""
        assert check_critical_rm_rf(command, HOME) is None


class TestSafeTargets:
    """Deletes that must stay possible."""

    @pytest.mark.parametrize(
        "command",
        [
            "rm -rf ./build",
            "rm -rf node_modules",
            "rm -rf build dist",
            "rm -rf /tmp/build",
            "rm -rf /home/tester/project/build",
            "rm -rf ~/project/cache",
            "rm -rf /etc/nginx/conf.d",
        ],
    )
    def test_not_catastrophic(self, command):
        """Relative paths and paths below a critical directory are fine."""
        assert check_critical_rm_rf(command, HOME) is None

    def test_unrelated_command(self):
        assert check_critical_rm_rf("ls -la /", HOME) is None

    def test_empty_command(self):
        assert check_critical_rm_rf("", HOME) is None


class TestSudo:
    """sudo prefix handling."""

    def test_sudo_root(self):
        result = check_critical_rm_rf("sudo rm -rf /", HOME)
        assert result == "sudo rm -rf / — recursive delete root"

    def test_sudo_critical_dir(self):
        result = check_critical_rm_rf("sudo rm -r -f /var", HOME)
        assert result.startswith("sudo rm -rf /var")

    def test_sudo_safe_target(self):
        assert check_critical_rm_rf("sudo rm -rf ./build", HOME) is None

    def test_double_sudo_terminates(self):
        """Only one prefix is stripped; the rest still matches rm."""
        result = check_critical_rm_rf("sudo sudo rm -rf /", HOME)
        assert result is not None
        assert result.startswith("sudo ")

    def test_sudo_elsewhere_not_reported(self):
        """A sudo that does not run the rm leaves the description unprefixed."""
        result = check_critical_rm_rf("rm -rf /etc && sudo ls", HOME)
        assert result == "rm -rf /etc — recursive delete critical system directory"


class TestIdempotence:
    def test_same_result_twice(self):
        command = "rm -rf /etc"
        assert check_critical_rm_rf(command, HOME) == check_critical_rm_rf(command, HOME)
