"""
Unit tests for the external command runner.

Dependencies: pytest, unittest.mock
System role: Process boundary validation
"""

import subprocess
from unittest.mock import patch

import pytest

from deploy.commands import CommandRunner
from deploy.exceptions import CommandError


class TestCommandRunner:
    """Test suite for CommandRunner.run."""

    @patch("deploy.commands.subprocess.run")
    def test_success_returns_output(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(
            args=["git", "rev-parse", "HEAD"], returncode=0, stdout="abc123\n", stderr=""
        )

        result = CommandRunner(cwd="/src").run(["git", "rev-parse", "HEAD"])

        assert result.stdout == "abc123\n"
        assert result.returncode == 0
        mock_run.assert_called_once_with(
            ["git", "rev-parse", "HEAD"],
            input=None,
            cwd="/src",
            check=True,
            capture_output=True,
            text=True,
        )

    @patch("deploy.commands.subprocess.run")
    def test_cwd_override(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

        CommandRunner(cwd="/src").run(["docker", "build", "."], cwd="/other")

        assert mock_run.call_args.kwargs["cwd"] == "/other"

    @patch("deploy.commands.subprocess.run")
    def test_non_zero_exit_raises(self, mock_run):
        """
        Test a failing command surfaces as CommandError.

        Arrange: subprocess.run raising CalledProcessError
        Act: run()
        Assert: CommandError carries the exit code and last stderr line
        """
        # Arrange
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["docker", "push", "img"], output="", stderr="retrying\ndenied: not authorized\n"
        )

        # Act
        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run(["docker", "push", "img"])

        # Assert
        assert exc_info.value.returncode == 1
        assert exc_info.value.args_list == ["docker", "push", "img"]
        assert "denied: not authorized" in exc_info.value.message
        assert "retrying" not in exc_info.value.message

    @patch("deploy.commands.subprocess.run")
    def test_missing_program(self, mock_run):
        mock_run.side_effect = FileNotFoundError("docker")

        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run(["docker", "version"])

        assert exc_info.value.returncode == 127

    @patch("deploy.commands.subprocess.run")
    def test_stdin_input_passed_through(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")

        CommandRunner().run(["docker", "login", "--password-stdin", "host"], input="secret")

        assert mock_run.call_args.kwargs["input"] == "secret"
