"""
Fixtures for deployment pipeline tests.

Provides: pipeline env vars, a recording command runner, mocked registry and deployer
Dependencies: pytest, unittest.mock
"""

from unittest.mock import MagicMock

import pytest

from deploy.commands import CommandResult
from deploy.exceptions import CommandError


class RecordingRunner:
    """Command runner double: records every command, fails on request."""

    def __init__(self, stdout: dict[str, str] | None = None, fail_on: str | None = None):
        self.commands: list[list[str]] = []
        self.inputs: list[str | None] = []
        self._stdout = stdout or {}
        self._fail_on = fail_on

    def run(self, args, input=None, cwd=None):
        args = [str(a) for a in args]
        self.commands.append(args)
        self.inputs.append(input)
        joined = " ".join(args)
        if self._fail_on and joined.startswith(self._fail_on):
            raise CommandError(args, 1, f"{args[0]}: simulated failure")
        stdout = next((out for prefix, out in self._stdout.items() if joined.startswith(prefix)), "")
        return CommandResult(args=tuple(args), returncode=0, stdout=stdout, stderr="")


@pytest.fixture
def pipeline_env(monkeypatch):
    """Set the six pipeline secrets."""
    values = {
        "AWS_ECR_REPOSITORY": "medusa",
        "AWS_ACCOUNT_ID": "123456789012",
        "AWS_REGION": "us-east-1",
        "ECS_TASK_DEFINITION": "medusa-dev-task",
        "ECS_SERVICE": "medusa-dev-service",
        "ECS_CLUSTER": "medusa-dev-cluster",
    }
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture
def settings(pipeline_env):
    """Pipeline settings loaded from the test environment."""
    from deploy.configs.settings import PipelineSettings

    return PipelineSettings()


@pytest.fixture
def runner():
    """Runner that succeeds and reports a fixed commit."""
    return RecordingRunner(stdout={"git rev-parse": "abc123\n"})


@pytest.fixture
def registry():
    """ECR registry double."""
    mock = MagicMock()
    mock.login.return_value = "https://123456789012.dkr.ecr.us-east-1.amazonaws.com"
    return mock


@pytest.fixture
def deployer():
    """ECS deployer double."""
    mock = MagicMock()
    mock.deploy.return_value = "arn:aws:ecs:us-east-1:123456789012:task-definition/medusa-dev-task:2"
    return mock


@pytest.fixture
def runner_factory():
    """Build a RecordingRunner with custom stdout or a failing command."""
    return RecordingRunner
