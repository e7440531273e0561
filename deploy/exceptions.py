"""
Pipeline exceptions.

Every external-call failure surfaces as a PipelineError subclass; the
pipeline wraps the first one in PipelineFailedError and stops.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deploy.pipeline import PipelineRun


class PipelineError(Exception):
    """Base class for deployment pipeline errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(PipelineError):
    """Raised when required pipeline settings are missing or invalid."""
    pass


class CommandError(PipelineError):
    """Raised when an external command exits non-zero or cannot be started."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else "no output"
        super().__init__(f"`{self.args_list[0]}` exited with {returncode}: {detail}")


class RegistryAuthError(PipelineError):
    """Raised when authenticating to the image registry fails."""
    pass


class DeploymentError(PipelineError):
    """Raised when registering the task definition or updating the service fails."""
    pass


class DeploymentTimeoutError(DeploymentError):
    """Raised when the service does not become stable within the bounded wait."""
    pass


class PipelineFailedError(PipelineError):
    """Raised when a step fails; carries the run record with remaining steps skipped."""

    def __init__(self, run: "PipelineRun", step: str, cause: BaseException):
        self.run = run
        self.step = step
        self.cause = cause
        super().__init__(f"Step '{step}' failed: {cause}")
