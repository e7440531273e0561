"""
The deployment pipeline's fixed step sequence.

checkout -> registry-login -> build -> tag -> push -> deploy

Each step is one external command or API call. Values a later step needs
(commit, image names, task definition ARN) are recorded on a
DeploymentContext as earlier steps produce them.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from deploy.commands import CommandRunner
from deploy.configs.settings import PipelineSettings
from deploy.ecs_deployer import EcsDeployer
from deploy.pipeline import Pipeline, Step
from deploy.registry import EcrRegistry

logger = logging.getLogger(__name__)

STEP_ORDER: tuple[str, ...] = (
    "checkout",
    "registry-login",
    "build",
    "tag",
    "push",
    "deploy",
)


@dataclass
class DeploymentContext:
    """Values produced while the pipeline runs."""
    commit_sha: str | None = None
    registry_endpoint: str | None = None
    local_image: str | None = None
    remote_image: str | None = None
    task_definition_arn: str | None = None


class DeploymentSteps:
    """Binds pipeline settings to the six deployment steps."""

    def __init__(
        self,
        settings: PipelineSettings,
        runner: CommandRunner | None = None,
        registry: EcrRegistry | None = None,
        deployer: EcsDeployer | None = None,
    ) -> None:
        """
        Initialize steps.

        Args:
            settings: Pipeline settings
            runner: Command runner for git and docker
            registry: ECR login helper
            deployer: ECS deployer
        """
        self.settings = settings
        self.workdir = Path(settings.source.directory)
        self.runner = runner or CommandRunner(cwd=self.workdir)
        self.registry = registry or EcrRegistry(settings.registry.region, self.runner)
        self.deployer = deployer or EcsDeployer(
            settings.registry.region,
            poll_interval_seconds=settings.ecs.poll_interval_seconds,
        )
        self.context = DeploymentContext()

    @property
    def local_image(self) -> str:
        return f"{self.settings.registry.ecr_repository}:{self.settings.source.image_tag}"

    @property
    def remote_image(self) -> str:
        return self.settings.registry.image_uri(self.settings.source.image_tag)

    def task_definition_reference(self) -> str:
        """Task definition file inside the checkout, or the family/ARN as configured."""
        reference = self.settings.ecs.task_definition
        candidate = self.workdir / reference
        if candidate.is_file():
            return str(candidate)
        return reference

    def checkout(self) -> None:
        """Fetch the pushed ref and force the working tree onto it."""
        source = self.settings.source
        self.runner.run(["git", "fetch", "--depth", "1", source.remote, source.ref])
        self.runner.run(["git", "checkout", "--force", "FETCH_HEAD"])
        self.context.commit_sha = self.runner.run(["git", "rev-parse", "HEAD"]).stdout.strip()
        logger.info(f"Checked out {source.ref} at {self.context.commit_sha}")

    def registry_login(self) -> None:
        """Authenticate docker to ECR."""
        self.context.registry_endpoint = self.registry.login()

    def build(self) -> None:
        """Build the image from the configured context."""
        self.runner.run(["docker", "build", "-t", self.local_image, self.settings.source.build_context])
        self.context.local_image = self.local_image

    def tag(self) -> None:
        """Tag the local image with its registry-qualified name."""
        self.runner.run(["docker", "tag", self.local_image, self.remote_image])
        self.context.remote_image = self.remote_image

    def push(self) -> None:
        """Push the registry-qualified image."""
        self.runner.run(["docker", "push", self.remote_image])
        logger.info(f"Pushed {self.remote_image}")

    def deploy(self) -> None:
        """Roll the ECS service onto the pushed image."""
        ecs = self.settings.ecs
        self.context.task_definition_arn = self.deployer.deploy(
            task_definition=self.task_definition_reference(),
            cluster=ecs.cluster,
            service=ecs.service,
            image=self.remote_image,
            container_name=ecs.container_name,
            wait_for_stability=ecs.wait_for_stability,
            timeout_seconds=ecs.stability_timeout_seconds,
        )

    def pipeline(self) -> Pipeline:
        """Assemble the steps in their fixed order."""
        registry = self.settings.registry
        ecs = self.settings.ecs
        return Pipeline([
            Step("checkout", self.checkout, f"fetch {self.settings.source.ref}"),
            Step("registry-login", self.registry_login, f"docker login {registry.registry}"),
            Step("build", self.build, f"docker build {self.local_image}"),
            Step("tag", self.tag, f"docker tag {self.remote_image}"),
            Step("push", self.push, f"docker push {self.remote_image}"),
            Step("deploy", self.deploy, f"update {ecs.service} in {ecs.cluster}"),
        ])


def build_pipeline(
    settings: PipelineSettings,
    runner: CommandRunner | None = None,
    registry: EcrRegistry | None = None,
    deployer: EcsDeployer | None = None,
) -> Pipeline:
    """Build the deployment pipeline for a settings object."""
    return DeploymentSteps(settings, runner, registry, deployer).pipeline()
