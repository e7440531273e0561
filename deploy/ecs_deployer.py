"""
ECS service deployment.

Renders a task definition with the freshly pushed image, registers it as
a new revision, points the service at it, and optionally blocks until
the service is stable or the bounded wait runs out.

No rollback: if the service never stabilizes the deployment fails and
the previous revision stays registered for an operator to restore.

Dependencies: boto3
System role: Deploy step of the pipeline
"""

import copy
import json
import logging
import math
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from deploy.exceptions import DeploymentError, DeploymentTimeoutError

logger = logging.getLogger(__name__)

# Returned by describe_task_definition but rejected by register_task_definition
READ_ONLY_FIELDS = (
    "taskDefinitionArn",
    "revision",
    "status",
    "requiresAttributes",
    "compatibilities",
    "registeredAt",
    "registeredBy",
    "deregisteredAt",
)

# botocore WaiterError reason when the attempt budget runs out
MAX_ATTEMPTS_REASON = "Max attempts exceeded"


def render_task_definition(
    task_definition: dict[str, Any],
    image: str,
    container_name: str | None = None,
) -> dict[str, Any]:
    """
    Return a copy of a task definition with one container's image replaced.

    Args:
        task_definition: Registerable task definition
        image: New image URI
        container_name: Container to update; may be omitted when there is exactly one

    Returns:
        dict: Updated task definition (input is left untouched)

    Raises:
        DeploymentError: If the container cannot be identified
    """
    rendered = copy.deepcopy(task_definition)
    containers = rendered.get("containerDefinitions") or []

    if container_name is None:
        if len(containers) != 1:
            raise DeploymentError(
                f"Task definition has {len(containers)} containers; a container name is required"
            )
        target = containers[0]
    else:
        matches = [c for c in containers if c.get("name") == container_name]
        if not matches:
            raise DeploymentError(f"Container '{container_name}' not found in task definition")
        target = matches[0]

    target["image"] = image
    return rendered


class EcsDeployer:
    """Registers task definition revisions and rolls the service onto them."""

    def __init__(
        self,
        region: str,
        client=None,
        poll_interval_seconds: int = 15,
    ) -> None:
        """
        Initialize deployer.

        Args:
            region: AWS region of the cluster
            client: Pre-built boto3 ECS client (tests)
            poll_interval_seconds: Delay between stability checks
        """
        self._client = client or boto3.client("ecs", region_name=region)
        self._poll_interval = poll_interval_seconds

    def load_task_definition(self, reference: str) -> dict[str, Any]:
        """
        Load a registerable task definition.

        Args:
            reference: Path to a JSON file, or a family, family:revision or ARN

        Returns:
            dict: Task definition without read-only fields

        Raises:
            DeploymentError: If the file is unreadable or the definition cannot be described
        """
        path = Path(reference)
        if path.suffix == ".json" or path.is_file():
            try:
                task_definition = json.loads(path.read_text())
            except (OSError, json.JSONDecodeError) as e:
                raise DeploymentError(f"Cannot read task definition {reference}: {e}") from e
            # Accept raw describe-task-definition output as well
            task_definition = task_definition.get("taskDefinition", task_definition)
        else:
            try:
                response = self._client.describe_task_definition(taskDefinition=reference)
            except (ClientError, BotoCoreError) as e:
                raise DeploymentError(f"Cannot describe task definition {reference}: {e}") from e
            task_definition = response["taskDefinition"]

        return {
            key: value for key, value in task_definition.items()
            if key not in READ_ONLY_FIELDS and value is not None
        }

    def register(self, task_definition: dict[str, Any]) -> str:
        """Register a task definition revision and return its ARN."""
        try:
            response = self._client.register_task_definition(**task_definition)
        except (ClientError, BotoCoreError) as e:
            raise DeploymentError(f"Failed to register task definition: {e}") from e

        arn = response["taskDefinition"]["taskDefinitionArn"]
        logger.info(f"Registered task definition: {arn}")
        return arn

    def update_service(self, cluster: str, service: str, task_definition_arn: str) -> None:
        """Point a service at a task definition revision."""
        try:
            self._client.update_service(
                cluster=cluster,
                service=service,
                taskDefinition=task_definition_arn,
            )
        except (ClientError, BotoCoreError) as e:
            raise DeploymentError(f"Failed to update service {service} in {cluster}: {e}") from e

        logger.info(f"Updated service {service} in {cluster} to {task_definition_arn}")

    def wait_for_stability(self, cluster: str, service: str, timeout_seconds: int) -> None:
        """
        Block until the service is stable.

        Args:
            cluster: Cluster name or ARN
            service: Service name or ARN
            timeout_seconds: Upper bound on the wait

        Raises:
            DeploymentTimeoutError: If the service is not stable in time
            DeploymentError: If the service reaches a failure state (MISSING, INACTIVE, DRAINING)
        """
        max_attempts = max(1, math.ceil(timeout_seconds / self._poll_interval))
        logger.info(
            f"Waiting up to {timeout_seconds}s for {service} to become stable "
            f"({max_attempts} checks every {self._poll_interval}s)"
        )

        waiter = self._client.get_waiter("services_stable")
        try:
            waiter.wait(
                cluster=cluster,
                services=[service],
                WaiterConfig={"Delay": self._poll_interval, "MaxAttempts": max_attempts},
            )
        except WaiterError as e:
            if MAX_ATTEMPTS_REASON in str(e.kwargs.get("reason", "")):
                raise DeploymentTimeoutError(
                    f"Service {service} did not stabilize within {timeout_seconds}s: {e}"
                ) from e
            raise DeploymentError(f"Service {service} reached a failure state: {e}") from e

        logger.info(f"✓ Service {service} is stable")

    def deploy(
        self,
        task_definition: str,
        cluster: str,
        service: str,
        image: str,
        container_name: str | None = None,
        wait_for_stability: bool = True,
        timeout_seconds: int = 1800,
    ) -> str:
        """
        Roll a service onto a new image.

        Args:
            task_definition: Task definition reference (file, family or ARN)
            cluster: Cluster name
            service: Service name
            image: Image URI to run
            container_name: Container to update
            wait_for_stability: Block until stable
            timeout_seconds: Bound on the stability wait

        Returns:
            str: ARN of the registered task definition revision
        """
        rendered = render_task_definition(
            self.load_task_definition(task_definition),
            image=image,
            container_name=container_name,
        )
        arn = self.register(rendered)
        self.update_service(cluster, service, arn)

        if wait_for_stability:
            self.wait_for_stability(cluster, service, timeout_seconds)

        return arn
