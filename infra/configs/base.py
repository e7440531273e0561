"""
Base configuration dataclass for stack settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass, field

from infra.configs.constants import (
    AVAILABILITY_ZONES,
    CONTAINER_NAME,
    DEFAULT_REGION,
    DEFAULT_IMAGE_TAG,
    PORTS,
    SUBNET_COUNT,
    TASK_DEFAULTS,
    VPC_CIDR,
)


@dataclass(frozen=True)
class StackConfig:
    """
    Environment-specific configuration for the ECS stack.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        project: Project identifier used in resource names
        region: AWS region the stack is deployed to
        vpc_cidr: Address block of the network
        subnet_count: Number of subnets to spread tasks and the load balancer over
        availability_zones: Placement zones, assigned to subnets round-robin
        repository_name: Image registry repository name
        image_tag: Image tag the task definition starts from
        container_name: Name of the single container in the task
        container_port: Port the container listens on (bound 1:1)
        listener_port: Load balancer listener port
        task_cpu: Task CPU units
        task_memory: Task memory in MiB
        desired_count: Desired number of running tasks
    """
    environment: str
    project: str = "medusa"
    region: str = DEFAULT_REGION
    vpc_cidr: str = VPC_CIDR
    subnet_count: int = SUBNET_COUNT
    availability_zones: tuple[str, ...] = field(default_factory=lambda: tuple(AVAILABILITY_ZONES))
    repository_name: str = "medusa"
    image_tag: str = DEFAULT_IMAGE_TAG
    container_name: str = CONTAINER_NAME
    container_port: int = PORTS["container"]
    listener_port: int = PORTS["http"]
    task_cpu: int = TASK_DEFAULTS["cpu"]
    task_memory: int = TASK_DEFAULTS["memory"]
    desired_count: int = TASK_DEFAULTS["desired_count"]

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"
