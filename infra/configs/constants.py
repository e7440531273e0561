"""
Infrastructure constants for the Medusa ECS stack.

Contains CIDR blocks, task sizing, ports, and default configurations.
"""

from typing import Final

# VPC Configuration
VPC_CIDR: Final[str] = "10.0.0.0/16"

# Subnets are carved as cidrsubnet(VPC_CIDR, SUBNET_NEWBITS, index + 1)
SUBNET_NEWBITS: Final[int] = 8
SUBNET_COUNT: Final[int] = 2

# Region the stack and pipeline target by default
DEFAULT_REGION: Final[str] = "us-east-1"

# Availability zones (us-east-1)
AVAILABILITY_ZONES: Final[list[str]] = [
    "us-east-1a",
    "us-east-1b",
]

# Fargate task sizing (CPU units, memory MiB)
TASK_DEFAULTS: Final[dict[str, int]] = {
    "cpu": 256,
    "memory": 512,
    "desired_count": 1,
}

# Valid Fargate memory sizes (MiB) per CPU value
FARGATE_MEMORY_BY_CPU: Final[dict[int, tuple[int, ...]]] = {
    256: (512, 1024, 2048),
    512: tuple(range(1024, 4097, 1024)),
    1024: tuple(range(2048, 8193, 1024)),
    2048: tuple(range(4096, 16385, 1024)),
    4096: tuple(range(8192, 30721, 1024)),
}

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "container": 8080,
}

# Container settings
CONTAINER_NAME: Final[str] = "medusa"
DEFAULT_IMAGE_TAG: Final[str] = "latest"
HEALTH_CHECK_PATH: Final[str] = "/health"

# Managed policy attached to the task execution role
ECS_TASK_EXECUTION_POLICY_ARN: Final[str] = (
    "arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
)

# CloudWatch log retention for container logs
LOG_RETENTION_DAYS: Final[int] = 14

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "medusa",
    "ManagedBy": "pulumi",
}
