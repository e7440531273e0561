"""
Stack configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from infra.configs.base import StackConfig
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


def get_config() -> StackConfig:
    """
    Load stack configuration from Pulumi stack config.

    Returns:
        StackConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
    """
    config = pulumi.Config()

    zones = config.get_object("availability_zones") or AVAILABILITY_ZONES

    def get_int(key: str, default: int) -> int:
        # An explicit 0 is kept so that plan-time checks can reject it
        value = config.get_int(key)
        return value if value is not None else default

    return StackConfig(
        environment=config.require("environment"),
        project=config.get("project") or "medusa",
        region=pulumi.Config("aws").get("region") or DEFAULT_REGION,
        vpc_cidr=config.get("vpc_cidr") or VPC_CIDR,
        subnet_count=get_int("subnet_count", SUBNET_COUNT),
        availability_zones=tuple(zones),
        repository_name=config.get("repository_name") or "medusa",
        image_tag=config.get("image_tag") or DEFAULT_IMAGE_TAG,
        container_name=config.get("container_name") or CONTAINER_NAME,
        container_port=get_int("container_port", PORTS["container"]),
        listener_port=get_int("listener_port", PORTS["http"]),
        task_cpu=get_int("task_cpu", TASK_DEFAULTS["cpu"]),
        task_memory=get_int("task_memory", TASK_DEFAULTS["memory"]),
        desired_count=get_int("desired_count", TASK_DEFAULTS["desired_count"]),
    )
