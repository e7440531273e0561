"""
ECS deployment target configuration.

Env var names match the CI secrets: ECS_TASK_DEFINITION, ECS_SERVICE,
ECS_CLUSTER.

Dependencies: pydantic_settings
System role: ECS service update configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from deploy.configs.base import PipelineBaseSettings


class EcsSettings(PipelineBaseSettings):
    """Settings for the ECS service update."""

    model_config = SettingsConfigDict(
        env_prefix="ECS_",
    )

    task_definition: str = Field(
        description="Task definition JSON file path, family, family:revision or ARN",
    )
    service: str = Field(
        description="ECS service to update",
    )
    cluster: str = Field(
        description="ECS cluster the service runs in",
    )
    container_name: str | None = Field(
        default=None,
        description="Container whose image is replaced (defaults to the only container)",
    )
    wait_for_stability: bool = Field(
        default=True,
        description="Block until the service reaches a steady state",
    )
    stability_timeout_seconds: int = Field(
        default=1800,
        gt=0,
        description="Upper bound on the stability wait (default 30 minutes)",
    )
    poll_interval_seconds: int = Field(
        default=15,
        gt=0,
        description="Delay between stability checks",
    )
