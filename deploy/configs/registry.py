"""
Image registry configuration.

Env var names match the CI secrets: AWS_ECR_REPOSITORY, AWS_ACCOUNT_ID,
AWS_REGION.

Dependencies: pydantic_settings
System role: ECR registry configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from deploy.configs.base import PipelineBaseSettings


class RegistrySettings(PipelineBaseSettings):
    """Settings for the ECR registry the image is pushed to."""

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
    )

    ecr_repository: str = Field(
        description="ECR repository name (also the local image name)",
    )
    account_id: str = Field(
        description="AWS account that owns the registry",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region of the registry and the ECS service",
    )

    @property
    def registry(self) -> str:
        """Registry host: <account>.dkr.ecr.<region>.amazonaws.com"""
        return f"{self.account_id}.dkr.ecr.{self.region}.amazonaws.com"

    def image_uri(self, tag: str) -> str:
        """Registry-qualified image name for a tag."""
        return f"{self.registry}/{self.ecr_repository}:{tag}"
