"""
Unified pipeline settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the pipeline
"""

from functools import lru_cache

from pydantic import Field, ValidationError

from deploy.configs.base import PipelineBaseSettings
from deploy.configs.ecs import EcsSettings
from deploy.configs.registry import RegistrySettings
from deploy.configs.source import SourceSettings
from deploy.exceptions import ConfigurationError


class PipelineSettings(PipelineBaseSettings):
    """Unified pipeline settings aggregating all config modules."""

    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    ecs: EcsSettings = Field(default_factory=EcsSettings)
    source: SourceSettings = Field(default_factory=SourceSettings)


@lru_cache
def get_settings() -> PipelineSettings:
    """
    Get pipeline settings singleton.

    Environment variables are read once per process.

    Returns:
        PipelineSettings: Pipeline settings instance

    Raises:
        ConfigurationError: If a required secret is not set
    """
    try:
        return PipelineSettings()
    except ValidationError as e:
        missing = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in e.errors()
        )
        raise ConfigurationError(f"Invalid pipeline settings: {missing}") from e
