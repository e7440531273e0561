"""
Shared behaviour of the pipeline settings groups.

Each group reads its CI secrets from the environment under its own
prefix. A local .env file fills the same names when the pipeline is run
by hand outside CI.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineBaseSettings(BaseSettings):
    """Environment-backed settings group; subclasses set `env_prefix`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
