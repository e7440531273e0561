"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules map environment variables (the CI secrets) with validation.
"""

from deploy.configs.ecs import EcsSettings
from deploy.configs.registry import RegistrySettings
from deploy.configs.settings import PipelineSettings, get_settings
from deploy.configs.source import SourceSettings

__all__ = [
    "EcsSettings",
    "RegistrySettings",
    "PipelineSettings",
    "SourceSettings",
    "get_settings",
]
