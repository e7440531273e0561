"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from infra.configs.base import StackConfig
from infra.configs.constants import (
    VPC_CIDR,
    SUBNET_NEWBITS,
    DEFAULT_TAGS,
    PORTS,
    TASK_DEFAULTS,
)

__all__ = [
    "StackConfig",
    "VPC_CIDR",
    "SUBNET_NEWBITS",
    "DEFAULT_TAGS",
    "PORTS",
    "TASK_DEFAULTS",
]
