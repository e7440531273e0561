"""
Naming and tagging helpers shared by the declaration and the components.
"""

from infra.utils.naming import ELB_NAME_MAX_LENGTH, ResourceNamer
from infra.utils.tags import create_tags

__all__ = [
    "ELB_NAME_MAX_LENGTH",
    "ResourceNamer",
    "create_tags",
]
