"""
Storage components for container images.

Components:
- EcrRepositoryComponent: ECR repository for the service image
"""

from infra.components.storage.ecr_repository import EcrRepositoryComponent, EcrRepositoryOutputs

__all__ = [
    "EcrRepositoryComponent",
    "EcrRepositoryOutputs",
]
