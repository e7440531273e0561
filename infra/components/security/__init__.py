"""
Security components for IAM.

Components:
- IamRolesComponent: Task execution role for ECS
"""

from infra.components.security.iam_roles import IamRolesComponent, IamRoleOutputs

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
]
