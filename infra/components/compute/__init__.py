"""
Compute components for the container service.

Components:
- EcsComponent: ECS cluster, task definition and Fargate service
- AlbComponent: Application Load Balancer, listener and IP target group
"""

from infra.components.compute.ecs import EcsComponent, EcsOutputs
from infra.components.compute.alb import AlbComponent, AlbOutputs

__all__ = [
    "EcsComponent",
    "EcsOutputs",
    "AlbComponent",
    "AlbOutputs",
]
