"""
Networking components for VPC infrastructure.

Components:
- VpcComponent: VPC with public subnets, internet gateway, route table
- SecurityGroupsComponent: Security group shared by load balancer and tasks
"""

from infra.components.networking.vpc import VpcComponent, VpcOutputs
from infra.components.networking.security_groups import SecurityGroupsComponent, SecurityGroupOutputs

__all__ = [
    "VpcComponent",
    "VpcOutputs",
    "SecurityGroupsComponent",
    "SecurityGroupOutputs",
]
