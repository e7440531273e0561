"""
Security Group Component for Network Access Control.

One group is shared by the load balancer and the Fargate tasks:
1. Ingress on the listener port (HTTP 80) from anywhere: public entry.
2. Ingress on the container port (8080) from the group itself: the
   load balancer reaches task ENIs, nothing else does.
3. Egress open: tasks pull images and call external APIs.

Security groups are stateful, so replies to allowed inbound traffic
need no extra rule.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.configs.constants import PORTS
from infra.utils.tags import create_tags


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    service_sg_id: pulumi.Output[str]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """Security group attached to the load balancer and the service tasks."""

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        listener_port: int = PORTS["http"],
        container_port: int = PORTS["container"],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        self.service_sg = aws.ec2.SecurityGroup(
            f"{name}-sg",
            description="Load balancer and ECS tasks",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-sg", component="networking"),
            opts=child_opts,
        )

        self._create_rules(name, listener_port, container_port, child_opts)

        self.register_outputs({
            "service_sg_id": self.service_sg.id,
        })

    def _create_rules(
        self,
        name: str,
        listener_port: int,
        container_port: int,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create security group rules."""
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-ingress-http",
            security_group_id=self.service_sg.id,
            ip_protocol="tcp",
            from_port=listener_port,
            to_port=listener_port,
            cidr_ipv4="0.0.0.0/0",
            description="HTTP from anywhere",
            opts=opts,
        )

        aws.vpc.SecurityGroupIngressRule(
            f"{name}-ingress-container",
            security_group_id=self.service_sg.id,
            ip_protocol="tcp",
            from_port=container_port,
            to_port=container_port,
            referenced_security_group_id=self.service_sg.id,
            description="Load balancer to tasks (self-reference)",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-egress-all",
            security_group_id=self.service_sg.id,
            ip_protocol="-1",
            cidr_ipv4="0.0.0.0/0",
            description="All outbound traffic",
            opts=opts,
        )

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            service_sg_id=self.service_sg.id,
        )
