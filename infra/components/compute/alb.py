"""
Application Load Balancer Component for Service Traffic Distribution.

The 3-Resource Chain:
1. Load Balancer: internet-facing, spans every public subnet, has the DNS name.
2. Listener: binds port 80 over HTTP. Its only action forwards to the
   target group; without it the ALB ignores all traffic.
3. Target Group: port 8080, target type `ip`. Fargate tasks in awsvpc
   mode get their own ENI, so they register by IP, not by instance.

The ECS service registers its tasks into the target group; the service
must not be created before the listener attaches the group to the ALB.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.configs.constants import HEALTH_CHECK_PATH, PORTS
from infra.utils.tags import create_tags


@dataclass
class AlbOutputs:
    """Output values from ALB component."""
    alb_arn: pulumi.Output[str]
    alb_dns_name: pulumi.Output[str]
    listener_arn: pulumi.Output[str]
    target_group_arn: pulumi.Output[str]


class AlbComponent(pulumi.ComponentResource):
    """Internet-facing Application Load Balancer in front of the ECS service."""

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        load_balancer_name: str,
        target_group_name: str,
        listener_port: int = PORTS["http"],
        target_port: int = PORTS["container"],
        target_type: str = "ip",
        health_check_path: str = HEALTH_CHECK_PATH,
        deletion_protection: bool = False,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Alb", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.alb = aws.lb.LoadBalancer(
            f"{name}-alb",
            name=load_balancer_name,
            internal=False,
            load_balancer_type="application",
            security_groups=[security_group_id],
            subnets=subnet_ids,
            enable_deletion_protection=deletion_protection,
            tags=create_tags(environment, f"{name}-alb", component="compute"),
            opts=child_opts,
        )

        self.target_group = aws.lb.TargetGroup(
            f"{name}-tg",
            name=target_group_name,
            port=target_port,
            protocol="HTTP",
            vpc_id=vpc_id,
            target_type=target_type,
            deregistration_delay=30,
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                enabled=True,
                path=health_check_path,
                port="traffic-port",
                protocol="HTTP",
                healthy_threshold=2,
                unhealthy_threshold=3,
                timeout=5,
                interval=30,
                matcher="200",
            ),
            tags=create_tags(environment, f"{name}-tg", component="compute"),
            opts=child_opts,
        )

        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=self.alb.arn,
            port=listener_port,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                ),
            ],
            tags=create_tags(environment, f"{name}-listener", component="compute"),
            opts=child_opts,
        )

        self.register_outputs({
            "alb_arn": self.alb.arn,
            "alb_dns_name": self.alb.dns_name,
            "listener_arn": self.listener.arn,
            "target_group_arn": self.target_group.arn,
        })

    def get_outputs(self) -> AlbOutputs:
        """Get ALB output values."""
        return AlbOutputs(
            alb_arn=self.alb.arn,
            alb_dns_name=self.alb.dns_name,
            listener_arn=self.listener.arn,
            target_group_arn=self.target_group.arn,
        )
