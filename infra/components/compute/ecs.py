"""
ECS Component for the Medusa container service.

Resources:
1. Cluster: logical grouping of tasks, no structural dependencies.
2. Log Group: container stdout/stderr via the awslogs driver.
3. Task Definition: immutable, versioned runtime spec of the single
   container (image, CPU/memory quota, 1:1 port binding). Fargate with
   awsvpc networking.
4. Service: keeps `desired_count` tasks of the definition running in the
   cluster, in the given subnets and security group, registered into the
   target group.

The deployment pipeline registers new task definition revisions and
points the service at them outside of Pulumi. The service therefore
ignores drift on `task_definition` so `pulumi up` does not roll it back
to the revision declared here.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.configs.constants import LOG_RETENTION_DAYS
from infra.utils.tags import create_tags


@dataclass
class EcsOutputs:
    """Output values from ECS component."""
    cluster_name: pulumi.Output[str]
    cluster_arn: pulumi.Output[str]
    task_definition_arn: pulumi.Output[str]
    task_definition_family: pulumi.Output[str]
    service_name: pulumi.Output[str]
    log_group_name: pulumi.Output[str]


class EcsComponent(pulumi.ComponentResource):
    """ECS cluster, task definition and Fargate service."""

    def __init__(
        self,
        name: str,
        environment: str,
        region: str,
        cluster_name: str,
        service_name: str,
        family: str,
        container_name: str,
        image: pulumi.Input[str],
        cpu: int,
        memory: int,
        container_port: int,
        desired_count: int,
        execution_role_arn: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        target_group_arn: pulumi.Input[str],
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Ecs", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            name=cluster_name,
            settings=[
                aws.ecs.ClusterSettingArgs(
                    name="containerInsights",
                    value="enabled",
                ),
            ],
            tags=create_tags(environment, cluster_name, component="compute"),
            opts=child_opts,
        )

        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=f"/ecs/{family}",
            retention_in_days=LOG_RETENTION_DAYS,
            tags=create_tags(environment, f"{name}-logs", component="compute"),
            opts=child_opts,
        )

        container_definitions = pulumi.Output.json_dumps([{
            "name": container_name,
            "image": image,
            "essential": True,
            "portMappings": [{
                "containerPort": container_port,
                "hostPort": container_port,
                "protocol": "tcp",
            }],
            "logConfiguration": {
                "logDriver": "awslogs",
                "options": {
                    "awslogs-group": self.log_group.name,
                    "awslogs-region": region,
                    "awslogs-stream-prefix": container_name,
                },
            },
        }])

        self.task_definition = aws.ecs.TaskDefinition(
            f"{name}-task",
            family=family,
            cpu=str(cpu),
            memory=str(memory),
            network_mode="awsvpc",
            requires_compatibilities=["FARGATE"],
            execution_role_arn=execution_role_arn,
            container_definitions=container_definitions,
            tags=create_tags(environment, family, component="compute"),
            opts=child_opts,
        )

        self.service = aws.ecs.Service(
            f"{name}-service",
            name=service_name,
            cluster=self.cluster.arn,
            task_definition=self.task_definition.arn,
            desired_count=desired_count,
            launch_type="FARGATE",
            network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
                subnets=subnet_ids,
                security_groups=[security_group_id],
                assign_public_ip=True,
            ),
            load_balancers=[
                aws.ecs.ServiceLoadBalancerArgs(
                    target_group_arn=target_group_arn,
                    container_name=container_name,
                    container_port=container_port,
                ),
            ],
            tags=create_tags(environment, service_name, component="compute"),
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=depends_on or [],
                ignore_changes=["task_definition"],
            ),
        )

        self.register_outputs({
            "cluster_name": self.cluster.name,
            "cluster_arn": self.cluster.arn,
            "task_definition_arn": self.task_definition.arn,
            "task_definition_family": self.task_definition.family,
            "service_name": self.service.name,
            "log_group_name": self.log_group.name,
        })

    def get_outputs(self) -> EcsOutputs:
        """Get ECS output values."""
        return EcsOutputs(
            cluster_name=self.cluster.name,
            cluster_arn=self.cluster.arn,
            task_definition_arn=self.task_definition.arn,
            task_definition_family=self.task_definition.family,
            service_name=self.service.name,
            log_group_name=self.log_group.name,
        )
