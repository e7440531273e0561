"""
Stack assembly: turns the validated declaration into Pulumi components.

Components are instantiated in dependency order, taking every sized or
addressed value (CIDR blocks, ports, CPU/memory, counts, names) from the
declaration rather than recomputing it:
1. VPC -> Security Group
2. IAM execution role, ECR repository
3. Load balancer chain (ALB -> listener -> target group)
4. ECS cluster, task definition, service (after the listener)
"""

from dataclasses import dataclass

import pulumi

from infra.components.compute.alb import AlbComponent, AlbOutputs
from infra.components.compute.ecs import EcsComponent, EcsOutputs
from infra.components.networking.security_groups import SecurityGroupsComponent
from infra.components.networking.vpc import VpcComponent, VpcOutputs
from infra.components.security.iam_roles import IamRolesComponent
from infra.components.storage.ecr_repository import EcrRepositoryComponent, EcrRepositoryOutputs
from infra.configs.base import StackConfig
from infra.graph.declaration import plan_declaration
from infra.graph.graph import ResourceGraph
from infra.graph.models import ResourceKind
from infra.utils.naming import ResourceNamer


@dataclass
class StackOutputs:
    """Outputs of every component in the stack."""
    vpc: VpcOutputs
    ecr: EcrRepositoryOutputs
    alb: AlbOutputs
    ecs: EcsOutputs

    def exports(self) -> dict[str, pulumi.Input]:
        """Values exported from the Pulumi stack (consumed by the pipeline secrets)."""
        return {
            "vpc_id": self.vpc.vpc_id,
            "subnet_ids": self.vpc.subnet_ids,
            "ecr_repository_url": self.ecr.repository_url,
            "ecr_repository_name": self.ecr.repository_name,
            "alb_dns_name": self.alb.alb_dns_name,
            "ecs_cluster_name": self.ecs.cluster_name,
            "ecs_service_name": self.ecs.service_name,
            "ecs_task_definition_family": self.ecs.task_definition_family,
        }


def build_stack(config: StackConfig, graph: ResourceGraph | None = None) -> StackOutputs:
    """
    Create every component of the stack from a declaration.

    Args:
        config: Stack configuration
        graph: Validated declaration; planned from `config` when omitted

    Returns:
        StackOutputs: Output values of all components

    Raises:
        DeclarationError: If the declaration is invalid (before any resource is created)
    """
    if graph is None:
        graph = plan_declaration(config)

    namer = ResourceNamer(project=config.project, environment=config.environment)
    base_name = namer.name("")[:-1]

    pulumi.log.info("Creation order: " + ", ".join(graph.creation_order()))

    subnets = graph.of_kind(ResourceKind.SUBNET)

    # --- Layer 1: Networking ---
    vpc = VpcComponent(
        name=base_name,
        environment=config.environment,
        cidr_block=graph.attribute("network", "cidr_block"),
        subnet_cidrs=[s.attributes["cidr_block"] for s in subnets],
        availability_zones=[s.attributes["availability_zone"] for s in subnets],
    )
    vpc_outputs = vpc.get_outputs()

    security_groups = SecurityGroupsComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
        listener_port=graph.attribute("listener", "port"),
        container_port=graph.attribute("target-group", "port"),
    )
    sg_outputs = security_groups.get_outputs()

    # --- Layer 2: Execution role, image registry ---
    iam_roles = IamRolesComponent(
        name=base_name,
        environment=config.environment,
        assume_role_policy=graph.attribute("execution-role", "assume_role_policy"),
        managed_policy_arns=graph.attribute("execution-role", "managed_policy_arns"),
    )
    iam_outputs = iam_roles.get_outputs()

    ecr_repository = EcrRepositoryComponent(
        name=base_name,
        environment=config.environment,
        repository_name=config.repository_name,
    )
    ecr_outputs = ecr_repository.get_outputs()

    # --- Layer 3: Load balancer chain ---
    alb = AlbComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
        subnet_ids=vpc_outputs.subnet_ids,
        security_group_id=sg_outputs.service_sg_id,
        load_balancer_name=graph.attribute("load-balancer", "name"),
        target_group_name=graph.attribute("target-group", "name"),
        listener_port=graph.attribute("listener", "port"),
        target_port=graph.attribute("target-group", "port"),
        target_type=graph.attribute("target-group", "target_type"),
        health_check_path=graph.attribute("target-group", "health_check_path"),
        deletion_protection=config.is_production,
    )
    alb_outputs = alb.get_outputs()

    # --- Layer 4: Cluster, task definition, service ---
    ecs = EcsComponent(
        name=base_name,
        environment=config.environment,
        region=config.region,
        cluster_name=graph.attribute("cluster", "name"),
        service_name=graph.attribute("service", "name"),
        family=graph.attribute("task-definition", "family"),
        container_name=graph.attribute("task-definition", "container_name"),
        image=pulumi.Output.concat(ecr_outputs.repository_url, ":", config.image_tag),
        cpu=graph.attribute("task-definition", "cpu"),
        memory=graph.attribute("task-definition", "memory"),
        container_port=graph.attribute("service", "container_port"),
        desired_count=graph.attribute("service", "desired_count"),
        execution_role_arn=iam_outputs.execution_role_arn,
        subnet_ids=vpc_outputs.subnet_ids,
        security_group_id=sg_outputs.service_sg_id,
        target_group_arn=alb_outputs.target_group_arn,
        # Target group must be attached to the ALB before tasks register
        depends_on=[alb.listener],
    )

    return StackOutputs(
        vpc=vpc_outputs,
        ecr=ecr_outputs,
        alb=alb_outputs,
        ecs=ecs.get_outputs(),
    )
