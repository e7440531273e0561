"""
Declaration of the Medusa ECS stack as a resource graph.

Steps & Architecture:
1. Network (10.0.0.0/16): root of the graph.
2. Subnets: subnet i gets cidrsubnet(network, 8, i + 1), zones round-robin.
3. Egress path: internet gateway, one route table with 0.0.0.0/0 -> gateway,
   one association per subnet.
4. Security group: shared by the load balancer and the tasks.
5. Cluster + execution role + task definition (Fargate, awsvpc).
6. Traffic chain: load balancer -> listener (80/HTTP) -> target group
   (8080, target type ip) <- service registers its tasks.

The result is desired state only. `plan_declaration` builds it and runs
every plan-time check so that a bad declaration fails before the
provisioning engine is called.
"""

import json
import logging

from infra.configs.base import StackConfig
from infra.configs.constants import (
    ECS_TASK_EXECUTION_POLICY_ARN,
    FARGATE_MEMORY_BY_CPU,
    HEALTH_CHECK_PATH,
    SUBNET_NEWBITS,
)
from infra.graph.cidr import block_contains, blocks_overlap, cidrsubnet
from infra.graph.errors import InvalidAttributeError
from infra.graph.graph import ResourceGraph
from infra.graph.models import Reference, ResourceDescriptor, ResourceKind
from infra.utils.naming import ResourceNamer

logger = logging.getLogger(__name__)

# Expected kind of the target for each (owner kind, attribute) edge
REFERENCE_KINDS: dict[tuple[ResourceKind, str], ResourceKind] = {
    (ResourceKind.SUBNET, "vpc_id"): ResourceKind.NETWORK,
    (ResourceKind.INTERNET_GATEWAY, "vpc_id"): ResourceKind.NETWORK,
    (ResourceKind.ROUTE_TABLE, "vpc_id"): ResourceKind.NETWORK,
    (ResourceKind.ROUTE, "route_table_id"): ResourceKind.ROUTE_TABLE,
    (ResourceKind.ROUTE, "gateway_id"): ResourceKind.INTERNET_GATEWAY,
    (ResourceKind.ROUTE_ASSOCIATION, "subnet_id"): ResourceKind.SUBNET,
    (ResourceKind.ROUTE_ASSOCIATION, "route_table_id"): ResourceKind.ROUTE_TABLE,
    (ResourceKind.SECURITY_GROUP, "vpc_id"): ResourceKind.NETWORK,
    (ResourceKind.TASK_DEFINITION, "execution_role_arn"): ResourceKind.EXECUTION_ROLE,
    (ResourceKind.LOAD_BALANCER, "subnets"): ResourceKind.SUBNET,
    (ResourceKind.LOAD_BALANCER, "security_groups"): ResourceKind.SECURITY_GROUP,
    (ResourceKind.TARGET_GROUP, "vpc_id"): ResourceKind.NETWORK,
    (ResourceKind.LISTENER, "load_balancer_arn"): ResourceKind.LOAD_BALANCER,
    (ResourceKind.LISTENER, "target_group_arn"): ResourceKind.TARGET_GROUP,
    (ResourceKind.SERVICE, "cluster"): ResourceKind.CLUSTER,
    (ResourceKind.SERVICE, "task_definition"): ResourceKind.TASK_DEFINITION,
    (ResourceKind.SERVICE, "subnets"): ResourceKind.SUBNET,
    (ResourceKind.SERVICE, "security_groups"): ResourceKind.SECURITY_GROUP,
    (ResourceKind.SERVICE, "target_group_arn"): ResourceKind.TARGET_GROUP,
    (ResourceKind.SERVICE, "depends_on"): ResourceKind.LISTENER,
}


def subnet_name(index: int) -> str:
    return f"subnet-{index}"


def build_declaration(config: StackConfig) -> ResourceGraph:
    """
    Declare every resource of the stack.

    Args:
        config: Stack configuration

    Returns:
        ResourceGraph: Declaration set (not yet validated)

    Raises:
        InvalidAttributeError: If no subnet or zone is configured, or a subnet block does not exist
    """
    if config.subnet_count < 1:
        raise InvalidAttributeError(f"subnet_count must be >= 1, got {config.subnet_count}")
    if not config.availability_zones:
        raise InvalidAttributeError("At least one availability zone is required")

    namer = ResourceNamer(project=config.project, environment=config.environment)
    graph = ResourceGraph()

    network = graph.add(ResourceDescriptor(
        name="network",
        kind=ResourceKind.NETWORK,
        attributes={
            "name": namer.name("vpc"),
            "cidr_block": config.vpc_cidr,
            "enable_dns_support": True,
            "enable_dns_hostnames": True,
        },
    ))

    subnets = []
    for index in range(config.subnet_count):
        zone = config.availability_zones[index % len(config.availability_zones)]
        subnets.append(graph.add(ResourceDescriptor(
            name=subnet_name(index),
            kind=ResourceKind.SUBNET,
            attributes={
                "name": namer.name(f"subnet-{index}"),
                "cidr_block": cidrsubnet(config.vpc_cidr, SUBNET_NEWBITS, index + 1),
                "availability_zone": zone,
                "map_public_ip_on_launch": True,
            },
            references=(Reference("vpc_id", network.name),),
        )))

    igw = graph.add(ResourceDescriptor(
        name="internet-gateway",
        kind=ResourceKind.INTERNET_GATEWAY,
        attributes={"name": namer.name("igw")},
        references=(Reference("vpc_id", network.name),),
    ))

    route_table = graph.add(ResourceDescriptor(
        name="route-table",
        kind=ResourceKind.ROUTE_TABLE,
        attributes={"name": namer.name("public-rt")},
        references=(Reference("vpc_id", network.name),),
    ))

    graph.add(ResourceDescriptor(
        name="default-route",
        kind=ResourceKind.ROUTE,
        attributes={"destination_cidr_block": "0.0.0.0/0"},
        references=(
            Reference("route_table_id", route_table.name),
            Reference("gateway_id", igw.name),
        ),
    ))

    for index, subnet in enumerate(subnets):
        graph.add(ResourceDescriptor(
            name=f"route-association-{index}",
            kind=ResourceKind.ROUTE_ASSOCIATION,
            references=(
                Reference("subnet_id", subnet.name),
                Reference("route_table_id", route_table.name),
            ),
        ))

    security_group = graph.add(ResourceDescriptor(
        name="security-group",
        kind=ResourceKind.SECURITY_GROUP,
        attributes={
            "name": namer.name("sg"),
            "ingress": (
                {"protocol": "tcp", "port": config.listener_port, "source": "0.0.0.0/0"},
                {"protocol": "tcp", "port": config.container_port, "source": "self"},
            ),
            "egress": ({"protocol": "-1", "destination": "0.0.0.0/0"},),
        },
        references=(Reference("vpc_id", network.name),),
    ))

    cluster = graph.add(ResourceDescriptor(
        name="cluster",
        kind=ResourceKind.CLUSTER,
        attributes={"name": namer.name("cluster")},
    ))

    execution_role = graph.add(ResourceDescriptor(
        name="execution-role",
        kind=ResourceKind.EXECUTION_ROLE,
        attributes={
            "name": namer.name("task-execution-role"),
            "assume_role_policy": json.dumps({
                "Version": "2012-10-17",
                "Statement": [{
                    "Effect": "Allow",
                    "Principal": {"Service": "ecs-tasks.amazonaws.com"},
                    "Action": "sts:AssumeRole",
                }],
            }),
            "managed_policy_arns": (ECS_TASK_EXECUTION_POLICY_ARN,),
        },
    ))

    task_definition = graph.add(ResourceDescriptor(
        name="task-definition",
        kind=ResourceKind.TASK_DEFINITION,
        attributes={
            "family": namer.name("task"),
            "requires_compatibilities": ("FARGATE",),
            "network_mode": "awsvpc",
            "cpu": config.task_cpu,
            "memory": config.task_memory,
            "container_name": config.container_name,
            "image": f"{config.repository_name}:{config.image_tag}",
            "port_mappings": (
                {"container_port": config.container_port, "host_port": config.container_port},
            ),
        },
        references=(Reference("execution_role_arn", execution_role.name),),
    ))

    load_balancer = graph.add(ResourceDescriptor(
        name="load-balancer",
        kind=ResourceKind.LOAD_BALANCER,
        attributes={
            "name": namer.elb_name("alb"),
            "load_balancer_type": "application",
            "internal": False,
        },
        references=(
            *(Reference("subnets", s.name) for s in subnets),
            Reference("security_groups", security_group.name),
        ),
    ))

    target_group = graph.add(ResourceDescriptor(
        name="target-group",
        kind=ResourceKind.TARGET_GROUP,
        attributes={
            "name": namer.elb_name("tg"),
            "port": config.container_port,
            "protocol": "HTTP",
            "target_type": "ip",
            "health_check_path": HEALTH_CHECK_PATH,
        },
        references=(Reference("vpc_id", network.name),),
    ))

    listener = graph.add(ResourceDescriptor(
        name="listener",
        kind=ResourceKind.LISTENER,
        attributes={
            "port": config.listener_port,
            "protocol": "HTTP",
            "action": "forward",
        },
        references=(
            Reference("load_balancer_arn", load_balancer.name),
            Reference("target_group_arn", target_group.name),
        ),
    ))

    graph.add(ResourceDescriptor(
        name="service",
        kind=ResourceKind.SERVICE,
        attributes={
            "name": namer.name("service"),
            "launch_type": "FARGATE",
            "desired_count": config.desired_count,
            "assign_public_ip": True,
            "container_name": config.container_name,
            "container_port": config.container_port,
        },
        references=(
            Reference("cluster", cluster.name),
            Reference("task_definition", task_definition.name),
            *(Reference("subnets", s.name) for s in subnets),
            Reference("security_groups", security_group.name),
            Reference("target_group_arn", target_group.name),
            Reference("depends_on", listener.name),
        ),
    ))

    return graph


def _check_port(resource: str, port: object) -> None:
    if not isinstance(port, int) or isinstance(port, bool) or not 1 <= port <= 65535:
        raise InvalidAttributeError(f"{resource}: port {port!r} out of range 1-65535", resource=resource)


def validate_attributes(graph: ResourceGraph) -> None:
    """
    Plan-time checks on declared attribute values.

    Args:
        graph: Declaration set whose references already resolve

    Raises:
        InvalidAttributeError: On the first invalid value found
    """
    for descriptor in graph:
        for ref in descriptor.references:
            expected = REFERENCE_KINDS.get((descriptor.kind, ref.attribute))
            actual = graph.get(ref.target).kind
            if expected is not None and actual != expected:
                raise InvalidAttributeError(
                    f"{descriptor.name}.{ref.attribute} must reference a "
                    f"{expected.value}, got {actual.value} '{ref.target}'",
                    resource=descriptor.name,
                )

    networks = graph.of_kind(ResourceKind.NETWORK)
    for network in networks:
        network_block = graph.attribute(network.name, "cidr_block")
        subnets = [
            s for s in graph.of_kind(ResourceKind.SUBNET)
            if s.targets("vpc_id") == (network.name,)
        ]
        for i, subnet in enumerate(subnets):
            block = graph.attribute(subnet.name, "cidr_block")
            if not block_contains(network_block, block):
                raise InvalidAttributeError(
                    f"{subnet.name}: {block} is outside network block {network_block}",
                    resource=subnet.name,
                )
            for other in subnets[i + 1:]:
                if blocks_overlap(block, graph.attribute(other.name, "cidr_block")):
                    raise InvalidAttributeError(
                        f"{subnet.name} and {other.name} have overlapping blocks",
                        resource=subnet.name,
                    )

    for task in graph.of_kind(ResourceKind.TASK_DEFINITION):
        cpu, memory = graph.attribute(task.name, "cpu"), graph.attribute(task.name, "memory")
        if memory not in FARGATE_MEMORY_BY_CPU.get(cpu, ()):
            raise InvalidAttributeError(
                f"{task.name}: cpu={cpu} memory={memory} is not a valid Fargate size",
                resource=task.name,
            )
        for mapping in graph.attribute(task.name, "port_mappings"):
            _check_port(task.name, mapping.get("container_port"))
            if mapping.get("host_port") != mapping.get("container_port"):
                raise InvalidAttributeError(
                    f"{task.name}: awsvpc requires host port == container port",
                    resource=task.name,
                )

    for group in graph.of_kind(ResourceKind.TARGET_GROUP):
        _check_port(group.name, graph.attribute(group.name, "port"))

    for service in graph.of_kind(ResourceKind.SERVICE):
        count = graph.attribute(service.name, "desired_count")
        if not isinstance(count, int) or count < 0:
            raise InvalidAttributeError(
                f"{service.name}: desired_count must be >= 0, got {count!r}",
                resource=service.name,
            )
        _check_port(service.name, graph.attribute(service.name, "container_port"))
        for task_name in service.targets("task_definition"):
            if graph.attribute(task_name, "network_mode") != "awsvpc":
                continue
            for group_name in service.targets("target_group_arn"):
                target_type = graph.attribute(group_name, "target_type")
                if target_type != "ip":
                    raise InvalidAttributeError(
                        f"{group_name}: awsvpc tasks need target_type 'ip', got '{target_type}'",
                        resource=group_name,
                    )

    for listener in graph.of_kind(ResourceKind.LISTENER):
        _check_port(listener.name, graph.attribute(listener.name, "port"))
        targets = listener.targets("target_group_arn")
        if len(targets) != 1:
            raise InvalidAttributeError(
                f"{listener.name}: must forward to exactly one target group, got {len(targets)}",
                resource=listener.name,
            )


def plan_declaration(config: StackConfig) -> ResourceGraph:
    """
    Build the declaration and run every plan-time check.

    Args:
        config: Stack configuration

    Returns:
        ResourceGraph: Validated declaration set

    Raises:
        DeclarationError: If the declaration is not closed, acyclic and valid
    """
    graph = build_declaration(config)
    graph.validate()
    validate_attributes(graph)
    logger.info(
        "Planned %d resources for %s-%s",
        len(graph), config.project, config.environment,
    )
    return graph
