"""
Tests for the declared ECS stack.

Covers the concrete values the stack must declare and the plan-time
checks that reject an invalid declaration before provisioning.
"""

from dataclasses import replace

import pytest

from infra.configs.base import StackConfig
from infra.graph.declaration import build_declaration, plan_declaration, validate_attributes
from infra.graph.errors import DeclarationError, InvalidAttributeError
from infra.graph.graph import ResourceGraph
from infra.graph.models import Reference, ResourceDescriptor, ResourceKind


def _rebuild(graph: ResourceGraph, name: str, **changes) -> ResourceGraph:
    """Copy of the graph with one descriptor swapped for a modified version."""
    rebuilt = ResourceGraph()
    for descriptor in graph:
        if descriptor.name == name:
            descriptor = replace(descriptor, **changes)
        rebuilt.add(descriptor)
    return rebuilt


class TestDeclaredNetwork:
    """Network, subnets and routing."""

    def test_network_block(self, declaration):
        assert declaration.attribute("network", "cidr_block") == "10.0.0.0/16"

    def test_two_subnets_from_cidrsubnet(self, declaration):
        """Subnet i gets cidrsubnet(10.0.0.0/16, 8, i + 1)."""
        subnets = declaration.of_kind(ResourceKind.SUBNET)

        assert [s.attributes["cidr_block"] for s in subnets] == ["10.0.1.0/24", "10.0.2.0/24"]
        assert [s.attributes["availability_zone"] for s in subnets] == ["us-east-1a", "us-east-1b"]

    def test_default_route_to_gateway(self, declaration):
        route = declaration.get("default-route")

        assert route.attributes["destination_cidr_block"] == "0.0.0.0/0"
        assert route.targets("gateway_id") == ("internet-gateway",)
        assert route.targets("route_table_id") == ("route-table",)

    def test_every_subnet_associated(self, declaration):
        associated = {
            a.targets("subnet_id")[0]
            for a in declaration.of_kind(ResourceKind.ROUTE_ASSOCIATION)
        }

        assert associated == {"subnet-0", "subnet-1"}

    def test_zones_assigned_round_robin(self):
        config = StackConfig(environment="dev", subnet_count=3, availability_zones=("a", "b"))

        graph = plan_declaration(config)

        zones = [s.attributes["availability_zone"] for s in graph.of_kind(ResourceKind.SUBNET)]
        assert zones == ["a", "b", "a"]


class TestDeclaredWorkload:
    """Cluster, task definition, service and load balancing."""

    def test_task_definition_sizing(self, declaration):
        task = declaration.get("task-definition")

        assert task.attributes["cpu"] == 256
        assert task.attributes["memory"] == 512
        assert task.attributes["network_mode"] == "awsvpc"
        assert task.attributes["requires_compatibilities"] == ("FARGATE",)

    def test_container_port_bound_one_to_one(self, declaration):
        mappings = declaration.attribute("task-definition", "port_mappings")

        assert mappings == ({"container_port": 8080, "host_port": 8080},)

    def test_service_desired_count(self, declaration):
        assert declaration.attribute("service", "desired_count") == 1

    def test_listener_forwards_to_target_group(self, declaration):
        listener = declaration.get("listener")

        assert listener.attributes["port"] == 80
        assert listener.attributes["protocol"] == "HTTP"
        assert listener.attributes["action"] == "forward"
        assert listener.targets("target_group_arn") == ("target-group",)

    def test_target_group_uses_ip_targets(self, declaration):
        group = declaration.get("target-group")

        assert group.attributes["port"] == 8080
        assert group.attributes["target_type"] == "ip"

    def test_load_balancer_spans_all_subnets(self, declaration):
        assert declaration.get("load-balancer").targets("subnets") == ("subnet-0", "subnet-1")

    def test_elb_names_fit_limit(self):
        config = StackConfig(environment="production", project="a-very-long-project-name-indeed")

        graph = plan_declaration(config)

        assert len(graph.attribute("load-balancer", "name")) <= 32
        assert len(graph.attribute("target-group", "name")) <= 32
        assert graph.attribute("target-group", "name").endswith("-production-tg")


class TestCreationOrder:
    """The declared stack orders correctly."""

    def test_network_first(self, declaration):
        assert declaration.creation_order()[0] == "network"

    def test_service_after_listener(self, declaration):
        order = declaration.creation_order()

        assert order.index("listener") < order.index("service")
        assert order.index("target-group") < order.index("listener")
        assert order.index("load-balancer") < order.index("listener")
        assert order[-1] == "service"

    def test_all_resources_ordered(self, declaration):
        assert sorted(declaration.creation_order()) == sorted(declaration.names)
        assert len(declaration) == 16


class TestPlanTimeChecks:
    """Invalid declarations are rejected before provisioning."""

    def test_invalid_fargate_size(self):
        with pytest.raises(InvalidAttributeError, match="Fargate"):
            plan_declaration(StackConfig(environment="dev", task_memory=4096))

    def test_port_out_of_range(self):
        with pytest.raises(InvalidAttributeError, match="out of range"):
            plan_declaration(StackConfig(environment="dev", container_port=70000))

    def test_negative_desired_count(self):
        with pytest.raises(InvalidAttributeError, match="desired_count"):
            plan_declaration(StackConfig(environment="dev", desired_count=-1))

    def test_no_subnets(self):
        with pytest.raises(InvalidAttributeError):
            build_declaration(StackConfig(environment="dev", subnet_count=0))

    def test_no_zones(self):
        with pytest.raises(InvalidAttributeError):
            build_declaration(StackConfig(environment="dev", availability_zones=()))

    def test_subnet_outside_network(self, declaration):
        graph = _rebuild(declaration, "subnet-1", attributes={
            **declaration.get("subnet-1").attributes,
            "cidr_block": "192.168.0.0/24",
        })

        with pytest.raises(InvalidAttributeError, match="outside"):
            validate_attributes(graph)

    def test_overlapping_subnets(self, declaration):
        graph = _rebuild(declaration, "subnet-1", attributes={
            **declaration.get("subnet-1").attributes,
            "cidr_block": "10.0.1.128/25",
        })

        with pytest.raises(InvalidAttributeError, match="overlapping"):
            validate_attributes(graph)

    def test_instance_target_type_rejected_for_awsvpc(self, declaration):
        graph = _rebuild(declaration, "target-group", attributes={
            **declaration.get("target-group").attributes,
            "target_type": "instance",
        })

        with pytest.raises(InvalidAttributeError, match="target_type"):
            validate_attributes(graph)

    def test_reference_to_wrong_kind(self, declaration):
        """
        Arrange: Listener forwards to the cluster instead of a target group
        Act: validate_attributes
        Assert: Rejected naming the expected kind
        """
        graph = _rebuild(declaration, "listener", references=(
            Reference("load_balancer_arn", "load-balancer"),
            Reference("target_group_arn", "cluster"),
        ))

        with pytest.raises(InvalidAttributeError, match="target_group"):
            validate_attributes(graph)

    def test_listener_without_target_group(self, declaration):
        graph = _rebuild(declaration, "listener", references=(
            Reference("load_balancer_arn", "load-balancer"),
        ))

        with pytest.raises(InvalidAttributeError, match="exactly one"):
            validate_attributes(graph)

    def test_errors_share_base_class(self):
        with pytest.raises(DeclarationError):
            plan_declaration(StackConfig(environment="dev", task_cpu=300))

    def test_missing_attribute_is_a_declaration_error(self):
        """A descriptor lacking a checked attribute is rejected, not a KeyError."""
        graph = ResourceGraph([
            ResourceDescriptor("td", ResourceKind.TASK_DEFINITION, {"cpu": 256, "memory": 512}),
        ])

        with pytest.raises(InvalidAttributeError, match="port_mappings"):
            validate_attributes(graph)

    def test_missing_target_type_is_a_declaration_error(self, declaration):
        attributes = dict(declaration.get("target-group").attributes)
        del attributes["target_type"]
        graph = _rebuild(declaration, "target-group", attributes=attributes)

        with pytest.raises(DeclarationError, match="target_type"):
            validate_attributes(graph)
