"""
VPC Component Resource for Network Infrastructure.

Steps & Architecture:
1. VPC (10.0.0.0/16): the isolated network container, root of the stack.
2. Internet Gateway (IGW): egress/ingress path for the public subnets.
3. Subnets: one per declared block, cidrsubnet(VPC, 8, i + 1)
   - Subnet 0 (10.0.1.0/24) in the first zone.
   - Subnet 1 (10.0.2.0/24) in the second zone.
   Both auto-assign public IPs: Fargate tasks pull their image over the IGW.
4. Route Table: one table with an explicit 0.0.0.0/0 -> IGW route.
5. Associations: every subnet is bound to that table.

The load balancer needs subnets in at least two zones, which is why the
default declaration has two.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.utils.tags import create_tags


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    subnet_ids: list[pulumi.Output[str]]
    internet_gateway_id: pulumi.Output[str]
    route_table_id: pulumi.Output[str]


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with public subnets and an internet route.

    Creates the network, one subnet per CIDR block, an internet gateway,
    a route table with a default route to it, and the associations.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        cidr_block: str,
        subnet_cidrs: list[str],
        availability_zones: list[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=cidr_block,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=create_tags(environment, f"{name}-vpc", component="networking"),
            opts=child_opts,
        )

        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=create_tags(environment, f"{name}-igw", component="networking"),
            opts=child_opts,
        )

        self.subnets: list[aws.ec2.Subnet] = []
        for index, (subnet_cidr, zone) in enumerate(zip(subnet_cidrs, availability_zones)):
            self.subnets.append(aws.ec2.Subnet(
                f"{name}-subnet-{index}",
                vpc_id=self.vpc.id,
                cidr_block=subnet_cidr,
                availability_zone=zone,
                map_public_ip_on_launch=True,
                tags=create_tags(environment, f"{name}-subnet-{index}", component="networking"),
                opts=child_opts,
            ))

        self._create_route_table(name, child_opts)

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "subnet_ids": [subnet.id for subnet in self.subnets],
            "internet_gateway_id": self.igw.id,
            "route_table_id": self.route_table.id,
        })

    def _create_route_table(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create the public route table, its default route and associations."""
        self.route_table = aws.ec2.RouteTable(
            f"{name}-public-rt",
            vpc_id=self.vpc.id,
            tags=create_tags(self.environment, f"{name}-public-rt", component="networking"),
            opts=opts,
        )

        # Separate Route resource so the route is tracked on its own
        self.default_route = aws.ec2.Route(
            f"{name}-default-route",
            route_table_id=self.route_table.id,
            destination_cidr_block="0.0.0.0/0",
            gateway_id=self.igw.id,
            opts=opts,
        )

        self.route_associations = [
            aws.ec2.RouteTableAssociation(
                f"{name}-rt-assoc-{index}",
                subnet_id=subnet.id,
                route_table_id=self.route_table.id,
                opts=opts,
            )
            for index, subnet in enumerate(self.subnets)
        ]

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            subnet_ids=[subnet.id for subnet in self.subnets],
            internet_gateway_id=self.igw.id,
            route_table_id=self.route_table.id,
        )
