"""
Pulumi component resources for the Medusa ECS stack.

Each submodule provides reusable ComponentResource classes:
- networking: VPC, subnets, routing, security group
- compute: ECS cluster/task definition/service, load balancer
- storage: ECR repository
- security: IAM task execution role
"""
