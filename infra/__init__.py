"""
Pulumi infrastructure-as-code for the Medusa service on ECS Fargate.

This package defines AWS infrastructure including:
- VPC with two public subnets, internet gateway and routing
- Security group shared by the load balancer and tasks
- ECR repository for the service image
- ECS cluster, task execution role, task definition and service
- Application Load Balancer, listener and IP target group

The declaration itself lives in infra.graph and is validated before any
provider call is made.
"""
