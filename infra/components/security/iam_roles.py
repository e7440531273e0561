"""
IAM roles component for ECS tasks.

Creates:
- Task execution role trusted by ecs-tasks.amazonaws.com, used by the ECS
  agent to pull the image from ECR and ship container logs
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.configs.constants import ECS_TASK_EXECUTION_POLICY_ARN
from infra.utils.tags import create_tags


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    execution_role_arn: pulumi.Output[str]
    execution_role_name: pulumi.Output[str]


class IamRolesComponent(pulumi.ComponentResource):
    """Task execution role for the ECS service."""

    def __init__(
        self,
        name: str,
        environment: str,
        assume_role_policy: str,
        managed_policy_arns: tuple[str, ...] = (ECS_TASK_EXECUTION_POLICY_ARN,),
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.execution_role = aws.iam.Role(
            f"{name}-task-execution-role",
            assume_role_policy=assume_role_policy,
            tags=create_tags(environment, f"{name}-task-execution-role", component="security"),
            opts=child_opts,
        )

        for index, policy_arn in enumerate(managed_policy_arns):
            aws.iam.RolePolicyAttachment(
                f"{name}-task-execution-policy-{index}",
                role=self.execution_role.name,
                policy_arn=policy_arn,
                opts=child_opts,
            )

        self.register_outputs({
            "execution_role_arn": self.execution_role.arn,
            "execution_role_name": self.execution_role.name,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            execution_role_arn=self.execution_role.arn,
            execution_role_name=self.execution_role.name,
        )
