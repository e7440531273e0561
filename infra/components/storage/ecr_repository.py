"""
ECR Repository Component for the service image.

Integration Flow:
  1. CI pushes to main and runs `python -m deploy run`.
  2. The pipeline authenticates with ECR and builds the image.
  3. It tags the image <ACCOUNT>.dkr.ecr.<REGION>.amazonaws.com/<REPO>:latest
     and pushes it here.
  4. The deploy step registers a task definition revision pointing at the
     pushed image and updates the ECS service.

Key Features:
- scan_on_push=True: every pushed image is scanned for CVEs.
- Lifecycle Policy: keep only the most recent images.
- Tag mutability: MUTABLE, 'latest' is overwritten on each push.

Outputs:
  - repository_url: <ACCOUNT>.dkr.ecr.<REGION>.amazonaws.com/<REPO>
  - repository_arn: arn:aws:ecr:<REGION>:<ACCOUNT>:repository/<REPO>
  - repository_name: <REPO>
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.utils.tags import create_tags

IMAGES_TO_KEEP = 10


@dataclass
class EcrRepositoryOutputs:
    """Output values from ECR repository component."""
    repository_url: pulumi.Output[str]
    repository_arn: pulumi.Output[str]
    repository_name: pulumi.Output[str]


class EcrRepositoryComponent(pulumi.ComponentResource):
    """ECR repository the deployment pipeline pushes the service image to."""

    def __init__(
        self,
        name: str,
        environment: str,
        repository_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:EcrRepository", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.repository = aws.ecr.Repository(
            f"{name}-repo",
            name=repository_name,
            image_scanning_configuration=aws.ecr.RepositoryImageScanningConfigurationArgs(
                scan_on_push=True,
            ),
            image_tag_mutability="MUTABLE",
            encryption_configurations=[
                aws.ecr.RepositoryEncryptionConfigurationArgs(
                    encryption_type="AES256",
                ),
            ],
            tags=create_tags(environment, f"{name}-repo", component="storage"),
            opts=child_opts,
        )

        aws.ecr.LifecyclePolicy(
            f"{name}-repo-lifecycle",
            repository=self.repository.name,
            policy=json.dumps({
                "rules": [{
                    "rulePriority": 1,
                    "description": f"Keep last {IMAGES_TO_KEEP} images",
                    "selection": {
                        "tagStatus": "any",
                        "countType": "imageCountMoreThan",
                        "countNumber": IMAGES_TO_KEEP,
                    },
                    "action": {"type": "expire"},
                }],
            }),
            opts=child_opts,
        )

        self.register_outputs({
            "repository_url": self.repository.repository_url,
            "repository_arn": self.repository.arn,
            "repository_name": self.repository.name,
        })

    def get_outputs(self) -> EcrRepositoryOutputs:
        """Get ECR repository output values."""
        return EcrRepositoryOutputs(
            repository_url=self.repository.repository_url,
            repository_arn=self.repository.arn,
            repository_name=self.repository.name,
        )
