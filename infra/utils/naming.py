"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass

# Load balancers and target groups reject names longer than this
ELB_NAME_MAX_LENGTH = 32


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'vpc', 'sg')

        Returns:
            Formatted resource name
        """
        return f"{self.project}-{self.environment}-{resource}"

    def elb_name(self, resource: str) -> str:
        """
        Generate a load balancer or target group name.

        Truncates the project part so the result fits the 32 character limit
        while keeping the environment and resource suffix intact.

        Args:
            resource: Resource identifier (e.g., 'alb', 'tg')

        Returns:
            Name of at most 32 characters
        """
        suffix = f"-{self.environment}-{resource}"
        room = ELB_NAME_MAX_LENGTH - len(suffix)
        return f"{self.project[:max(room, 0)]}{suffix}"[:ELB_NAME_MAX_LENGTH]
