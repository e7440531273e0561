"""
Tag factory for AWS resources.

Every taggable resource in the stack carries the project defaults, its
environment, its name and the component that owns it.
"""

from infra.configs.constants import DEFAULT_TAGS


def create_tags(
    environment: str,
    resource_name: str,
    component: str | None = None,
    **extra_tags: str,
) -> dict[str, str]:
    """
    Build the tag set for one resource.

    Args:
        environment: Deployment environment
        resource_name: Value of the Name tag
        component: Owning component (e.g., 'networking', 'compute'); omitted when None
        **extra_tags: Additional tags, overriding the defaults

    Returns:
        Dictionary of tags
    """
    tags = {**DEFAULT_TAGS, "Environment": environment, "Name": resource_name}
    if component:
        tags["Component"] = component
    return {**tags, **extra_tags}
