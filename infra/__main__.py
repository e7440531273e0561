"""
Pulumi program entry point for the Medusa ECS stack.

1. Load stack configuration
2. Build and validate the resource declaration (fails before any provider call)
3. Instantiate components in dependency order
4. Export the values the deployment pipeline needs
"""

import pulumi

from infra.configs.environment import get_config
from infra.graph.declaration import plan_declaration
from infra.graph.errors import DeclarationError
from infra.stack import build_stack


def main() -> None:
    """Deploy the Medusa ECS stack."""
    config = get_config()

    try:
        graph = plan_declaration(config)
    except DeclarationError as e:
        pulumi.log.error(f"Invalid resource declaration: {e.message}")
        raise

    outputs = build_stack(config, graph)

    for key, value in outputs.exports().items():
        pulumi.export(key, value)

    pulumi.log.info(f"✓ Declared {len(graph)} resources for {config.environment}")


# Execute
main()
